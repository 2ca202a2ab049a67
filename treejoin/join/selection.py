"""
This module defines the selections, and the data join which partitions a
selection into its update, enter and exit parts.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, Sequence

from ..errors import ConsumedViewError, DuplicateKeyError
from ..logging import logger
from ..traversal import IteratorFactory
from ..utility import format_selection
from .base import DuplicateKeyPolicy, E, ElementValue, Group

logger = logger.getChild("join")

#: Data given to a join: either a collection of values shared by all the
#: groups, or a function computing the values of a group from the value bound to
#: its parent.
JoinData = Iterable[Any] | Callable[[Any], Iterable[Any]]


class Selection(Generic[E]):
    """
    Ordered collection of groups, which is the result of a query or of a join.

    Selections are not meant to be modified by users: all the operations
    building a new structure (`select_all`, `data`, `append`) return a new
    selection. The only exception is `EnterSelection.append`, which adds the
    entered elements to the update selection of its join.
    """

    #: Groups of the selection, in insertion order.
    groups: list[Group[E]]

    def __init__(self, groups: list[Group[E]] | None = None) -> None:
        self.groups = [] if groups is None else groups

    @classmethod
    def single(cls, node: E) -> "Selection[E]":
        """
        Build a selection containing only `node`, in a group whose parent is
        `node` itself.
        """
        selection = cls()
        selection._group_add(node).add(node)
        return selection

    def _group_add(self, parent: ElementValue[E] | E) -> Group[E]:
        """
        Start a new group, with the given parent, and return it. The parent can
        be supplied as an element value, in which case its bound value is kept,
        or as a bare node.
        """
        if isinstance(parent, ElementValue):
            parent = ElementValue(parent.element, parent.box)
        else:
            parent = ElementValue(parent)

        group = Group(parent)
        self.groups.append(group)
        return group

    ### Inspection ###

    def size(self) -> int:
        """
        Number of elements in the selection, over all the groups.
        """
        return sum(len(group) for group in self.groups)

    def __len__(self) -> int:
        return self.size()

    def empty(self) -> bool:
        return self.size() == 0

    def nodes(self) -> list[E]:
        return [ev.element for group in self.groups for ev in group.elements]

    def values(self) -> list[Any]:
        """
        Values bound to the elements, `None` standing for unbound elements.
        """
        return [ev.value for group in self.groups for ev in group.elements]

    def __iter__(self) -> Iterator[tuple[E, Any]]:
        for group in self.groups:
            for ev in group.elements:
                yield ev.element, ev.value

    def __str__(self) -> str:
        return format_selection(self)

    ### Operations ###

    def append(self, append_function: Callable[[E], E]) -> "Selection[E]":
        """
        Call `append_function` once on the parent of each group, and return a
        selection with one group per parent, holding the single node returned
        by the function. The new nodes are unbound.
        """
        result: Selection[E] = Selection()
        for group in self.groups:
            new_node = append_function(group.parent.element)
            result._group_add(group.parent).add(new_node)

        return result

    def call(self, function: Callable[[E, Any], Any]) -> "Selection[E]":
        """
        Call `function(node, value)` on every element of the selection, group
        after group. Unbound elements are given a `None` value. The selection
        itself is returned, so that calls can be chained.
        """
        for group in self.groups:
            for ev in group.elements:
                function(ev.element, ev.value)

        return self

    def select_all(
        self, predicate: Callable[[E], bool], iterator_factory: IteratorFactory
    ) -> "Selection[E]":
        """
        For each element of the selection, create a group whose parent is the
        element (with its bound value), and containing the nodes generated by
        `iterator_factory(element)` which satisfy `predicate`.
        """
        result: Selection[E] = Selection()
        for group in self.groups:
            for ev in group.elements:
                new_group = result._group_add(ev)
                for node in iterator_factory(ev.element):
                    if predicate(node):
                        new_group.add(node)

        return result

    def data(
        self,
        values: JoinData,
        data_key: Callable[[Any], Any] | None = None,
        element_key: Callable[[E], Any] | None = None,
        duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST,
    ) -> "Join[E]":
        """
        Join data to the selection, and return the resulting update, enter and
        exit selections.

        `values` is either a collection of values, which is joined with each
        group, or a function computing the values of each group from the value
        bound to its parent (`None` if unbound). The latter is used to join
        nested data to nested selections.

        If `data_key` and `element_key` are supplied, values and elements are
        matched by key. Otherwise, they are matched by index. In both cases,
        the join is done independently in each group.
        """
        if (data_key is None) != (element_key is None):
            raise ValueError("data_key and element_key must be supplied together.")

        shared_values: list[Any] | None = None
        if not callable(values):
            shared_values = list(values)

        update: Selection[E] = Selection()
        enter: EnterSelection[E] = EnterSelection()
        exit: ExitSelection[E] = ExitSelection()

        for group in self.groups:
            if shared_values is None:
                assert callable(values)
                group_values = list(values(group.parent.value))
            else:
                group_values = shared_values

            update_group = update._group_add(group.parent)

            if data_key is None or element_key is None:
                self._join_by_index(group, group_values, update_group, enter, exit)
            else:
                key_to_value = self._key_values(group_values, data_key, duplicate_keys)
                self._join_by_key(
                    group, key_to_value, element_key, update_group, enter, exit
                )

        mode = "index" if data_key is None else "key"
        logger.debug(
            f"Joined {len(self.groups)} groups by {mode}: {len(update)} update, "
            f"{len(enter)} enter, {len(exit)} exit."
        )

        return Join(update, enter, exit)

    @staticmethod
    def _join_by_index(
        group: Group[E],
        values: list[Any],
        update_group: Group[E],
        enter: "EnterSelection[E]",
        exit: "ExitSelection[E]",
    ):
        matched = min(len(group.elements), len(values))
        for ev, value in zip(group.elements, values):
            update_group.add(ev.element, value)

        if matched < len(values):
            enter._add(update_group, values, matched)

        if matched < len(group.elements):
            exit_group = exit._group_add(group.parent)
            for ev in group.elements[matched:]:
                exit_group.add(ev.element)

    @staticmethod
    def _key_values(
        values: list[Any],
        data_key: Callable[[Any], Any],
        duplicate_keys: DuplicateKeyPolicy,
    ) -> dict[Any, Any]:
        """
        Map the keys of `values` to their value, keeping the iteration order of
        the values.
        """
        key_to_value: dict[Any, Any] = {}
        for value in values:
            key = data_key(value)
            if key in key_to_value:
                if duplicate_keys == DuplicateKeyPolicy.ERROR:
                    raise DuplicateKeyError(key)

                logger.warning(f"Overwriting the value of key {key!r}.")
                del key_to_value[key]

            key_to_value[key] = value

        return key_to_value

    @staticmethod
    def _join_by_key(
        group: Group[E],
        key_to_value: dict[Any, Any],
        element_key: Callable[[E], Any],
        update_group: Group[E],
        enter: "EnterSelection[E]",
        exit: "ExitSelection[E]",
    ):
        exit_group: Group[E] | None = None
        for ev in group.elements:
            key = element_key(ev.element)
            if key in key_to_value:
                update_group.add(ev.element, key_to_value.pop(key))
            else:
                if exit_group is None:
                    exit_group = exit._group_add(group.parent)

                exit_group.add(ev.element)

        if len(key_to_value) > 0:
            enter._add(update_group, list(key_to_value.values()), 0)


@dataclass(frozen=True)
class Join(Generic[E]):
    """
    Result of `Selection.data`. It can be unpacked as
    `update, enter, exit = selection.data(values)`.
    """

    #: Elements matched with a value, bound to it.
    update: Selection[E]

    #: Values without a matching element.
    enter: "EnterSelection[E]"

    #: Elements without a matching value.
    exit: "ExitSelection[E]"

    def __iter__(self) -> Iterator[Any]:
        return iter((self.update, self.enter, self.exit))


@dataclass
class EnterEntry(Generic[E]):
    """
    Values of a group which did not match any element. They are the values of
    `values` starting at position `start`.

    Index joins with shared data use the same `values` list for all the
    entries, and the number of matched elements as `start`. Other joins use a
    list per entry.
    """

    #: Update group the values enter into.
    group: Group[E]

    values: Sequence[Any]
    start: int

    def leftover(self) -> Sequence[Any]:
        return self.values[self.start :]


class EnterSelection(Generic[E]):
    """
    Values of a join which did not match any existing element, grouped by
    parent. Nodes are created for them using `append`.
    """

    entries: list[EnterEntry[E]]

    #: Whether `append` has already been called.
    consumed: bool

    def __init__(self) -> None:
        self.entries = []
        self.consumed = False

    def _add(self, group: Group[E], values: Sequence[Any], start: int):
        self.entries.append(EnterEntry(group, values, start))

    def data(self) -> list[list[Any]]:
        """
        Return the leftover values of each entry.
        """
        return [list(entry.leftover()) for entry in self.entries]

    def __len__(self) -> int:
        return sum(len(entry.values) - entry.start for entry in self.entries)

    def empty(self) -> bool:
        return len(self) == 0

    def append(self, append_function: Callable[[E, Any], E]) -> Selection[E]:
        """
        For each leftover value, create a node with
        `append_function(parent, value)`, and bind it to the value. The new
        elements are added to the group they enter into, and to the returned
        selection, which has one group per entry.

        It can only be called once.
        """
        if self.consumed:
            raise ConsumedViewError("Enter selection has already been appended.")

        self.consumed = True

        result: Selection[E] = Selection()
        for entry in self.entries:
            new_group = result._group_add(entry.group.parent)
            for value in entry.leftover():
                new_node = append_function(entry.group.parent.element, value)
                new_group.add(new_node, value)
                entry.group.add(new_node, value)

        logger.debug(f"Appended {len(result)} entering elements.")

        return result


class ExitSelection(Selection[E]):
    """
    Elements of a join which did not match any value. They are unbound.
    """

    #: Whether `remove` has already been called.
    removed: bool

    def __init__(self, groups: list[Group[E]] | None = None) -> None:
        super().__init__(groups)
        self.removed = False

    def remove(self, remove_function: Callable[[E], Any]) -> "ExitSelection[E]":
        """
        Call `remove_function` exactly once on each element, and then clear the
        groups. Detaching the nodes from the tree is the responsibility of
        `remove_function`.

        It can only be called once.
        """
        if self.removed:
            raise ConsumedViewError("Exit selection has already been removed.")

        self.removed = True

        count = 0
        for group in self.groups:
            for ev in group.elements:
                remove_function(ev.element)
                count += 1

            group.elements.clear()

        logger.debug(f"Removed {count} exiting elements.")

        return self
