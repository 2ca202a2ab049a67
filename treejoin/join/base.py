"""
This module contains the structural types of the join engine: the element
values, which associate a node with its bound value, and the groups, which
gather the children of a parent node.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Iterator, TypeVar

from ..utility import Sentinel
from ..value import ValueBox

#: Type of the nodes of the tree. The engine never inspects them.
E = TypeVar("E")


class _Unbound(Sentinel):
    """
    Sentinel representing the absence of value, which is different from the
    `None` value.
    """

    pass


#: Can be given to `Group.add` in order to add an element without value.
unbound = _Unbound()


@dataclass
class ElementValue(Generic[E]):
    """
    Association of a node with its bound value. The node is only referenced:
    the engine never creates, modifies or removes it by itself.
    """

    element: E

    #: Boxed value bound to the element, or `None` if it is unbound.
    box: ValueBox | None = None

    @property
    def bound(self) -> bool:
        return self.box is not None

    @property
    def value(self) -> Any:
        """
        Value bound to the element, or `None` if it is unbound.
        """
        return None if self.box is None else self.box.value


@dataclass
class Group(Generic[E]):
    """
    A parent node, with an ordered list of children element values. All the
    elements of a group are siblings with respect to the join, and their order
    is significant.
    """

    parent: ElementValue[E]
    elements: list[ElementValue[E]] = field(default_factory=list)

    def add(self, element: E, value: Any = unbound) -> "Group[E]":
        """
        Add a child, bound to `value` unless it is `unbound`.
        """
        box = None if isinstance(value, _Unbound) else ValueBox(value)
        return self.add_value(element, box)

    def add_value(self, element: E, box: ValueBox | None) -> "Group[E]":
        """
        Add a child with an already boxed value, or `None`.
        """
        self.elements.append(ElementValue(element, box))
        return self

    def nodes(self) -> list[E]:
        return [ev.element for ev in self.elements]

    def values(self) -> list[Any]:
        return [ev.value for ev in self.elements]

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[ElementValue[E]]:
        return iter(self.elements)


class DuplicateKeyPolicy(Enum):
    """
    Behavior of a keyed join when several values share the same key.
    """

    #: The last value with a given key is kept, the previous ones are neither
    #: matched nor entered. A warning is logged.
    LAST = "LAST"

    #: Raise a `DuplicateKeyError`.
    ERROR = "ERROR"
