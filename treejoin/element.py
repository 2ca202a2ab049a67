"""
This module defines `Element`, a minimal tree node which can be used with the
join engine. It is used for testing, and to demonstrate features. Any other
node type can be used, as long as the callbacks given to the engine know how to
handle it.
"""

from __future__ import annotations

from typing import Callable, Iterator

from .logging import logger

logger = logger.getChild("element")


class Element:
    """
    Tagged tree node with string attributes.

    Children are stored in slots. Removing a child empties its slot instead of
    deleting it, so that the `index` of its siblings does not change. The
    `children` property only iterates over the remaining children.
    """

    tag: str

    #: Parent element, or `None` for a root or a removed element.
    parent: Element | None

    #: Position of the element in the slots of its parent.
    index: int

    attributes: dict[str, str]

    #: Children slots, `None` for removed children.
    slots: list[Element | None]

    def __init__(self, tag: str, parent: Element | None = None, index: int = 0):
        self.tag = tag
        self.parent = parent
        self.index = index
        self.attributes = {}
        self.slots = []

    @property
    def children(self) -> Iterator[Element]:
        return (child for child in self.slots if child is not None)

    def append(self, tag: str) -> Element:
        """
        Create a new child, after the existing ones, and return it.
        """
        child = Element(tag, self, len(self.slots))
        self.slots.append(child)
        return child

    def attr(self, key: str, value: str | None = None) -> Element | str | None:
        """
        With a `value`, set attribute `key` and return the element. Otherwise,
        return the value of the attribute, or `None` if it is not set.
        """
        if value is None:
            return self.attributes.get(key)

        self.attributes[key] = value
        return self

    def remove(self):
        """
        Detach the element from its parent.
        """
        if self.parent is None:
            raise ValueError(f"Cannot remove {self!r}, which has no parent.")

        assert self.parent.slots[self.index] is self
        self.parent.slots[self.index] = None
        logger.debug(f"Removed {self!r} from slot {self.index} of {self.parent!r}.")
        self.parent = None

    def __repr__(self) -> str:
        return f"Element({self.tag!r})"


def tag_is(tag: str) -> Callable[[object], bool]:
    """
    Return a predicate matching the elements with the given tag.
    """

    def predicate(node: object) -> bool:
        return isinstance(node, Element) and node.tag == tag

    return predicate
