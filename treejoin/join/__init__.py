"""
This package contains the data join engine.

A `Selection` is made of `Group`s, each of them gathering the children of a
parent node, alongside the values bound to them. Joining data to a selection
with `Selection.data` matches the values with the elements of each group,
either by index or by key, and results in a `Join`:
 - its `update` selection contains the elements that matched a value, and are
   now bound to it;
 - its `enter` selection contains the values that did not match any element,
   and can create nodes for them;
 - its `exit` selection contains the elements that did not match any value, and
   can remove them.
"""

__all__ = [
    "DuplicateKeyPolicy",
    "E",
    "ElementValue",
    "EnterEntry",
    "EnterSelection",
    "ExitSelection",
    "Group",
    "Join",
    "JoinData",
    "Selection",
    "_Unbound",
    "unbound",
]

from .base import DuplicateKeyPolicy, E, ElementValue, Group, _Unbound, unbound
from .selection import (
    EnterEntry,
    EnterSelection,
    ExitSelection,
    Join,
    JoinData,
    Selection,
)
