"""
This module defines the `Document`, which is the entry point of the join engine.
"""

from typing import Callable, Generic

from .errors import NullRootError
from .join import E, Selection
from .logging import logger
from .traversal import IteratorFactory

logger = logger.getChild("document")


class Document(Generic[E]):
    """
    Tree on which selections are made. The document only references its root
    node, which is owned by the caller.

    >>> document = Document(root)
    >>> update, enter, exit = document.select_all(tag_is("a"), depth_first()).data(
    ...     [1, 2, 3]
    ... )
    >>> enter.append(lambda parent, value: parent.append("a"))
    """

    root: E | None

    def __init__(self, root: E | None = None) -> None:
        self.root = root

    def _check_root(self) -> E:
        if self.root is None:
            raise NullRootError("The document does not have a root.")

        return self.root

    def select_all(
        self, predicate: Callable[[E], bool], iterator_factory: IteratorFactory
    ) -> Selection[E]:
        """
        Return a selection with a single group, whose parent is the root, and
        containing all the nodes generated by `iterator_factory(root)` which
        satisfy `predicate`, in iteration order.
        """
        root = self._check_root()

        selection: Selection[E] = Selection()
        group = selection._group_add(root)
        for node in iterator_factory(root):
            if predicate(node):
                group.add(node)

        logger.debug(f"Selected {len(group)} nodes from {root!r}.")

        return selection

    def select(self, node: E) -> Selection[E]:
        """
        Return a selection containing only `node`.
        """
        self._check_root()
        return Selection.single(node)
