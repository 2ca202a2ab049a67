"""
This module defines the traversal used to find the existing nodes of a tree,
and helpers building the iterator factories expected by `select_all`.

An iterator factory is any callable taking a node, and returning an iterator
over the nodes to consider, usually the node itself and its descendants.
"""

from collections import deque
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

from .logging import logger

logger = logger.getChild("traversal")

N = TypeVar("N")

#: Callable returning the children of a node.
ChildrenGetter = Callable[[Any], Iterable[Any]]

#: Callable returning an iterator over the nodes found from a starting node.
IteratorFactory = Callable[[Any], Iterator[Any]]


class TraversalOrder(Enum):
    """
    Order in which a `TreeIterator` visits the nodes.
    """

    #: Pre-order depth-first traversal, using a last-in-first-out frontier.
    #: Siblings are visited in the order of their parent.
    DEPTH_FIRST = "DEPTH_FIRST"

    #: Breadth-first traversal, using a first-in-first-out frontier.
    BREADTH_FIRST = "BREADTH_FIRST"


def _default_children(node: Any) -> Iterable[Any]:
    return node.children


class TreeIterator(Generic[N]):
    """
    Lazy and finite iterator over the nodes reachable from a root.

    The iterator maintains a frontier of `(node, depth)` pairs, seeded with the
    root at depth 0. Each step takes a pair from the frontier, schedules the
    children of the node if `depth < max_depth`, and returns the node. `None`
    children, which represent removed slots, are skipped.

    An exhausted iterator stays exhausted. In order to traverse a tree again,
    build a new iterator.
    """

    #: Maximal depth of the returned nodes. `None` means that it is unbounded.
    max_depth: int | None

    #: Order of traversal.
    order: TraversalOrder

    #: Nodes left to be visited, with their depth.
    frontier: deque[tuple[N, int]]

    def __init__(
        self,
        root: N | None = None,
        max_depth: int | None = None,
        order: TraversalOrder = TraversalOrder.DEPTH_FIRST,
        children: ChildrenGetter | None = None,
    ) -> None:
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"Invalid maximal depth {max_depth}.")

        self.max_depth = max_depth
        self.order = order
        self.frontier = deque()
        self._children = children if children is not None else _default_children

        if root is not None:
            self.push(root)

    def push(self, node: N):
        """
        Schedule the traversal of an additional root, at depth 0.
        """
        self.frontier.append((node, 0))

    def __iter__(self) -> "TreeIterator[N]":
        return self

    def __next__(self) -> N:
        if not self.frontier:
            raise StopIteration

        if self.order == TraversalOrder.DEPTH_FIRST:
            node, depth = self.frontier.pop()
        else:
            node, depth = self.frontier.popleft()

        if self.max_depth is None or depth < self.max_depth:
            children = [c for c in self._children(node) if c is not None]
            if self.order == TraversalOrder.DEPTH_FIRST:
                children.reverse()

            self.frontier.extend((c, depth + 1) for c in children)

        return node


def depth_first(
    max_depth: int | None = None, children: ChildrenGetter | None = None
) -> Callable[[N], TreeIterator[N]]:
    """
    Return an iterator factory building depth-first `TreeIterator`s.
    """

    def factory(root: N) -> TreeIterator[N]:
        return TreeIterator(root, max_depth, TraversalOrder.DEPTH_FIRST, children)

    return factory


def breadth_first(
    max_depth: int | None = None, children: ChildrenGetter | None = None
) -> Callable[[N], TreeIterator[N]]:
    """
    Return an iterator factory building breadth-first `TreeIterator`s.
    """

    def factory(root: N) -> TreeIterator[N]:
        return TreeIterator(root, max_depth, TraversalOrder.BREADTH_FIRST, children)

    return factory


def descendants(factory: IteratorFactory) -> IteratorFactory:
    """
    Wrap an iterator factory, so that the node it is called on is not yielded.
    This is useful for nested selections, where the parent should not be
    selected again when it matches the predicate of its children.

    It assumes that the wrapped factory yields the starting node first, which
    is the case of `depth_first` and `breadth_first`.
    """

    def wrapped(root: Any) -> Iterator[Any]:
        iterator = iter(factory(root))
        first = next(iterator, None)
        if first is not root:
            logger.debug(f"Iterator factory did not start with its root {root!r}.")
            if first is not None:
                yield first

        yield from iterator

    return wrapped
