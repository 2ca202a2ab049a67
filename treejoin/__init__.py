# flake8: noqa: F401

__version__ = "0.1"

from . import document, element, errors, join, traversal, utility, value
from .document import Document
from .element import Element, tag_is
from .errors import (
    ConsumedViewError,
    DuplicateKeyError,
    JoinError,
    NullRootError,
    TypeMismatchError,
)
from .join import (
    DuplicateKeyPolicy,
    ElementValue,
    EnterSelection,
    ExitSelection,
    Group,
    Join,
    Selection,
    unbound,
)
from .logging import logger
from .traversal import (
    TraversalOrder,
    TreeIterator,
    breadth_first,
    depth_first,
    descendants,
)
from .utility import format_selection, selection_graph
from .value import ValueBox
