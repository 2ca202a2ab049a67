"""
This module defines utilities used to inspect selections while debugging, and
the `Sentinel` base class.
"""

from typing import TYPE_CHECKING, Any, Callable

import graphviz  # type: ignore[import]

if TYPE_CHECKING:
    from .join.base import ElementValue
    from .join.selection import Selection


class Sentinel:
    """
    Base class of the sentinel values. All the instances of a given sentinel
    class are equal.
    """

    def __eq__(self, other: object) -> bool:
        return isinstance(other, self.__class__)

    def __hash__(self) -> int:
        return hash(self.__class__)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def _format_element_value(ev: "ElementValue", label: Callable[[Any], str]) -> str:
    if ev.box is None:
        return f"<{label(ev.element)}>"

    return f"<{label(ev.element)}> = {ev.box.value!r}"


def format_selection(selection: "Selection", label: Callable[[Any], str] = repr) -> str:
    """
    Return a textual representation of a selection, listing its groups with
    their parent and elements. Nodes are represented with `label`.

    >>> print(format_selection(selection))
    [selection]
        [group]
            [parent] <Element('root')>
                [element] <Element('a')> = 1
                [element] <Element('a')> = 2
    """
    lines = ["[selection]"]
    for group in selection.groups:
        lines.append("    [group]")
        lines.append(f"        [parent] {_format_element_value(group.parent, label)}")
        for ev in group.elements:
            lines.append(
                f"            [element] {_format_element_value(ev, label)}"
            )

    return "\n".join(lines)


def selection_graph(
    selection: "Selection", label: Callable[[Any], str] = repr
) -> graphviz.Digraph:
    """
    Build a graph of the selection, with a node per group parent and element,
    and an edge from each parent to the elements of its group. Bound values are
    displayed next to the node label. Nodes appearing in several groups (for
    example the element of a selection which is also the parent of a nested
    group) are represented once.
    """
    graph = graphviz.Digraph("Selection", node_attr={"shape": "record"})

    names: dict[int, str] = {}

    def node_name(ev: "ElementValue") -> str:
        key = id(ev.element)
        if key not in names:
            names[key] = f"n{len(names)}"
            text = _escape_record(label(ev.element))
            if ev.box is not None:
                text = f"{text} | {_escape_record(repr(ev.box.value))}"

            graph.node(names[key], text)

        return names[key]

    for group in selection.groups:
        parent_name = node_name(group.parent)
        for ev in group.elements:
            graph.edge(parent_name, node_name(ev))

    return graph


def _escape_record(text: str) -> str:
    for char in "\\{}<>|\"":
        text = text.replace(char, f"\\{char}")

    return text
