#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/ast/walk.py
"""Depth-first enter/exit traversal of a node tree.

The walk yields ``(node, entering)`` pairs: ``True`` when a node is entered,
``False`` when it is exited after all of its descendants. Every node is
entered and exited exactly once. The tree is linked with
:func:`~mdtool.ast.nodes.link_tree` first, so ``parent``, ``prev`` and
``next`` are valid for every node at both events.

"""

from __future__ import annotations

from typing import Iterator

from mdtool.ast.nodes import Node, get_node_children, link_tree

WalkEvent = tuple[Node, bool]


def walk(root: Node) -> Iterator[WalkEvent]:
    """Yield enter/exit events for ``root`` and all of its descendants.

    The traversal is iterative, so very deep trees do not exhaust the
    interpreter's recursion limit.

    Parameters
    ----------
    root : Node
        Root of the tree to walk

    Yields
    ------
    tuple of (Node, bool)
        The node and whether it is being entered

    Raises
    ------
    ValueError
        If a node is reachable twice from ``root`` (the tree contains a cycle
        or a shared subtree)

    Examples
    --------
    >>> from mdtool.ast.nodes import Document, Paragraph, Text
    >>> doc = Document(children=[Paragraph(content=[Text("hi")])])
    >>> [(n.kind, e) for n, e in walk(doc)][:3]
    [('document', True), ('paragraph', True), ('text', True)]

    """
    link_tree(root)

    # Exits are scheduled beneath the children
    stack: list[WalkEvent] = [(root, True)]
    while stack:
        node, entering = stack.pop()
        if entering:
            yield node, True
            stack.append((node, False))
            for child in reversed(get_node_children(node)):
                stack.append((child, True))
        else:
            yield node, False
