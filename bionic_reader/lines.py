"""Group text leaves into lines.

A line is a run of leaves that renders without a block boundary in between,
so a word may only continue from one leaf into the next inside a line.
Excluded subtrees contribute no leaves; the leaves around them simply become
neighbours.
"""

from __future__ import annotations

from typing import Any, Callable

from bionic_reader.tree import TreeWalker

Line = tuple[Any, ...]
Exclude = Callable[[Any], bool]


def _collect(
    node: Any,
    walker: TreeWalker,
    exclude: Exclude,
    lines: list[list[Any]],
    excluded: bool,
) -> None:
    excluded = excluded or exclude(node)
    for child in walker.children(node):
        if walker.is_container(child):
            if walker.is_inline(child) and not walker.is_line_break(child):
                _collect(child, walker, exclude, lines, excluded)
                continue
            if lines[-1]:
                lines.append([])
            _collect(child, walker, exclude, lines, excluded)
            if lines[-1]:
                lines.append([])
        elif not excluded and walker.is_leaf(child) and walker.text(child):
            lines[-1].append(child)


def build_lines(root: Any, walker: TreeWalker, exclude: Exclude) -> list[Line]:
    """Return the non-empty lines under ``root`` in document order."""

    lines: list[list[Any]] = [[]]
    _collect(root, walker, exclude, lines, False)
    return [tuple(line) for line in lines if line]


__all__ = ["Exclude", "Line", "build_lines"]
