"""In-memory tree with walker and splicer implementations for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from bionic_reader.fragments import Fragment


@dataclass(eq=False)
class Node:
    name: str | None = None
    value: str = ""
    inline: bool = False
    classes: tuple[str, ...] = ()
    children: list["Node"] = field(default_factory=list)
    parent: "Node | None" = None

    @property
    def is_text(self) -> bool:
        return self.name is None


def text(value: str) -> Node:
    return Node(value=value)


def element(name: str, *children: Node, inline: bool = False, classes: Iterable[str] = ()) -> Node:
    node = Node(name=name, inline=inline, classes=tuple(classes))
    for child in children:
        child.parent = node
        node.children.append(child)
    return node


def span(*children: Node, **kwargs: Any) -> Node:
    return element("span", *children, inline=True, **kwargs)


def render(node: Node) -> str:
    if node.is_text:
        return node.value
    inner = "".join(render(child) for child in node.children)
    return f"<{node.name}>{inner}</{node.name}>"


class FakeWalker:
    def is_leaf(self, node: Node) -> bool:
        return node.is_text

    def is_container(self, node: Node) -> bool:
        return not node.is_text

    def children(self, node: Node) -> tuple[Node, ...]:
        return tuple(node.children)

    def text(self, leaf: Node) -> str:
        return leaf.value

    def parent(self, node: Node) -> Node | None:
        return node.parent

    def is_inline(self, node: Node) -> bool:
        return node.inline

    def is_line_break(self, node: Node) -> bool:
        return node.name == "br"


def exclude_hidden(node: Node) -> bool:
    return "hidden" in node.classes


def _index(parent: Node, child: Node) -> int:
    return next(i for i, c in enumerate(parent.children) if c is child)


class FakeSplicer:
    def materialize(self, fragment: Fragment) -> Node:
        if fragment.emphasized:
            return element("b", text(fragment.text), inline=True)
        return text(fragment.text)

    def insert_before(self, parent: Node, new_node: Node, reference: Node) -> None:
        new_node.parent = parent
        parent.children.insert(_index(parent, reference), new_node)

    def remove(self, node: Node) -> None:
        assert node.parent is not None
        node.parent.children.pop(_index(node.parent, node))
        node.parent = None

    def normalize(self, root: Node) -> None:
        merged: list[Node] = []
        for child in root.children:
            if child.is_text and not child.value:
                continue
            if child.is_text and merged and merged[-1].is_text:
                merged[-1].value += child.value
                continue
            if not child.is_text:
                self.normalize(child)
            merged.append(child)
        root.children = merged
