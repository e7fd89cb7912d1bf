"""Materialize leaf replacements into the document tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence, runtime_checkable

from bs4 import BeautifulSoup, NavigableString, Tag

from bionic_reader.fragments import Fragment, is_identity
from bionic_reader.tree import TreeWalker

DEFAULT_EMPHASIS_TAG = "b"


@runtime_checkable
class Splicer(Protocol):
    def materialize(self, fragment: Fragment) -> Any:
        """Build the tree node rendering ``fragment``."""
        ...

    def insert_before(self, parent: Any, new_node: Any, reference: Any) -> None:
        ...

    def remove(self, node: Any) -> None:
        ...

    def normalize(self, root: Any) -> None:
        """Drop empty text nodes and merge adjacent ones under ``root``."""
        ...


def _empty_document() -> BeautifulSoup:
    return BeautifulSoup("", "html.parser")


@dataclass
class SoupSplicer:
    """``Splicer`` for BeautifulSoup trees.

    Emphasized fragments become ``<b>`` elements by default; ``tag_name`` and
    ``css_class`` change the element and its ``class`` attribute.
    """

    document: BeautifulSoup = field(default_factory=_empty_document)
    tag_name: str = DEFAULT_EMPHASIS_TAG
    css_class: str | None = None

    def materialize(self, fragment: Fragment) -> Any:
        if not fragment.emphasized:
            return NavigableString(fragment.text)
        tag = self.document.new_tag(self.tag_name)
        if self.css_class:
            tag["class"] = self.css_class
        tag.string = fragment.text
        return tag

    def insert_before(self, parent: Tag, new_node: Any, reference: Any) -> None:
        parent.insert(parent.index(reference), new_node)

    def remove(self, node: Any) -> None:
        node.extract()

    def normalize(self, root: Any) -> None:
        if not isinstance(root, Tag):
            return
        empties = [
            node
            for node in root.descendants
            if type(node) is NavigableString and not node
        ]
        for node in empties:
            node.extract()
        root.smooth()


@dataclass(frozen=True)
class SpliceAdapter:
    """Replace a leaf by its fragments: insert them before it, then drop it."""

    splicer: Splicer
    walker: TreeWalker

    def apply_replacement(self, leaf: Any, fragments: Sequence[Fragment]) -> bool:
        """Return True when the leaf was actually replaced."""

        if not fragments or is_identity(self.walker.text(leaf), fragments):
            return False
        parent = self.walker.parent(leaf)
        for fragment in fragments:
            self.splicer.insert_before(parent, self.splicer.materialize(fragment), leaf)
        self.splicer.remove(leaf)
        return True


__all__ = ["DEFAULT_EMPHASIS_TAG", "SoupSplicer", "SpliceAdapter", "Splicer"]
