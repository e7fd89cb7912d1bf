"""Tree walking over parsed HTML.

The line grouper and the driver only see nodes through the ``TreeWalker``
protocol, so any in-memory tree can stand in for a parsed document.
``SoupTreeWalker`` is the BeautifulSoup implementation used in production.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Protocol, runtime_checkable

from bs4 import NavigableString, Tag

# Elements that flow inline by default (inline, inline-block and ruby displays).
INLINE_ELEMENTS: frozenset[str] = frozenset(
    {
        "a",
        "abbr",
        "acronym",
        "audio",
        "b",
        "bdi",
        "bdo",
        "big",
        "button",
        "canvas",
        "cite",
        "code",
        "data",
        "del",
        "dfn",
        "em",
        "embed",
        "font",
        "i",
        "iframe",
        "img",
        "input",
        "ins",
        "kbd",
        "label",
        "map",
        "mark",
        "math",
        "meter",
        "object",
        "output",
        "picture",
        "progress",
        "q",
        "rb",
        "rp",
        "rt",
        "rtc",
        "ruby",
        "s",
        "samp",
        "select",
        "small",
        "span",
        "strike",
        "strong",
        "sub",
        "sup",
        "svg",
        "time",
        "tt",
        "u",
        "var",
        "video",
        "wbr",
    }
)

INLINE_DISPLAYS: frozenset[str] = frozenset({"inline", "inline-block"})

LINE_BREAK = "br"

_DISPLAY_DECLARATION = re.compile(r"(?:^|;)\s*display\s*:\s*([a-z-]+)", re.IGNORECASE)


@runtime_checkable
class TreeWalker(Protocol):
    def is_leaf(self, node: Any) -> bool:
        """Return True for text-bearing leaves."""
        ...

    def is_container(self, node: Any) -> bool:
        ...

    def children(self, node: Any) -> Iterable[Any]:
        ...

    def text(self, leaf: Any) -> str:
        ...

    def parent(self, node: Any) -> Any:
        ...

    def is_inline(self, node: Any) -> bool:
        """Return True when the container flows inline with its siblings."""
        ...

    def is_line_break(self, node: Any) -> bool:
        """Return True for hard line breaks, which are block regardless of style."""
        ...


def declared_display(tag: Tag) -> str | None:
    """Return the ``display`` value from an inline ``style`` attribute, if any."""

    style = tag.get("style")
    if not isinstance(style, str):
        return None
    matches = _DISPLAY_DECLARATION.findall(style)
    return matches[-1].lower() if matches else None


class SoupTreeWalker:
    """``TreeWalker`` over a BeautifulSoup document."""

    def is_leaf(self, node: Any) -> bool:
        # Comment, CData, Doctype and friends subclass NavigableString.
        return type(node) is NavigableString

    def is_container(self, node: Any) -> bool:
        return isinstance(node, Tag)

    def children(self, node: Any) -> Iterable[Any]:
        return tuple(node.contents)

    def text(self, leaf: Any) -> str:
        return str(leaf)

    def parent(self, node: Any) -> Any:
        return node.parent

    def is_inline(self, node: Any) -> bool:
        display = declared_display(node)
        if display is not None:
            return display in INLINE_DISPLAYS
        return (node.name or "").lower() in INLINE_ELEMENTS

    def is_line_break(self, node: Any) -> bool:
        return (node.name or "").lower() == LINE_BREAK


__all__ = [
    "INLINE_DISPLAYS",
    "INLINE_ELEMENTS",
    "LINE_BREAK",
    "SoupTreeWalker",
    "TreeWalker",
    "declared_display",
]
