"""Apply bionic reading emphasis to a whole document subtree.

The driver groups leaves into lines, bolds each line and splices every leaf's
replacement back into the tree as soon as the bolder flushes it. The subtree
is normalized before grouping and again after the last splice.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup, Tag

from bionic_reader.bolder import LineBolder
from bionic_reader.exclusion import ExclusionFilter
from bionic_reader.fragments import Fragment
from bionic_reader.lines import Exclude, Line, build_lines
from bionic_reader.splicer import SoupSplicer, SpliceAdapter, Splicer
from bionic_reader.tree import SoupTreeWalker, TreeWalker

logger = logging.getLogger(__name__)


class RootNotFoundError(LookupError):
    """Raised when the requested root container is absent from the document."""


@dataclass(frozen=True)
class BionicReport:
    lines: int
    leaves: int
    replaced: int
    elapsed_ms: float


@dataclass(frozen=True)
class BionicDriver:
    walker: TreeWalker
    exclude: Exclude
    splicer: Splicer

    def _bold(self, line: Line, adapter: SpliceAdapter) -> int:
        texts = tuple(self.walker.text(leaf) for leaf in line)
        replaced = 0

        def _flush(index: int, fragments: list[Fragment]) -> None:
            nonlocal replaced
            replaced += adapter.apply_replacement(line[index], fragments)

        LineBolder(texts, _flush).run()
        return replaced

    def process(self, root: Any) -> BionicReport:
        start = time.perf_counter()
        self.splicer.normalize(root)
        lines = build_lines(root, self.walker, self.exclude)
        adapter = SpliceAdapter(self.splicer, self.walker)
        replaced = sum(self._bold(line, adapter) for line in lines)
        self.splicer.normalize(root)
        elapsed_ms = (time.perf_counter() - start) * 1000

        report = BionicReport(
            lines=len(lines),
            leaves=sum(len(line) for line in lines),
            replaced=replaced,
            elapsed_ms=elapsed_ms,
        )
        logger.debug(
            "bolded %d leaves (%d replaced) across %d lines",
            report.leaves,
            report.replaced,
            report.lines,
        )
        logger.info("Initialized bionic reading: %.2fms", elapsed_ms)
        return report


def owner_document(node: Any) -> BeautifulSoup | None:
    """Return the ``BeautifulSoup`` object that ``node`` belongs to, if any."""

    top = node
    while getattr(top, "parent", None) is not None:
        top = top.parent
    return top if isinstance(top, BeautifulSoup) else None


def soup_driver(
    root: Any,
    exclude: Exclude | None = None,
    emphasis_tag: str = "b",
    emphasis_class: str | None = None,
) -> BionicDriver:
    """Build a driver wired with the BeautifulSoup collaborators for ``root``."""

    document = owner_document(root)
    splicer = (
        SoupSplicer(document, emphasis_tag, emphasis_class)
        if document is not None
        else SoupSplicer(tag_name=emphasis_tag, css_class=emphasis_class)
    )
    return BionicDriver(
        walker=SoupTreeWalker(),
        exclude=exclude or ExclusionFilter(),
        splicer=splicer,
    )


def select_root(
    document: BeautifulSoup,
    root_id: str | None = None,
    selector: str | None = None,
) -> Tag:
    """Pick the container to emphasize: by id, by CSS selector, ``body`` or all."""

    if root_id:
        found = document.find(id=root_id)
        if not isinstance(found, Tag):
            raise RootNotFoundError(f"no element with id {root_id!r}")
        return found
    if selector:
        match = document.select_one(selector)
        if match is None:
            raise RootNotFoundError(f"no element matches selector {selector!r}")
        return match
    body = document.find("body")
    return body if isinstance(body, Tag) else document


def run(root: Any) -> None:
    """Emphasize every word under ``root`` in place."""

    soup_driver(root).process(root)


__all__ = [
    "BionicDriver",
    "BionicReport",
    "RootNotFoundError",
    "owner_document",
    "run",
    "select_root",
    "soup_driver",
]
