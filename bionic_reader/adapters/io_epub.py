"""EPUB IO adapter: rewrite every content document of a book."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator

import ebooklib
from ebooklib import epub

logger = logging.getLogger(__name__)

EPUB_SUFFIXES: frozenset[str] = frozenset({".epub"})

Transform = Callable[[bytes], str]


def read_book(path: str | Path) -> epub.EpubBook:
    return epub.read_epub(str(Path(path).resolve()))


def content_documents(book: epub.EpubBook) -> Iterator[epub.EpubHtml]:
    """Yield XHTML content documents, skipping navigation documents."""

    return (
        item
        for item in book.get_items_of_type(ebooklib.ITEM_DOCUMENT)
        if not isinstance(item, epub.EpubNav)
    )


def transform_book(book: epub.EpubBook, transform: Transform) -> int:
    """Apply ``transform`` to the markup of each content document in place."""

    count = 0
    for item in content_documents(book):
        logger.debug("Processing EPUB document %s", item.get_name())
        # Raw bytes keep the XML declaration available for encoding detection.
        item.set_content(transform(item.get_content()).encode("utf-8"))
        count += 1
    return count


def write_book(path: str | Path, book: epub.EpubBook) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    epub.write_epub(str(target), book)
