"""Tests for the EPUB IO adapter."""

from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("ebooklib")

from ebooklib import epub  # noqa: E402

from bionic_reader.adapters.io_epub import content_documents, read_book  # noqa: E402
from bionic_reader.core import convert_file  # noqa: E402


def _create_book(path: Path) -> Path:
    book = epub.EpubBook()
    book.set_identifier("bionic-test-001")
    book.set_title("Bionic Test")
    book.set_language("en")

    chapter = epub.EpubHtml(title="Intro", file_name="chap_01.xhtml", lang="en")
    chapter.content = "<html><body><h1>Intro</h1><p>Hello <i>wor</i>ld</p></body></html>"
    book.add_item(chapter)

    book.toc = (epub.Link("chap_01.xhtml", "Intro", "intro"),)
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    epub.write_epub(str(path), book)
    return path


def _chapter_markup(path: Path) -> str:
    book = read_book(path)
    (chapter,) = [item for item in content_documents(book) if item.get_name() == "chap_01.xhtml"]
    return chapter.get_content().decode("utf-8")


def test_content_documents_skip_navigation(tmp_path: Path) -> None:
    book = read_book(_create_book(tmp_path / "sample.epub"))
    names = [item.get_name() for item in content_documents(book)]
    assert names == ["chap_01.xhtml"]


def test_convert_epub_emphasizes_chapters(tmp_path: Path) -> None:
    source = _create_book(tmp_path / "sample.epub")
    out = tmp_path / "sample.bionic.epub"

    timings = convert_file(source, out)

    markup = _chapter_markup(out)
    assert "<b>He</b>llo" in markup
    assert "<i><b>wo</b>r</i>ld" in markup
    assert "<b>In</b>tro" in markup
    assert "emphasize" in timings
