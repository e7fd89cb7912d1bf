"""HTML file IO adapter."""

from __future__ import annotations

from pathlib import Path

HTML_SUFFIXES: frozenset[str] = frozenset({".html", ".htm", ".xhtml"})


def read_html(path: str | Path) -> bytes:
    return Path(path).read_bytes()


def write_html(path: str | Path, markup: str) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(markup, encoding="utf-8")
