"""Cross-leaf bolding of a single line of text leaves.

A line is an ordered run of leaf texts with no block boundary between them.
Words may start in one leaf and end several leaves later, e.g.
``"A<i>long</i>word"`` yields the leaves ``"A"``, ``"long"``, ``"word"`` and
one eleven-character word. The bolder walks the line with a cursor and hands
every leaf its replacement fragments exactly once, in order, through a flush
callback.

A leaf is only flushed when the cursor moves past it. The leaf holding the
separator that ends a cross-leaf word therefore stays open, so the next word
can keep appending to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from bionic_reader.fragments import Fragment, emphasized, plain
from bionic_reader.words import emphasis_length, find_separator

logger = logging.getLogger(__name__)

Flush = Callable[[int, list[Fragment]], None]


class LineStateError(RuntimeError):
    """Raised when the bolder is driven past the end of its line."""


@dataclass
class Cursor:
    """Next unconsumed character of the line: ``(leaf index, offset in leaf)``."""

    leaf: int = 0
    offset: int = 0


@dataclass(frozen=True)
class Word:
    """Word text starting at the cursor and the position of its separator.

    ``end_leaf`` equals the line length when no separator closes the word.
    """

    text: str
    end_leaf: int
    end_offset: int

    @property
    def emphasis(self) -> int:
        return emphasis_length(len(self.text))


@dataclass
class LineBolder:
    texts: Sequence[str]
    flush: Flush
    cursor: Cursor = field(default_factory=Cursor)
    pending: list[Fragment] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.cursor.leaf == len(self.texts)

    def run(self) -> None:
        while not self.finished:
            self._run_within_leaf()
            self._run_across_leaves()

    def _emit(self, fragment: Fragment) -> None:
        if fragment.text:
            self.pending.append(fragment)

    def _close_leaf(self) -> None:
        """Flush the cursor leaf and move to the start of the next one."""

        if self.finished:
            raise LineStateError(
                f"cannot flush leaf {self.cursor.leaf} of a {len(self.texts)}-leaf line"
            )
        fragments, self.pending = self.pending, []
        self.flush(self.cursor.leaf, fragments)
        self.cursor = Cursor(self.cursor.leaf + 1, 0)

    def _run_within_leaf(self) -> None:
        text = self.texts[self.cursor.leaf]
        sep = find_separator(text, self.cursor.offset)
        while sep is not None:
            word = text[self.cursor.offset : sep]
            bold = emphasis_length(len(word))
            self._emit(emphasized(word[:bold]))
            self._emit(plain(word[bold:] + text[sep]))
            self.cursor.offset = sep + 1
            sep = find_separator(text, self.cursor.offset)

    def _resolve_word(self) -> Word:
        leaf, offset = self.cursor.leaf, self.cursor.offset
        parts: list[str] = []
        while leaf < len(self.texts):
            text = self.texts[leaf]
            sep = find_separator(text, offset)
            if sep is not None:
                parts.append(text[offset:sep])
                return Word("".join(parts), leaf, sep)
            parts.append(text[offset:])
            leaf, offset = leaf + 1, 0
        return Word("".join(parts), leaf, 0)

    def _run_across_leaves(self) -> None:
        word = self._resolve_word()
        remaining = word.emphasis

        while remaining > 0:
            text = self.texts[self.cursor.leaf]
            take = min(remaining, len(text) - self.cursor.offset)
            self._emit(emphasized(text[self.cursor.offset : self.cursor.offset + take]))
            remaining -= take
            self.cursor.offset += take
            if self.cursor.offset < len(text):
                break
            self._close_leaf()

        while self.cursor.leaf < word.end_leaf:
            self._emit(plain(self.texts[self.cursor.leaf][self.cursor.offset :]))
            self._close_leaf()

        if word.end_leaf < len(self.texts):
            text = self.texts[word.end_leaf]
            self._emit(plain(text[self.cursor.offset : word.end_offset + 1]))
            self.cursor.offset = word.end_offset + 1


def bold_line(texts: Sequence[str]) -> list[list[Fragment]]:
    """Return the replacement fragments of every leaf in ``texts``."""

    flushed: list[list[Fragment]] = []

    def _collect(index: int, fragments: list[Fragment]) -> None:
        if index != len(flushed):
            raise LineStateError(f"leaf {index} flushed out of order")
        flushed.append(fragments)

    LineBolder(texts, _collect).run()
    return flushed


__all__ = ["Cursor", "LineBolder", "LineStateError", "Word", "bold_line"]
