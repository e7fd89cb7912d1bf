"""Word boundaries and emphasis lengths.

Only space, newline and tab separate words. Every other character, including
non-breaking and other Unicode spaces, counts toward the word it sits in.
"""

from __future__ import annotations

SEPARATORS: tuple[str, ...] = (" ", "\n", "\t")


def find_separator(text: str, start: int = 0) -> int | None:
    """Return the earliest separator index at or after ``start``, else ``None``."""

    hits = (text.find(sep, start) for sep in SEPARATORS)
    return min((index for index in hits if index != -1), default=None)


def emphasis_length(word_length: int) -> int:
    """Return how many leading characters of a word get emphasized."""

    if word_length < 0:
        raise ValueError(f"word length must be non-negative, got {word_length}")
    return word_length // 2


__all__ = ["SEPARATORS", "emphasis_length", "find_separator"]
