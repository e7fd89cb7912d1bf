from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Fragment:
    """Atomic unit of a leaf replacement: a span of text, emphasized or not."""

    text: str
    emphasized: bool = False


def plain(text: str) -> Fragment:
    return Fragment(text=text, emphasized=False)


def emphasized(text: str) -> Fragment:
    return Fragment(text=text, emphasized=True)


def fragments_text(fragments: Iterable[Fragment]) -> str:
    """Concatenate fragment texts; equals the original leaf text after bolding."""

    return "".join(fragment.text for fragment in fragments)


def is_identity(original: str, fragments: Iterable[Fragment]) -> bool:
    """Return True when ``fragments`` would reproduce ``original`` unchanged."""

    materialized = tuple(fragments)
    return (
        len(materialized) == 1
        and not materialized[0].emphasized
        and materialized[0].text == original
    )


__all__ = ["Fragment", "emphasized", "fragments_text", "is_identity", "plain"]
