from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, Optional

from bs4 import Tag
from pydantic import BaseModel, field_validator

DEFAULT_EXCLUDED_TAGS: frozenset[str] = frozenset(
    {"script", "style", "title", "textarea", "template", "noscript", "svg", "math"}
)
DEFAULT_EXCLUDED_CLASSES: frozenset[str] = frozenset({"cloze"})

_NAME_SEPARATORS = re.compile(r"[,\s]+")


def _class_names(tag: Tag) -> frozenset[str]:
    raw = tag.get("class")
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        return frozenset(raw.split())
    return frozenset(raw)


class ExclusionOptions(BaseModel):
    """Validated ``exclude_tags``/``exclude_classes`` pass options.

    A scalar such as ``"script"`` or ``"script, pre"`` (the shape env
    overrides and hand-written YAML produce) is read as a list of names.
    """

    tags: Optional[FrozenSet[str]] = None
    classes: Optional[FrozenSet[str]] = None

    @field_validator("tags", "classes", mode="before")
    @classmethod
    def _split_names(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [name for name in _NAME_SEPARATORS.split(value) if name]
        return value

    @field_validator("tags")
    @classmethod
    def _lower_tags(cls, value: Optional[FrozenSet[str]]) -> Optional[FrozenSet[str]]:
        return None if value is None else frozenset(t.lower() for t in value)


@dataclass(frozen=True)
class ExclusionFilter:
    """Predicate marking containers whose whole subtree must stay untouched."""

    tags: frozenset[str] = DEFAULT_EXCLUDED_TAGS
    classes: frozenset[str] = DEFAULT_EXCLUDED_CLASSES

    @classmethod
    def from_options(
        cls,
        tags: str | Iterable[str] | None = None,
        classes: str | Iterable[str] | None = None,
    ) -> "ExclusionFilter":
        opts = ExclusionOptions.model_validate({"tags": tags, "classes": classes})
        return cls(
            tags=DEFAULT_EXCLUDED_TAGS if opts.tags is None else opts.tags,
            classes=DEFAULT_EXCLUDED_CLASSES if opts.classes is None else opts.classes,
        )

    def __call__(self, node: Any) -> bool:
        if not isinstance(node, Tag):
            return False
        if (node.name or "").lower() in self.tags:
            return True
        return not self.classes.isdisjoint(_class_names(node))


__all__ = [
    "DEFAULT_EXCLUDED_CLASSES",
    "DEFAULT_EXCLUDED_TAGS",
    "ExclusionFilter",
    "ExclusionOptions",
]
