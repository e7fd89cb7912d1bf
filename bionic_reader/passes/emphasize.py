from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from bs4 import BeautifulSoup

from bionic_reader.driver import select_root, soup_driver
from bionic_reader.exclusion import ExclusionFilter
from bionic_reader.framework import Artifact, Pass, register
from bionic_reader.splicer import DEFAULT_EMPHASIS_TAG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _EmphasizePass:
    """Bold the leading half of every word under the selected root."""

    name: str = field(default="emphasize", init=False)
    input_type: type = field(default=BeautifulSoup, init=False)
    output_type: type = field(default=BeautifulSoup, init=False)
    root_id: str | None = None
    selector: str | None = None
    exclude_tags: str | Sequence[str] | None = None
    exclude_classes: str | Sequence[str] | None = None
    emphasis_tag: str = DEFAULT_EMPHASIS_TAG
    emphasis_class: str | None = None

    def __call__(self, a: Artifact) -> Artifact:
        soup = a.payload
        if not isinstance(soup, BeautifulSoup):
            return a
        root = select_root(soup, self.root_id, self.selector)
        logger.debug("emphasizing subtree rooted at <%s>", root.name)
        exclude = ExclusionFilter.from_options(self.exclude_tags, self.exclude_classes)
        report = soup_driver(root, exclude, self.emphasis_tag, self.emphasis_class).process(
            root
        )
        return a.with_metrics(
            self.name,
            {
                "lines": report.lines,
                "leaves": report.leaves,
                "replaced": report.replaced,
                "elapsed_ms": report.elapsed_ms,
            },
        )


emphasize: Pass = register(_EmphasizePass())
