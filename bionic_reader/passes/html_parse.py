from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from bionic_reader.framework import Artifact, Pass, register

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _HtmlParsePass:
    name: str = field(default="html_parse", init=False)
    input_type: type = field(default=str, init=False)
    output_type: type = field(default=BeautifulSoup, init=False)
    parser: str = "html.parser"

    def __call__(self, a: Artifact) -> Artifact:
        markup = a.payload
        if not isinstance(markup, (str, bytes)):
            return a
        # Raw bytes go to BeautifulSoup untouched so it can sniff the encoding.
        soup = BeautifulSoup(markup, self.parser)
        if isinstance(markup, bytes):
            logger.debug("decoded %d bytes as %s", len(markup), soup.original_encoding)
            metrics = {"bytes": len(markup), "encoding": soup.original_encoding}
        else:
            metrics = {"chars": len(markup)}
        return a.with_payload(soup).with_metrics(self.name, metrics)


html_parse: Pass = register(_HtmlParsePass())
