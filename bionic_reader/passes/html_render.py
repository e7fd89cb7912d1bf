from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from bionic_reader.framework import Artifact, Pass, register


@dataclass(frozen=True)
class _HtmlRenderPass:
    name: str = field(default="html_render", init=False)
    input_type: type = field(default=BeautifulSoup, init=False)
    output_type: type = field(default=str, init=False)
    formatter: str = "minimal"

    def __call__(self, a: Artifact) -> Artifact:
        soup = a.payload
        if not isinstance(soup, BeautifulSoup):
            return a
        rendered = soup.decode(formatter=self.formatter)
        return a.with_payload(rendered).with_metrics(
            self.name, {"chars": len(rendered)}
        )


html_render: Pass = register(_HtmlRenderPass())
