from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


@pytest.fixture
def soup_of():
    """Parse an HTML snippet with the parser the pipeline uses by default."""

    def _parse(markup: str) -> BeautifulSoup:
        return BeautifulSoup(markup, "html.parser")

    return _parse


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``BIONIC_*`` overrides out of the test run."""

    for key in [k for k in os.environ if k.startswith("BIONIC_")]:
        monkeypatch.delenv(key, raising=False)
