from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import fields, is_dataclass, replace
from functools import reduce
from pathlib import Path
from typing import Any

from bionic_reader.adapters import io_epub, io_html
from bionic_reader.config import PipelineSpec
from bionic_reader.framework import Artifact, Pass, registry, resolve

logger = logging.getLogger(__name__)

Timings = dict[str, float]


def _pass_steps(spec: PipelineSpec) -> list[Pass]:
    """Resolve pipeline steps to configured passes; error on unknown ones."""
    return [configure_pass(p, spec.options.get(p.name, {})) for p in resolve(spec.pipeline)]


def configure_pass(pass_obj: Pass, opts: Mapping[str, Any]) -> Pass:
    """Return a copy of ``pass_obj`` with matching ``opts`` applied as fields."""

    if not opts or not is_dataclass(pass_obj):
        return pass_obj
    names = {f.name for f in fields(pass_obj) if f.init}
    updates = {k: v for k, v in opts.items() if k in names}
    ignored = sorted(set(opts) - names)
    if ignored:
        logger.warning("%s ignores unknown options: %s", pass_obj.name, ", ".join(ignored))
    return replace(pass_obj, **updates) if updates else pass_obj


def _time_step(acc: tuple[Artifact, Timings], p: Pass) -> tuple[Artifact, Timings]:
    """Apply ``p`` to ``acc`` while recording its execution time."""
    a, timings = acc
    t0 = time.perf_counter()
    a = p(a)
    return a, {**timings, p.name: timings.get(p.name, 0.0) + time.perf_counter() - t0}


def run_passes(spec: PipelineSpec, a: Artifact) -> tuple[Artifact, Timings]:
    """Run pipeline passes declared in ``spec`` capturing per-pass timings."""
    return reduce(_time_step, _pass_steps(spec), (a, {}))


def emphasize_markup(
    markup: str | bytes, spec: PipelineSpec | None = None
) -> tuple[str, dict[str, Any], Timings]:
    """Run the pipeline over one HTML document and return the rendered result."""

    artifact = Artifact(payload=markup, meta={"metrics": {}})
    result, timings = run_passes(spec or PipelineSpec(), artifact)
    if not isinstance(result.payload, str):
        raise TypeError("pipeline must end with a pass rendering markup (html_render)")
    return result.payload, dict(result.meta or {}), timings


def _merge_timings(total: Timings, extra: Timings) -> Timings:
    return {k: total.get(k, 0.0) + extra.get(k, 0.0) for k in set(total) | set(extra)}


def _default_output(input_path: Path) -> Path:
    return input_path.with_name(f"{input_path.stem}.bionic{input_path.suffix}")


def _convert_epub(source: Path, target: Path, spec: PipelineSpec) -> Timings:
    book = io_epub.read_book(source)
    totals: Timings = {}

    def _transform(markup: bytes) -> str:
        nonlocal totals
        rendered, _, step_timings = emphasize_markup(markup, spec)
        totals = _merge_timings(totals, step_timings)
        return rendered

    count = io_epub.transform_book(book, _transform)
    io_epub.write_book(target, book)
    logger.info("wrote %s (%d documents)", target, count)
    return totals


def convert_file(
    input_path: str | Path, out: str | Path | None = None, spec: PipelineSpec | None = None
) -> Timings:
    """Emphasize an HTML or EPUB file and write the result to ``out``."""

    source = Path(input_path)
    target = Path(out) if out else _default_output(source)
    spec = spec or PipelineSpec()
    suffix = source.suffix.lower()

    if suffix in io_html.HTML_SUFFIXES:
        rendered, _, timings = emphasize_markup(io_html.read_html(source), spec)
        io_html.write_html(target, rendered)
        logger.info("wrote %s", target)
        return timings

    if suffix in io_epub.EPUB_SUFFIXES:
        return _convert_epub(source, target, spec)

    raise ValueError(f"unsupported input type: {source.suffix or source.name}")


def run_inspect() -> dict[str, dict[str, str]]:
    """Return registered passes with their declared input/output types."""
    return {
        name: {"input": p.input_type.__name__, "output": p.output_type.__name__}
        for name, p in sorted(registry().items())
    }


__all__ = [
    "configure_pass",
    "convert_file",
    "emphasize_markup",
    "run_inspect",
    "run_passes",
]
