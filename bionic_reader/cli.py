from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from typing import Any

import typer

from bionic_reader.config import load_spec
from bionic_reader.core import convert_file, run_inspect

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _spec_path_candidates(path: str | Path) -> Iterator[Path]:
    """Yield potential spec locations without hitting the filesystem."""
    candidate = Path(path)
    pkg_dir = Path(__file__).resolve().parent
    yield from (
        candidate,
        pkg_dir.parent / candidate,
        pkg_dir / candidate,
    )


def _resolve_spec_path(path: str | Path) -> Path:
    """Pick the first existing pipeline spec from candidate locations."""
    return next((p for p in _spec_path_candidates(path) if p.exists()), Path(path))


def _format_timings(timings: Mapping[str, float]) -> str:
    """Return ``timings`` as newline-delimited ``name: seconds`` strings."""
    return "\n".join(f"{n}: {t:.3f}s" for n, t in timings.items())


def _exit_with_error(exc: Exception) -> None:
    """Print ``exc`` to stderr and exit with status 1."""
    print(f"error: {exc}", file=sys.stderr)
    raise typer.Exit(1)


def _safe(func: Callable[[], None]) -> None:
    """Invoke ``func`` and exit non-zero on any exception."""
    try:
        func()
    except Exception as exc:
        _exit_with_error(exc)


def _cli_overrides(root_id: str | None, selector: str | None) -> dict[str, dict[str, Any]]:
    emphasize_opts = {
        k: v for k, v in {"root_id": root_id, "selector": selector}.items() if v is not None
    }
    return {"emphasize": emphasize_opts} if emphasize_opts else {}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _run_convert(
    input_path: Path,
    out: Path | None,
    spec: str,
    root_id: str | None,
    selector: str | None,
    verbose: bool,
) -> None:
    s = load_spec(_resolve_spec_path(spec), overrides=_cli_overrides(root_id, selector))
    timings = convert_file(input_path, out, s)
    if verbose:
        print(_format_timings(timings))
    print("convert: OK")


@app.command()
def convert(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    out: Path | None = typer.Option(None, "--out"),
    spec: str = typer.Option("pipeline.yaml", "--spec"),
    root_id: str | None = typer.Option(None, "--root-id"),
    selector: str | None = typer.Option(None, "--selector"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Emphasize the first half of every word in an HTML or EPUB file."""
    _configure_logging(verbose)
    _safe(lambda: _run_convert(input_path, out, spec, root_id, selector, verbose))


@app.command()
def inspect() -> None:
    """List registered passes."""
    print(json.dumps(run_inspect(), indent=2))


if __name__ == "__main__":
    app()
