from __future__ import annotations

import os
import pathlib
import warnings
from functools import reduce
from typing import Any, Dict, Iterable, List, Mapping

import yaml
from pydantic import BaseModel, Field

DEFAULT_PIPELINE: tuple[str, ...] = ("html_parse", "emphasize", "html_render")
ENV_PREFIX = "BIONIC_"


class PipelineSpec(BaseModel):
    """Declarative pipeline specification."""

    pipeline: List[str] = Field(default_factory=lambda: list(DEFAULT_PIPELINE))
    options: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


def _read_yaml(path: str | os.PathLike | None) -> Dict[str, Any]:
    """Return a dict from YAML or {} if path is None/missing/empty."""
    if not path:
        return {}
    p = pathlib.Path(path)
    if not p.exists():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise TypeError("pipeline.yaml must contain a top-level mapping")
    return data


def _coerce(value: str) -> Any:
    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def _env_overrides(environ: Mapping[str, str] | None = None) -> Dict[str, Dict[str, Any]]:
    """
    Map BIONIC_STEP__key=value -> options[step][key]=value (lower-cased).
    Values are YAML-coerced, so 'true' or '42' become bool/int.
    """
    out: Dict[str, Dict[str, Any]] = {}
    for k, v in (os.environ if environ is None else environ).items():
        if not k.startswith(ENV_PREFIX) or "__" not in k:
            continue
        step, key = k[len(ENV_PREFIX) :].lower().split("__", 1)
        out.setdefault(step, {})[key] = _coerce(v)
    return out


def _merge_options(
    base: Dict[str, Dict[str, Any]], override: Dict[str, Dict[str, Any]]
) -> Dict[str, Dict[str, Any]]:
    """Shallow-merge per-step options; override wins."""
    sources = set(base) | set(override)
    return {s: {**base.get(s, {}), **override.get(s, {})} for s in sources}


def _warn_unknown_options(pipeline: Iterable[str], opts: Mapping[str, Any]) -> None:
    """Warn when options target steps absent from the pipeline."""

    steps = set(pipeline)
    unknown = [step for step in opts if step not in steps]
    if unknown:
        warnings.warn(
            f"Unknown pipeline options: {', '.join(sorted(unknown))}",
            stacklevel=2,
        )


def load_spec(
    path: str | os.PathLike | None = "pipeline.yaml",
    overrides: Dict[str, Dict[str, Any]] | None = None,
) -> PipelineSpec:
    """Load YAML + env/CLI overrides into a validated PipelineSpec."""
    data = _read_yaml(path)
    sources: Iterable[Dict[str, Dict[str, Any]]] = (
        d for d in (data.get("options") or {}, _env_overrides(), overrides) if d
    )
    merged = reduce(_merge_options, sources, {})

    pipeline = data.get("pipeline") or list(DEFAULT_PIPELINE)
    _warn_unknown_options(pipeline, merged)
    return PipelineSpec.model_validate({**data, "pipeline": pipeline, "options": merged})


__all__ = ["DEFAULT_PIPELINE", "ENV_PREFIX", "PipelineSpec", "load_spec"]
