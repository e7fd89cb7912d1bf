"""Pass registry and the artifact handed between passes.

A document travels through the pipeline as an ``Artifact`` whose payload
changes shape (markup, parsed soup, rendered markup) while ``meta`` collects
per-pass metrics under ``meta["metrics"][<pass name>]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Protocol, Type, runtime_checkable


@dataclass(frozen=True)
class Artifact:
    payload: Any
    meta: Dict[str, Any] | None = None

    @property
    def metrics(self) -> Dict[str, Dict[str, Any]]:
        return dict((self.meta or {}).get("metrics") or {})

    def with_payload(self, payload: Any) -> "Artifact":
        return Artifact(payload=payload, meta=self.meta)

    def with_metrics(self, name: str, values: Mapping[str, Any]) -> "Artifact":
        """Return a copy with ``values`` merged into the metrics of pass ``name``."""

        metrics = self.metrics
        metrics[name] = {**metrics.get(name, {}), **values}
        return Artifact(payload=self.payload, meta={**(self.meta or {}), "metrics": metrics})


@runtime_checkable
class Pass(Protocol):
    name: str
    input_type: Type
    output_type: Type

    def __call__(self, a: Artifact) -> Artifact:
        """Transform ``a``; payloads of another shape are returned unchanged."""
        ...


_REGISTRY: Mapping[str, Pass] = MappingProxyType({})


def register(p: Pass) -> Pass:
    global _REGISTRY
    _REGISTRY = MappingProxyType({**dict(_REGISTRY), p.name: p})
    return p


def resolve(steps: Iterable[str]) -> List[Pass]:
    """Look up ``steps`` in the registry, naming every unknown one at once."""

    names = list(steps)
    unknown = [s for s in names if s not in _REGISTRY]
    if unknown:
        raise KeyError(f"unknown steps: {unknown}")
    return [_REGISTRY[s] for s in names]


def run_pipeline(steps: Iterable[str], a: Artifact) -> Artifact:
    return reduce(lambda acc, p: p(acc), resolve(steps), a)


def registry() -> Dict[str, Pass]:
    """Shallow copy of the registry for inspection/testing."""
    return dict(_REGISTRY)
