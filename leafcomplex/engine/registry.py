"""Transform registry — every analysis stage is a standalone function registered via decorator.

Usage:
    @transform(id="T2.01", layer=Layer.CONTOUR, dependencies=["T1.02"])
    def contours(ctx: AnalysisContext) -> None:
        ctx.lec_contour = trace_contour(ctx.mask)

Adding a new stage = creating one file with the decorator. Nothing else changes.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from leafcomplex.engine.context import AnalysisContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    MASK = 0
    MORPHOLOGY = 1
    CONTOUR = 2
    PATHS = 3
    SIGNAL = 4
    AGGREGATION = 5


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["AnalysisContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    """Singleton registry of all transforms."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        # IDs carry their layer: T3.03 belongs to Layer.PATHS
        if not spec.id.startswith(f"T{int(spec.layer)}."):
            raise ValueError(f"Transform {spec.id} does not belong to layer {spec.layer.name}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        specs = [s for s in self._transforms.values() if s.layer == layer]
        return sorted(specs, key=lambda s: s.id)

    def resolve_order(self) -> list[TransformSpec]:
        """Topological sort respecting dependencies, earlier layers first.

        A dependency must be registered and must not sit in a later layer
        than the transform that needs it.
        """
        pool = self._transforms
        in_degree: dict[str, int] = {tid: 0 for tid in pool}
        for tid, spec in pool.items():
            for dep in spec.dependencies:
                if dep not in pool:
                    raise ValueError(f"Transform {tid} depends on unregistered transform {dep}")
                if pool[dep].layer > spec.layer:
                    raise ValueError(f"Transform {tid} depends on {dep} from a later layer")
                in_degree[tid] += 1

        # Kahn's algorithm; ties broken by (layer, ID) so the order is stable
        heap = [(pool[tid].layer, tid) for tid, d in in_degree.items() if d == 0]
        heapq.heapify(heap)
        ordered: list[TransformSpec] = []

        while heap:
            _, tid = heapq.heappop(heap)
            ordered.append(pool[tid])
            for other_id, other_spec in pool.items():
                if tid in other_spec.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        heapq.heappush(heap, (other_spec.layer, other_id))

        if len(ordered) != len(pool):
            stuck = sorted(set(pool) - {s.id for s in ordered})
            raise ValueError(f"Circular dependency detected among: {stuck}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a transform function."""

    def decorator(fn: Callable[["AnalysisContext"], None]):
        spec = TransformSpec(
            id=id,
            layer=layer,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
