from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace

from diamondviz.errors import require_finite

logger = logging.getLogger(__name__)

MIN_DIMENSION = 1e-3
MAX_TABLE_RATIO = 0.98
MAX_CULET_RATIO = 0.4


def _clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(value, max_value))


@dataclass(frozen=True)
class ProportionSpec:
    # table_ratio is relative to girdle_radius, heights and culet_size are absolute
    table_ratio: float
    crown_height: float
    girdle_radius: float
    pavilion_depth: float
    culet_size: float = 0.0
    girdle_thickness: float = 0.025

    def __post_init__(self) -> None:
        for field_name, value in asdict(self).items():
            require_finite(field_name, value)

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    @staticmethod
    def from_dict(payload: dict[str, object]) -> ProportionSpec:
        return ProportionSpec(
            table_ratio=float(payload["table_ratio"]),
            crown_height=float(payload["crown_height"]),
            girdle_radius=float(payload["girdle_radius"]),
            pavilion_depth=float(payload["pavilion_depth"]),
            culet_size=float(payload.get("culet_size", 0.0)),
            girdle_thickness=float(payload.get("girdle_thickness", 0.025)),
        )


REFERENCE_PROPORTIONS = ProportionSpec(
    table_ratio=0.56,
    crown_height=0.16,
    girdle_radius=1.0,
    pavilion_depth=0.43,
    culet_size=0.01,
)


def clamp_proportions(spec: ProportionSpec) -> ProportionSpec:
    girdle_radius = max(spec.girdle_radius, MIN_DIMENSION)
    table_ratio = _clamp(spec.table_ratio, MIN_DIMENSION, MAX_TABLE_RATIO)
    crown_height = max(spec.crown_height, MIN_DIMENSION)
    pavilion_depth = max(spec.pavilion_depth, MIN_DIMENSION)
    culet_size = _clamp(spec.culet_size, 0.0, MAX_CULET_RATIO * girdle_radius)
    girdle_thickness = _clamp(spec.girdle_thickness, 0.0, min(crown_height, pavilion_depth))

    clamped = replace(
        spec,
        table_ratio=table_ratio,
        crown_height=crown_height,
        girdle_radius=girdle_radius,
        pavilion_depth=pavilion_depth,
        culet_size=culet_size,
        girdle_thickness=girdle_thickness,
    )
    if clamped != spec:
        changed = {
            name: (before, after)
            for (name, before), after in zip(spec.to_dict().items(), clamped.to_dict().values())
            if before != after
        }
        logger.info("Clamped degenerate proportions: %s", changed)
    return clamped


__all__ = [
    "ProportionSpec",
    "REFERENCE_PROPORTIONS",
    "MIN_DIMENSION",
    "MAX_TABLE_RATIO",
    "clamp_proportions",
]
