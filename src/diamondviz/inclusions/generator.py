from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from diamondviz.errors import require_finite
from diamondviz.grades.clarity import DEFAULT_CLARITY_TABLE, ClarityGradeTable
from diamondviz.inclusions.seeded import seeded_random

logger = logging.getLogger(__name__)

INCLUSION_TYPES = ("pinpoint", "feather", "cloud", "crystal", "needle", "carbon")
NON_CARBON_TYPES = ("pinpoint", "feather", "cloud", "crystal", "needle")

SUBSEED_STRIDE = 137.5

CENTER_RADIUS = 0.3
OUTER_RADIUS_START = 0.3
OUTER_RADIUS_SPAN = 0.5
VERTICAL_FLATTEN = 0.8

# Draw indices within one inclusion's sub-seed
DRAW_CARBON = 1
DRAW_CENTER = 2
DRAW_RADIUS = 3
DRAW_THETA = 4
DRAW_PHI = 5
DRAW_TYPE = 6
DRAW_SIZE = 7
DRAW_ROTATION = (8, 9, 10)
DRAW_OPACITY = 11

FRAME_COLUMNS = ["type", "x", "y", "z", "size", "rx", "ry", "rz", "opacity", "is_carbon"]


@dataclass(frozen=True)
class Inclusion:
    type: str
    position: tuple[float, float, float]
    size: float
    rotation: tuple[float, float, float]
    opacity: float
    is_carbon: bool = False

    def __post_init__(self) -> None:
        if self.type not in INCLUSION_TYPES:
            msg = f"Unknown inclusion type: {self.type}"
            raise ValueError(msg)
        if self.size < 0:
            msg = "size must be non-negative"
            raise ValueError(msg)
        if not 0 <= self.opacity <= 1:
            msg = "opacity must be in [0, 1]"
            raise ValueError(msg)

    @property
    def area(self) -> float:
        return self.size * self.opacity

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type,
            "x": self.position[0],
            "y": self.position[1],
            "z": self.position[2],
            "size": self.size,
            "rx": self.rotation[0],
            "ry": self.rotation[1],
            "rz": self.rotation[2],
            "opacity": self.opacity,
            "is_carbon": self.is_carbon,
        }


def _place(subseed: float, center_bias: float) -> tuple[float, float, float]:
    if seeded_random(subseed, DRAW_CENTER) < center_bias:
        radius = seeded_random(subseed, DRAW_RADIUS) * CENTER_RADIUS
    else:
        radius = OUTER_RADIUS_START + (seeded_random(subseed, DRAW_RADIUS) * OUTER_RADIUS_SPAN)
    theta = seeded_random(subseed, DRAW_THETA) * 2.0 * math.pi
    phi = seeded_random(subseed, DRAW_PHI) * math.pi
    return (
        radius * math.sin(phi) * math.cos(theta),
        radius * math.cos(phi) * VERTICAL_FLATTEN,
        radius * math.sin(phi) * math.sin(theta),
    )


def generate_inclusions(
    grade: str | float,
    seed: float,
    table: ClarityGradeTable = DEFAULT_CLARITY_TABLE,
) -> list[Inclusion]:
    seed = require_finite("seed", seed)
    params = table.resolve(grade)
    inclusions: list[Inclusion] = []
    for idx in range(params.count):
        subseed = seed + (idx * SUBSEED_STRIDE)
        is_carbon = seeded_random(subseed, DRAW_CARBON) < params.carbon_bias
        if is_carbon:
            kind = "carbon"
        else:
            pick = int(seeded_random(subseed, DRAW_TYPE) * len(NON_CARBON_TYPES))
            kind = NON_CARBON_TYPES[min(pick, len(NON_CARBON_TYPES) - 1)]
        inclusions.append(
            Inclusion(
                type=kind,
                position=_place(subseed, params.center_bias),
                size=params.max_size * (0.4 + (0.6 * seeded_random(subseed, DRAW_SIZE))),
                rotation=tuple(seeded_random(subseed, draw) * math.pi for draw in DRAW_ROTATION),
                opacity=params.visibility * (0.6 + (0.4 * seeded_random(subseed, DRAW_OPACITY))),
                is_carbon=is_carbon,
            )
        )
    logger.debug("Generated %d inclusions for %s (seed=%s)", len(inclusions), params.grade, seed)
    return inclusions


def defect_area(inclusions: Iterable[Inclusion]) -> float:
    return float(sum(item.area for item in inclusions))


def inclusions_to_frame(inclusions: list[Inclusion]) -> pd.DataFrame:
    rows = [item.to_dict() for item in inclusions]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def defect_area_by_grade(
    seeds: Iterable[float],
    table: ClarityGradeTable = DEFAULT_CLARITY_TABLE,
) -> pd.DataFrame:
    """Long-form defect area per (grade, seed), in table order."""
    rows = []
    for seed in seeds:
        for params in table.grades:
            inclusions = generate_inclusions(params.grade, seed, table=table)
            rows.append(
                {
                    "grade": params.grade,
                    "seed": seed,
                    "count": len(inclusions),
                    "defect_area": defect_area(inclusions),
                    "carbon_count": sum(1 for item in inclusions if item.is_carbon),
                }
            )
    return pd.DataFrame(rows)


__all__ = [
    "INCLUSION_TYPES",
    "NON_CARBON_TYPES",
    "Inclusion",
    "generate_inclusions",
    "defect_area",
    "inclusions_to_frame",
    "defect_area_by_grade",
]
