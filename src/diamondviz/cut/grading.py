from __future__ import annotations

import math
from dataclasses import asdict, dataclass

from diamondviz.errors import require_finite
from diamondviz.geometry.proportions import ProportionSpec

DEEP_DEPTH_PCT = 65.0
SHALLOW_DEPTH_PCT = 58.0

# (min score, grade, description), best first
CUT_GRADE_THRESHOLDS = (
    (
        90.0,
        "Excellent",
        "Maximum light return with exceptional brilliance, fire, and scintillation. "
        "This represents the top tier of cut quality.",
    ),
    (
        75.0,
        "Very Good",
        "Superior light performance with minor deviations from ideal. Excellent value choice.",
    ),
    (60.0, "Good", "Good light performance. Some light leakage but still attractive."),
    (
        45.0,
        "Fair",
        "Noticeable light leakage and reduced brilliance. Budget-conscious option.",
    ),
    (
        float("-inf"),
        "Poor",
        "Significant light leakage. Diamond appears dull compared to better cuts.",
    ),
)


@dataclass(frozen=True)
class CutParameters:
    """Cut proportions as graded: percentages of the girdle diameter, angles in degrees."""

    table_pct: float
    crown_angle_deg: float
    pavilion_angle_deg: float
    depth_pct: float
    girdle_thickness_pct: float

    def __post_init__(self) -> None:
        for field_name, value in asdict(self).items():
            require_finite(field_name, value)
        if not 0 < self.table_pct < 100:
            msg = "table_pct must be in (0, 100)"
            raise ValueError(msg)
        if not 0 < self.crown_angle_deg < 90:
            msg = "crown_angle_deg must be in (0, 90)"
            raise ValueError(msg)
        if not 0 < self.pavilion_angle_deg < 90:
            msg = "pavilion_angle_deg must be in (0, 90)"
            raise ValueError(msg)
        if self.depth_pct <= 0:
            msg = "depth_pct must be positive"
            raise ValueError(msg)
        if self.girdle_thickness_pct < 0:
            msg = "girdle_thickness_pct must be non-negative"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class CutGradeResult:
    grade: str
    brilliance: float
    fire: float
    scintillation: float
    description: str

    @property
    def average_score(self) -> float:
        return (self.brilliance + self.fire + self.scintillation) / 3.0

    def to_dict(self) -> dict[str, object]:
        return {
            "grade": self.grade,
            "brilliance": self.brilliance,
            "fire": self.fire,
            "scintillation": self.scintillation,
            "average_score": self.average_score,
            "description": self.description,
        }


IDEAL_CUT = CutParameters(57.0, 34.5, 40.8, 62.0, 3.5)

CUT_GRADE_PRESETS: dict[str, CutParameters] = {
    "Excellent": IDEAL_CUT,
    "Very Good": CutParameters(60.0, 33.0, 41.5, 63.0, 4.0),
    "Good": CutParameters(64.0, 31.0, 42.5, 65.0, 5.0),
    "Fair": CutParameters(68.0, 28.0, 44.0, 68.0, 6.0),
    "Poor": CutParameters(72.0, 25.0, 46.0, 72.0, 8.0),
}


def calculate_cut_grade(params: CutParameters) -> CutGradeResult:
    table_dev = abs(params.table_pct - IDEAL_CUT.table_pct)
    crown_dev = abs(params.crown_angle_deg - IDEAL_CUT.crown_angle_deg)
    pavilion_dev = abs(params.pavilion_angle_deg - IDEAL_CUT.pavilion_angle_deg)
    depth_dev = abs(params.depth_pct - IDEAL_CUT.depth_pct)

    brilliance = max(0.0, 100.0 - (table_dev * 2.0) - (depth_dev * 1.5) - (pavilion_dev * 3.0))
    fire = max(0.0, 100.0 - (crown_dev * 4.0) - (table_dev * 1.5) - (pavilion_dev * 2.0))
    scintillation = max(0.0, 100.0 - (table_dev * 1.5) - (crown_dev * 2.0) - (pavilion_dev * 2.0))

    average = (brilliance + fire + scintillation) / 3.0
    for threshold, grade, description in CUT_GRADE_THRESHOLDS:
        if average >= threshold:
            break
    return CutGradeResult(
        grade=grade,
        brilliance=brilliance,
        fire=fire,
        scintillation=scintillation,
        description=description,
    )


def light_exit(params: CutParameters) -> str:
    """Where most returning light leaves the stone: crown, sides or bottom."""
    if calculate_cut_grade(params).grade == "Excellent":
        return "crown"
    if params.depth_pct > DEEP_DEPTH_PCT:
        return "sides"
    return "bottom"


def is_deep(params: CutParameters) -> bool:
    return params.depth_pct > DEEP_DEPTH_PCT


def is_shallow(params: CutParameters) -> bool:
    return params.depth_pct < SHALLOW_DEPTH_PCT


def proportions_from_cut(
    params: CutParameters,
    girdle_radius: float = 1.0,
    culet_size: float = 0.0,
) -> ProportionSpec:
    girdle_radius = require_finite("girdle_radius", girdle_radius)
    culet_size = require_finite("culet_size", culet_size)
    table_ratio = params.table_pct / 100.0
    crown_run = girdle_radius * (1.0 - table_ratio)
    pavilion_run = max(girdle_radius - (culet_size / 2.0), 0.0)
    return ProportionSpec(
        table_ratio=table_ratio,
        crown_height=crown_run * math.tan(math.radians(params.crown_angle_deg)),
        girdle_radius=girdle_radius,
        pavilion_depth=pavilion_run * math.tan(math.radians(params.pavilion_angle_deg)),
        culet_size=culet_size,
        girdle_thickness=(params.girdle_thickness_pct / 100.0) * (2.0 * girdle_radius),
    )


__all__ = [
    "CutParameters",
    "CutGradeResult",
    "IDEAL_CUT",
    "CUT_GRADE_PRESETS",
    "calculate_cut_grade",
    "light_exit",
    "is_deep",
    "is_shallow",
    "proportions_from_cut",
]
