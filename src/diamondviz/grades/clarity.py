from __future__ import annotations

from dataclasses import dataclass

from diamondviz.errors import require_finite
from diamondviz.grades.keys import grade_aliases, resolve_grade_key

MONOTONIC_FIELDS = ("count", "max_size", "visibility")


@dataclass(frozen=True)
class ClarityParams:
    grade: str
    count: int
    max_size: float
    visibility: float
    center_bias: float
    carbon_bias: float
    name: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        for field_name in ("max_size", "visibility", "center_bias", "carbon_bias"):
            require_finite(field_name, getattr(self, field_name))
        if self.count < 0:
            msg = "count must be non-negative"
            raise ValueError(msg)
        if self.max_size < 0:
            msg = "max_size must be non-negative"
            raise ValueError(msg)
        if not 0 <= self.visibility <= 1:
            msg = "visibility must be in [0, 1]"
            raise ValueError(msg)
        if not 0 <= self.center_bias <= 1:
            msg = "center_bias must be in [0, 1]"
            raise ValueError(msg)
        if not 0 <= self.carbon_bias <= 1:
            msg = "carbon_bias must be in [0, 1]"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, object]:
        return {
            "grade": self.grade,
            "count": self.count,
            "max_size": self.max_size,
            "visibility": self.visibility,
            "center_bias": self.center_bias,
            "carbon_bias": self.carbon_bias,
            "name": self.name,
            "description": self.description,
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> ClarityParams:
        return ClarityParams(
            grade=str(payload["grade"]),
            count=int(payload["count"]),
            max_size=float(payload["max_size"]),
            visibility=float(payload["visibility"]),
            center_bias=float(payload.get("center_bias", 0.0)),
            carbon_bias=float(payload.get("carbon_bias", 0.0)),
            name=str(payload.get("name", "")),
            description=str(payload.get("description", "")),
        )


@dataclass(frozen=True)
class ClarityGradeTable:
    grades: tuple[ClarityParams, ...]
    version: str = "1"
    fallback_grade: str = "SI1"

    def __post_init__(self) -> None:
        if not self.grades:
            msg = "clarity grade table must contain at least one grade"
            raise ValueError(msg)
        keys = [params.grade for params in self.grades]
        if len(set(keys)) != len(keys):
            msg = f"clarity grade table has duplicate grades: {keys}"
            raise ValueError(msg)
        if self.fallback_grade not in keys:
            msg = f"fallback_grade {self.fallback_grade!r} is not in the table"
            raise ValueError(msg)
        for previous, current in zip(self.grades, self.grades[1:]):
            for field_name in MONOTONIC_FIELDS:
                if getattr(current, field_name) < getattr(previous, field_name):
                    msg = (
                        f"{field_name} must be non-decreasing along the clarity scale "
                        f"({previous.grade} -> {current.grade})"
                    )
                    raise ValueError(msg)

    def __len__(self) -> int:
        return len(self.grades)

    def __getitem__(self, index: int) -> ClarityParams:
        return self.grades[index]

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(params.grade for params in self.grades)

    @property
    def aliases(self) -> dict[str, str]:
        return grade_aliases((params.name, params.grade) for params in self.grades)

    def index_of(self, key: str | float) -> int:
        resolved = resolve_grade_key(
            key,
            self.keys,
            fallback=self.fallback_grade,
            kind="clarity grade",
            aliases=self.aliases,
        )
        return self.keys.index(resolved)

    def resolve(self, key: str | float) -> ClarityParams:
        return self.grades[self.index_of(key)]

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "fallback_grade": self.fallback_grade,
            "grades": [params.to_dict() for params in self.grades],
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> ClarityGradeTable:
        return ClarityGradeTable(
            grades=tuple(ClarityParams.from_dict(item) for item in list(payload["grades"])),
            version=str(payload.get("version", "1")),
            fallback_grade=str(payload.get("fallback_grade", "SI1")),
        )


DEFAULT_CLARITY_TABLE = ClarityGradeTable(
    grades=(
        ClarityParams(
            "FL", 0, 0.0, 0.0, 0.0, 0.0,
            "Flawless",
            "No inclusions or blemishes visible under 10x magnification",
        ),
        ClarityParams(
            "IF", 0, 0.0, 0.0, 0.0, 0.0,
            "Internally Flawless",
            "No inclusions visible under 10x magnification",
        ),
        ClarityParams(
            "VVS1", 1, 0.015, 0.15, 0.05, 0.0,
            "Very Very Slightly Included 1",
            "Minute inclusions very difficult to see under 10x",
        ),
        ClarityParams(
            "VVS2", 2, 0.02, 0.25, 0.10, 0.0,
            "Very Very Slightly Included 2",
            "Minute inclusions difficult to see under 10x",
        ),
        ClarityParams(
            "VS1", 3, 0.03, 0.40, 0.15, 0.05,
            "Very Slightly Included 1",
            "Minor inclusions somewhat difficult to see under 10x",
        ),
        ClarityParams(
            "VS2", 5, 0.04, 0.55, 0.25, 0.10,
            "Very Slightly Included 2",
            "Minor inclusions easily visible under 10x",
        ),
        ClarityParams(
            "SI1", 7, 0.06, 0.70, 0.40, 0.20,
            "Slightly Included 1",
            "Noticeable inclusions under 10x, may be eye-visible",
        ),
        ClarityParams(
            "SI2", 10, 0.08, 0.85, 0.55, 0.30,
            "Slightly Included 2",
            "Noticeable inclusions, often eye-visible",
        ),
        ClarityParams(
            "I1", 15, 0.12, 1.0, 0.70, 0.50,
            "Included 1",
            "Obvious inclusions, visible to naked eye",
        ),
        ClarityParams(
            "I2", 22, 0.18, 1.0, 0.85, 0.70,
            "Included 2",
            "Many obvious inclusions affecting transparency",
        ),
        ClarityParams(
            "I3", 30, 0.25, 1.0, 0.95, 0.85,
            "Included 3",
            "Many large inclusions severely affecting beauty",
        ),
    ),
)

# Grades up to and including this one count as eye-clean.
EYE_CLEAN_LIMIT = "SI1"


def is_eye_clean(key: str | float, table: ClarityGradeTable = DEFAULT_CLARITY_TABLE) -> bool:
    return table.index_of(key) <= table.index_of(EYE_CLEAN_LIMIT)


__all__ = [
    "ClarityParams",
    "ClarityGradeTable",
    "DEFAULT_CLARITY_TABLE",
    "is_eye_clean",
]
