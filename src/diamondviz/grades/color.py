from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass
from functools import lru_cache

from diamondviz.errors import require_finite
from diamondviz.grades.keys import grade_aliases, resolve_grade_key

# Colorless grades carry no saturation; they render with a faint cool cast.
COLORLESS_HUE = 210.0
COLORLESS_SATURATION = 0.05


def hex_to_rgb(value: str) -> tuple[float, float, float]:
    text = value.lstrip("#")
    if len(text) != 6:
        msg = f"Expected a #rrggbb colour, got {value!r}"
        raise ValueError(msg)
    return (
        int(text[0:2], 16) / 255.0,
        int(text[2:4], 16) / 255.0,
        int(text[4:6], 16) / 255.0,
    )


def rgb_to_hex(rgb: tuple[float, float, float]) -> str:
    channels = [max(0, min(255, int(round(channel * 255.0)))) for channel in rgb]
    return "#{:02x}{:02x}{:02x}".format(*channels)


@dataclass(frozen=True)
class Tint:
    hue: float
    saturation: float
    lightness: float
    warmth: float = 0.0

    def to_rgb(self) -> tuple[float, float, float]:
        if self.saturation <= 0.0:
            hue, saturation = COLORLESS_HUE, COLORLESS_SATURATION
        else:
            hue, saturation = self.hue, self.saturation
        red, green, blue = colorsys.hls_to_rgb((hue % 360.0) / 360.0, self.lightness, saturation)
        return (red, green, blue)

    def to_hex(self) -> str:
        return rgb_to_hex(self.to_rgb())

    def to_dict(self) -> dict[str, float | str]:
        return {
            "hue": self.hue,
            "saturation": self.saturation,
            "lightness": self.lightness,
            "warmth": self.warmth,
            "hex": self.to_hex(),
        }


@dataclass(frozen=True)
class ColorAnchor:
    grade: str
    hue: float
    saturation: float
    lightness: float
    warmth: float
    name: str = ""

    def __post_init__(self) -> None:
        for field_name in ("hue", "saturation", "lightness", "warmth"):
            require_finite(field_name, getattr(self, field_name))
        if not 0 <= self.saturation <= 1:
            msg = "saturation must be in [0, 1]"
            raise ValueError(msg)
        if not 0 <= self.lightness <= 1:
            msg = "lightness must be in [0, 1]"
            raise ValueError(msg)
        if not 0 <= self.warmth <= 1:
            msg = "warmth must be in [0, 1]"
            raise ValueError(msg)

    @property
    def tint(self) -> Tint:
        return Tint(
            hue=self.hue,
            saturation=self.saturation,
            lightness=self.lightness,
            warmth=self.warmth,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "grade": self.grade,
            "hue": self.hue,
            "saturation": self.saturation,
            "lightness": self.lightness,
            "warmth": self.warmth,
            "name": self.name,
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> ColorAnchor:
        return ColorAnchor(
            grade=str(payload["grade"]),
            hue=float(payload["hue"]),
            saturation=float(payload["saturation"]),
            lightness=float(payload["lightness"]),
            warmth=float(payload.get("warmth", 0.0)),
            name=str(payload.get("name", "")),
        )


@dataclass(frozen=True)
class ColorGradeTable:
    anchors: tuple[ColorAnchor, ...]
    version: str = "1"
    fallback_grade: str = "G"

    def __post_init__(self) -> None:
        if not self.anchors:
            msg = "color grade table must contain at least one anchor"
            raise ValueError(msg)
        grades = [anchor.grade for anchor in self.anchors]
        if len(set(grades)) != len(grades):
            msg = f"color grade table has duplicate grades: {grades}"
            raise ValueError(msg)
        if self.fallback_grade not in grades:
            msg = f"fallback_grade {self.fallback_grade!r} is not in the table"
            raise ValueError(msg)

    def __len__(self) -> int:
        return len(self.anchors)

    def __getitem__(self, index: int) -> ColorAnchor:
        return self.anchors[index]

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(anchor.grade for anchor in self.anchors)

    @property
    def aliases(self) -> dict[str, str]:
        # shared band names ("Near Colorless") are ambiguous and left out
        return grade_aliases((anchor.name, anchor.grade) for anchor in self.anchors)

    def position(self, key: str | float) -> int:
        resolved = resolve_grade_key(
            key,
            self.keys,
            fallback=self.fallback_grade,
            kind="color grade",
            aliases=self.aliases,
        )
        return self.keys.index(resolved)

    def anchor(self, key: str | float) -> ColorAnchor:
        return self.anchors[self.position(key)]

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "fallback_grade": self.fallback_grade,
            "anchors": [anchor.to_dict() for anchor in self.anchors],
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> ColorGradeTable:
        return ColorGradeTable(
            anchors=tuple(ColorAnchor.from_dict(item) for item in list(payload["anchors"])),
            version=str(payload.get("version", "1")),
            fallback_grade=str(payload.get("fallback_grade", "G")),
        )


def _anchor(grade: str, hue: float, saturation: float, lightness: float, warmth: float, name: str) -> ColorAnchor:
    return ColorAnchor(grade, hue, saturation, lightness, warmth, name)


DEFAULT_COLOR_TABLE = ColorGradeTable(
    anchors=(
        _anchor("D", 0.0, 0.00, 1.00, 0.00, "Absolutely Colorless"),
        _anchor("E", 0.0, 0.00, 0.99, 0.02, "Colorless"),
        _anchor("F", 0.0, 0.00, 0.98, 0.04, "Colorless"),
        _anchor("G", 45.0, 0.03, 0.97, 0.08, "Near Colorless"),
        _anchor("H", 45.0, 0.06, 0.96, 0.12, "Near Colorless"),
        _anchor("I", 48.0, 0.10, 0.95, 0.18, "Near Colorless"),
        _anchor("J", 50.0, 0.15, 0.94, 0.25, "Near Colorless"),
        _anchor("K", 52.0, 0.22, 0.92, 0.35, "Faint Yellow"),
        _anchor("L", 52.0, 0.28, 0.90, 0.42, "Faint Yellow"),
        _anchor("M", 50.0, 0.35, 0.88, 0.50, "Faint Yellow"),
        _anchor("N", 48.0, 0.42, 0.85, 0.58, "Very Light Yellow"),
        _anchor("O", 46.0, 0.48, 0.82, 0.65, "Very Light Yellow"),
        _anchor("P", 44.0, 0.52, 0.80, 0.70, "Very Light Yellow"),
        _anchor("Q", 42.0, 0.55, 0.78, 0.75, "Very Light Yellow"),
        _anchor("R", 40.0, 0.58, 0.76, 0.78, "Very Light Yellow"),
        _anchor("S", 38.0, 0.60, 0.74, 0.82, "Light Yellow"),
        _anchor("T", 36.0, 0.62, 0.72, 0.85, "Light Yellow"),
        _anchor("U", 34.0, 0.64, 0.70, 0.88, "Light Yellow"),
        _anchor("V", 32.0, 0.66, 0.68, 0.90, "Light Yellow"),
        _anchor("W", 30.0, 0.68, 0.66, 0.92, "Light Yellow"),
        _anchor("X", 28.0, 0.70, 0.64, 0.94, "Light Yellow"),
        _anchor("Y", 26.0, 0.72, 0.62, 0.96, "Light Yellow"),
        _anchor("Z", 24.0, 0.75, 0.60, 1.00, "Light Yellow"),
    ),
)


def _lerp(start: float, end: float, fraction: float) -> float:
    return start + ((end - start) * fraction)


@lru_cache(maxsize=4096)
def _interpolate_cached(position: float, table: ColorGradeTable) -> Tint:
    last = len(table) - 1
    if position <= 0:
        return table[0].tint
    if position >= last:
        return table[last].tint

    lower = math.floor(position)
    upper = math.ceil(position)
    fraction = position - lower
    if fraction == 0.0:
        return table[lower].tint

    start, end = table[lower], table[upper]
    return Tint(
        hue=_lerp(start.hue, end.hue, fraction),
        saturation=_lerp(start.saturation, end.saturation, fraction),
        lightness=_lerp(start.lightness, end.lightness, fraction),
        warmth=_lerp(start.warmth, end.warmth, fraction),
    )


def interpolate_color_grade(
    position: float,
    table: ColorGradeTable = DEFAULT_COLOR_TABLE,
) -> Tint:
    """Tint at a continuous position on the color-grade axis, clamped to the end anchors."""
    position = require_finite("position", position)
    return _interpolate_cached(position, table)


def color_grade_position(key: str | float, table: ColorGradeTable = DEFAULT_COLOR_TABLE) -> int:
    return table.position(key)


__all__ = [
    "Tint",
    "ColorAnchor",
    "ColorGradeTable",
    "DEFAULT_COLOR_TABLE",
    "interpolate_color_grade",
    "color_grade_position",
    "hex_to_rgb",
    "rgb_to_hex",
]
