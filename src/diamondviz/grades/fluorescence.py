from __future__ import annotations

from dataclasses import dataclass

from diamondviz.grades.color import hex_to_rgb
from diamondviz.grades.keys import resolve_grade_key


@dataclass(frozen=True)
class FluorescenceLevel:
    level: str
    intensity: float
    glow_color: str
    price_impact_pct: float
    description: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.intensity <= 1:
            msg = "intensity must be in [0, 1]"
            raise ValueError(msg)

    @property
    def glow_rgb(self) -> tuple[float, float, float]:
        return hex_to_rgb(self.glow_color)

    def to_dict(self) -> dict[str, object]:
        return {
            "level": self.level,
            "intensity": self.intensity,
            "glow_color": self.glow_color,
            "price_impact_pct": self.price_impact_pct,
            "description": self.description,
        }


FLUORESCENCE_LEVELS: tuple[FluorescenceLevel, ...] = (
    FluorescenceLevel("None", 0.0, "#0066ff", 0.0, "No fluorescence visible under UV light"),
    FluorescenceLevel(
        "Faint", 0.15, "#3388ff", -2.0,
        "Slight blue glow under UV light, not visible in normal lighting",
    ),
    FluorescenceLevel("Medium", 0.35, "#4499ff", -5.0, "Moderate blue glow visible under UV light"),
    FluorescenceLevel(
        "Strong", 0.6, "#55aaff", -10.0,
        "Pronounced blue glow under UV light, may affect daylight appearance",
    ),
    FluorescenceLevel(
        "Very Strong", 0.9, "#66bbff", -15.0,
        "Intense blue glow, may cause oily or milky appearance in daylight",
    ),
)

DEFAULT_GLOW_COLOR = FLUORESCENCE_LEVELS[0].glow_color


def fluorescence_level(key: str | float) -> FluorescenceLevel:
    """Look up a fluorescence level by name ("Medium") or index (2)."""
    keys = tuple(level.level for level in FLUORESCENCE_LEVELS)
    resolved = resolve_grade_key(key, keys, fallback="None", kind="fluorescence level")
    return FLUORESCENCE_LEVELS[keys.index(resolved)]


__all__ = [
    "FluorescenceLevel",
    "FLUORESCENCE_LEVELS",
    "DEFAULT_GLOW_COLOR",
    "fluorescence_level",
]
