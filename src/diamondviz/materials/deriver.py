from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from diamondviz.errors import require_finite
from diamondviz.grades.color import Tint, hex_to_rgb
from diamondviz.grades.fluorescence import DEFAULT_GLOW_COLOR
from diamondviz.inclusions.generator import INCLUSION_TYPES

DIAMOND_IOR = 2.417
BODY_THICKNESS = 1.5
CLEARCOAT = 1.0
CLEARCOAT_ROUGHNESS = 0.0

BASE_TRANSMISSION = 0.95
WARMTH_TRANSMISSION_LOSS = 0.1
VISIBILITY_TRANSMISSION_LOSS = 0.05
MAGNIFIED_TRANSMISSION_LOSS = 0.05
UV_BASE_TRANSMISSION = 0.7
UV_FLUORESCENCE_TRANSMISSION_LOSS = 0.3
HAZE_ROUGHNESS = 0.04
UV_EMISSIVE_GAIN = 0.5
UV_GLOW_BLEND = 0.3
MAGNIFIED_INCLUSION_SCALE = 2.5

DEFAULT_GLOW_RGB = hex_to_rgb(DEFAULT_GLOW_COLOR)
BLACK = (0.0, 0.0, 0.0)
CARBON_RGB = hex_to_rgb("#1a1a1a")
CRYSTAL_RGB = (1.0, 1.0, 1.0)


class DisplayMode(str, Enum):
    NORMAL = "normal"
    MAGNIFIED = "magnified"
    UV_LIT = "uv_lit"

    @classmethod
    def parse(cls, value: DisplayMode | str) -> DisplayMode:
        if isinstance(value, DisplayMode):
            return value
        key = str(value).strip()
        if key in _MODE_ALIASES:
            return _MODE_ALIASES[key]
        lowered = key.lower()
        if lowered in _MODE_ALIASES:
            return _MODE_ALIASES[lowered]
        msg = f"Unknown display mode: {value!r} (expected one of {sorted(m.value for m in cls)})"
        raise ValueError(msg)


_MODE_ALIASES = {
    "normal": DisplayMode.NORMAL,
    "magnified": DisplayMode.MAGNIFIED,
    "loupe": DisplayMode.MAGNIFIED,
    "uv_lit": DisplayMode.UV_LIT,
    "uvLit": DisplayMode.UV_LIT,
    "uvlit": DisplayMode.UV_LIT,
    "uv": DisplayMode.UV_LIT,
}


@dataclass(frozen=True)
class MaterialParams:
    color_tint: Tint
    color_rgb: tuple[float, float, float]
    transmission: float
    roughness: float
    clearcoat: float
    clearcoat_roughness: float
    ior: float
    thickness: float
    emissive_rgb: tuple[float, float, float]
    emissive_intensity: float
    inclusion_scale: float

    def to_dict(self) -> dict[str, object]:
        return {
            "color_tint": self.color_tint.to_dict(),
            "color_rgb": list(self.color_rgb),
            "transmission": self.transmission,
            "roughness": self.roughness,
            "clearcoat": self.clearcoat,
            "clearcoat_roughness": self.clearcoat_roughness,
            "ior": self.ior,
            "thickness": self.thickness,
            "emissive_rgb": list(self.emissive_rgb),
            "emissive_intensity": self.emissive_intensity,
            "inclusion_scale": self.inclusion_scale,
        }


@dataclass(frozen=True)
class InclusionMaterial:
    inclusion_type: str
    color_rgb: tuple[float, float, float]
    roughness: float
    metalness: float
    transmission: float
    opacity_scale: float

    def to_dict(self) -> dict[str, object]:
        return {
            "inclusion_type": self.inclusion_type,
            "color_rgb": list(self.color_rgb),
            "roughness": self.roughness,
            "metalness": self.metalness,
            "transmission": self.transmission,
            "opacity_scale": self.opacity_scale,
        }


# Diffuse types scatter more than the glassy ones
INCLUSION_ROUGHNESS = {
    "pinpoint": 0.1,
    "crystal": 0.1,
    "needle": 0.15,
    "feather": 0.35,
    "cloud": 0.45,
    "carbon": 0.8,
}
INCLUSION_TRANSMISSION = {
    "pinpoint": 0.6,
    "crystal": 0.6,
    "needle": 0.6,
    "feather": 0.5,
    "cloud": 0.3,
    "carbon": 0.0,
}


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def _blend(
    start: tuple[float, float, float],
    end: tuple[float, float, float],
    fraction: float,
) -> tuple[float, float, float]:
    return (
        start[0] + ((end[0] - start[0]) * fraction),
        start[1] + ((end[1] - start[1]) * fraction),
        start[2] + ((end[2] - start[2]) * fraction),
    )


def derive_material_params(
    tint: Tint,
    visibility: float,
    mode: DisplayMode | str = DisplayMode.NORMAL,
    fluorescence_intensity: float = 0.0,
    glow_rgb: tuple[float, float, float] = DEFAULT_GLOW_RGB,
) -> MaterialParams:
    display_mode = DisplayMode.parse(mode)
    visibility = _clamp01(require_finite("visibility", visibility))
    fluorescence = _clamp01(require_finite("fluorescence_intensity", fluorescence_intensity))
    warmth = _clamp01(require_finite("warmth", tint.warmth))

    color_rgb = tint.to_rgb()
    emissive_rgb = BLACK
    emissive_intensity = 0.0
    if display_mode is DisplayMode.UV_LIT:
        transmission = (
            UV_BASE_TRANSMISSION
            - (UV_FLUORESCENCE_TRANSMISSION_LOSS * fluorescence)
            - (WARMTH_TRANSMISSION_LOSS * warmth)
        )
        if fluorescence > 0.0:
            color_rgb = _blend(color_rgb, glow_rgb, UV_GLOW_BLEND * fluorescence)
            emissive_rgb = glow_rgb
            emissive_intensity = UV_EMISSIVE_GAIN * fluorescence
    else:
        transmission = (
            BASE_TRANSMISSION
            - (WARMTH_TRANSMISSION_LOSS * warmth)
            - (VISIBILITY_TRANSMISSION_LOSS * visibility)
        )
        if display_mode is DisplayMode.MAGNIFIED:
            transmission -= MAGNIFIED_TRANSMISSION_LOSS

    return MaterialParams(
        color_tint=tint,
        color_rgb=color_rgb,
        transmission=_clamp01(transmission),
        roughness=HAZE_ROUGHNESS * visibility,
        clearcoat=CLEARCOAT,
        clearcoat_roughness=CLEARCOAT_ROUGHNESS,
        ior=DIAMOND_IOR,
        thickness=BODY_THICKNESS,
        emissive_rgb=emissive_rgb,
        emissive_intensity=emissive_intensity,
        inclusion_scale=MAGNIFIED_INCLUSION_SCALE if display_mode is DisplayMode.MAGNIFIED else 1.0,
    )


def derive_inclusion_material(
    inclusion_type: str,
    mode: DisplayMode | str = DisplayMode.NORMAL,
) -> InclusionMaterial:
    if inclusion_type not in INCLUSION_TYPES:
        msg = f"Unknown inclusion type: {inclusion_type}"
        raise ValueError(msg)
    display_mode = DisplayMode.parse(mode)
    magnified = display_mode is DisplayMode.MAGNIFIED

    if inclusion_type == "carbon":
        return InclusionMaterial(
            inclusion_type=inclusion_type,
            color_rgb=CARBON_RGB,
            roughness=INCLUSION_ROUGHNESS[inclusion_type],
            metalness=0.3,
            transmission=INCLUSION_TRANSMISSION[inclusion_type],
            opacity_scale=1.5 if magnified else 1.0,
        )
    return InclusionMaterial(
        inclusion_type=inclusion_type,
        color_rgb=CRYSTAL_RGB,
        roughness=INCLUSION_ROUGHNESS[inclusion_type],
        metalness=0.0,
        transmission=INCLUSION_TRANSMISSION[inclusion_type],
        opacity_scale=1.2 if magnified else 0.7,
    )


__all__ = [
    "DisplayMode",
    "MaterialParams",
    "InclusionMaterial",
    "DIAMOND_IOR",
    "DEFAULT_GLOW_RGB",
    "INCLUSION_ROUGHNESS",
    "derive_material_params",
    "derive_inclusion_material",
]
