from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from diamondviz.errors import require_finite
from diamondviz.geometry.brilliant import Mesh, build_geometry
from diamondviz.geometry.checks import contain_point
from diamondviz.geometry.proportions import REFERENCE_PROPORTIONS, ProportionSpec
from diamondviz.grades.clarity import ClarityParams
from diamondviz.grades.color import Tint, interpolate_color_grade
from diamondviz.grades.fluorescence import FluorescenceLevel, fluorescence_level
from diamondviz.grades.tables import DEFAULT_GRADE_TABLES, GradeTables
from diamondviz.inclusions.generator import Inclusion, defect_area, generate_inclusions
from diamondviz.materials.deriver import (
    DisplayMode,
    InclusionMaterial,
    MaterialParams,
    derive_inclusion_material,
    derive_material_params,
)

if TYPE_CHECKING:
    from functools import _CacheInfo

logger = logging.getLogger(__name__)

SCENE_CACHE_SIZE = 256
CONTAINMENT_MARGIN = 0.9


@dataclass(frozen=True, eq=False)
class DiamondScene:
    """Everything a renderer needs for one stone, as plain values."""

    color_position: float
    color_grade: str
    clarity: ClarityParams
    seed: float
    mode: DisplayMode
    fluorescence: FluorescenceLevel
    proportions: ProportionSpec
    mesh: Mesh
    tint: Tint
    material: MaterialParams
    inclusions: tuple[Inclusion, ...]
    inclusion_materials: tuple[InclusionMaterial, ...]

    @property
    def defect_area(self) -> float:
        return defect_area(self.inclusions)

    def inclusion_material(self, inclusion_type: str) -> InclusionMaterial:
        for material in self.inclusion_materials:
            if material.inclusion_type == inclusion_type:
                return material
        msg = f"No material for inclusion type: {inclusion_type}"
        raise KeyError(msg)

    def placed_inclusions(self) -> list[dict[str, Any]]:
        radius = self.proportions.girdle_radius
        placed = []
        for item in self.inclusions:
            scaled = (item.position[0] * radius, item.position[1] * radius, item.position[2] * radius)
            position = contain_point(scaled, self.proportions, margin=CONTAINMENT_MARGIN)
            material = self.inclusion_material(item.type)
            payload = item.to_dict()
            payload.update(
                {
                    "render_position": list(position),
                    "render_size": item.size * radius * self.material.inclusion_scale,
                    "render_opacity": min(1.0, item.opacity * material.opacity_scale),
                }
            )
            placed.append(payload)
        return placed

    def to_dict(self) -> dict[str, Any]:
        return {
            "color_position": self.color_position,
            "color_grade": self.color_grade,
            "clarity": self.clarity.to_dict(),
            "seed": self.seed,
            "mode": self.mode.value,
            "fluorescence": self.fluorescence.to_dict(),
            "proportions": self.proportions.to_dict(),
            "mesh": self.mesh.to_dict(),
            "tint": self.tint.to_dict(),
            "material": self.material.to_dict(),
            "inclusions": self.placed_inclusions(),
            "inclusion_materials": [item.to_dict() for item in self.inclusion_materials],
            "defect_area": self.defect_area,
        }


@lru_cache(maxsize=SCENE_CACHE_SIZE)
def _build_scene_cached(
    color_position: float,
    clarity_grade: str | int,
    seed: float,
    proportions: ProportionSpec,
    mode: DisplayMode,
    fluorescence: str | int,
    tables: GradeTables,
) -> DiamondScene:
    clarity = tables.clarity.resolve(clarity_grade)
    level = fluorescence_level(fluorescence)
    tint = interpolate_color_grade(color_position, tables.color)
    last = len(tables.color) - 1
    color_grade = tables.color[max(0, min(last, int(round(color_position))))].grade
    inclusions = tuple(generate_inclusions(clarity.grade, seed, table=tables.clarity))
    material = derive_material_params(
        tint,
        clarity.visibility,
        mode,
        fluorescence_intensity=level.intensity,
        glow_rgb=level.glow_rgb,
    )
    inclusion_types = sorted({item.type for item in inclusions})
    logger.info(
        "Built scene: color=%s clarity=%s seed=%s mode=%s inclusions=%d",
        color_grade,
        clarity.grade,
        seed,
        mode.value,
        len(inclusions),
    )
    return DiamondScene(
        color_position=color_position,
        color_grade=color_grade,
        clarity=clarity,
        seed=seed,
        mode=mode,
        fluorescence=level,
        proportions=proportions,
        mesh=build_geometry(proportions),
        tint=tint,
        material=material,
        inclusions=inclusions,
        inclusion_materials=tuple(derive_inclusion_material(kind, mode) for kind in inclusion_types),
    )


def build_scene(
    color_position: float = 0.0,
    clarity_grade: str | int = "VS1",
    seed: float = 42,
    proportions: ProportionSpec = REFERENCE_PROPORTIONS,
    mode: DisplayMode | str = DisplayMode.NORMAL,
    fluorescence: str | int = "None",
    tables: GradeTables = DEFAULT_GRADE_TABLES,
) -> DiamondScene:
    """Assemble a scene, reusing the cached result for repeated inputs."""
    return _build_scene_cached(
        require_finite("color_position", color_position),
        clarity_grade,
        require_finite("seed", seed),
        proportions,
        DisplayMode.parse(mode),
        fluorescence,
        tables,
    )


def scene_cache_info() -> _CacheInfo:
    return _build_scene_cached.cache_info()


def clear_scene_cache() -> None:
    _build_scene_cached.cache_clear()


__all__ = [
    "DiamondScene",
    "build_scene",
    "scene_cache_info",
    "clear_scene_cache",
]
