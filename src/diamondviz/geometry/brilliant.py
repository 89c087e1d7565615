from __future__ import annotations

import logging
from dataclasses import dataclass
from math import cos, pi, sin

import numpy as np

from diamondviz.geometry.proportions import ProportionSpec, clamp_proportions

logger = logging.getLogger(__name__)

MAIN_FACETS = 8
GIRDLE_SEGMENTS = 16

STAR_RADIUS_BLEND = 0.35
STAR_HEIGHT_RATIO = 0.55
PAVILION_MAIN_RADIUS_RATIO = 0.45
PAVILION_MAIN_DEPTH_RATIO = 0.55

# Vertex index layout
TABLE_CENTER = 0
TABLE_START = 1
STAR_START = TABLE_START + MAIN_FACETS
UPPER_GIRDLE_START = STAR_START + MAIN_FACETS
LOWER_GIRDLE_START = UPPER_GIRDLE_START + GIRDLE_SEGMENTS
PAVILION_START = LOWER_GIRDLE_START + GIRDLE_SEGMENTS
CULET = PAVILION_START + MAIN_FACETS
VERTEX_COUNT = CULET + 1

# table 8, crown 40, girdle band 32, pavilion 32
FACE_COUNT = 112


@dataclass(frozen=True, eq=False)
class Mesh:
    vertices: np.ndarray
    faces: np.ndarray

    def __post_init__(self) -> None:
        if self.vertices.ndim != 2 or self.vertices.shape[1] != 3:
            msg = "vertices must have shape (n, 3)"
            raise ValueError(msg)
        if self.faces.ndim != 2 or self.faces.shape[1] != 3:
            msg = "faces must have shape (m, 3)"
            raise ValueError(msg)
        if self.faces.size and (self.faces.min() < 0 or self.faces.max() >= len(self.vertices)):
            msg = "faces reference vertices outside the vertex array"
            raise ValueError(msg)
        self.vertices.setflags(write=False)
        self.faces.setflags(write=False)

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def face_count(self) -> int:
        return int(self.faces.shape[0])

    def to_dict(self) -> dict[str, list]:
        return {
            "vertices": self.vertices.astype(float).tolist(),
            "faces": self.faces.astype(int).tolist(),
        }


def _ring(count: int, radius: float, y: float, offset: float) -> list[tuple[float, float, float]]:
    step = (2.0 * pi) / count
    return [
        (radius * cos(offset + (idx * step)), y, radius * sin(offset + (idx * step)))
        for idx in range(count)
    ]


def _brilliant_vertices(spec: ProportionSpec) -> np.ndarray:
    girdle_radius = spec.girdle_radius
    table_radius = spec.table_ratio * girdle_radius
    star_radius = table_radius + (STAR_RADIUS_BLEND * (girdle_radius - table_radius))
    half_girdle = spec.girdle_thickness / 2.0
    half_step = pi / MAIN_FACETS

    points: list[tuple[float, float, float]] = [(0.0, spec.crown_height, 0.0)]
    points += _ring(MAIN_FACETS, table_radius, spec.crown_height, half_step)
    points += _ring(MAIN_FACETS, star_radius, STAR_HEIGHT_RATIO * spec.crown_height, 0.0)
    points += _ring(GIRDLE_SEGMENTS, girdle_radius, half_girdle, 0.0)
    points += _ring(GIRDLE_SEGMENTS, girdle_radius, -half_girdle, 0.0)
    points += _ring(
        MAIN_FACETS,
        PAVILION_MAIN_RADIUS_RATIO * girdle_radius,
        -PAVILION_MAIN_DEPTH_RATIO * spec.pavilion_depth,
        0.0,
    )
    points.append((0.0, -spec.pavilion_depth, 0.0))
    return np.asarray(points, dtype=float)


def _brilliant_faces() -> np.ndarray:
    # star i and pavilion main i share the azimuth of girdle point 2i, table corner i sits over 2i + 1
    def table(i: int) -> int:
        return TABLE_START + (i % MAIN_FACETS)

    def star(i: int) -> int:
        return STAR_START + (i % MAIN_FACETS)

    def upper(j: int) -> int:
        return UPPER_GIRDLE_START + (j % GIRDLE_SEGMENTS)

    def lower(j: int) -> int:
        return LOWER_GIRDLE_START + (j % GIRDLE_SEGMENTS)

    def pavilion(i: int) -> int:
        return PAVILION_START + (i % MAIN_FACETS)

    faces: list[tuple[int, int, int]] = []

    # Table fan
    for i in range(MAIN_FACETS):
        faces.append((TABLE_CENTER, table(i + 1), table(i)))

    # Crown: star facet, bezel kite split along the star chord, upper girdle pair
    for i in range(MAIN_FACETS):
        j = 2 * i
        faces.append((table(i), table(i + 1), star(i + 1)))
        faces.append((table(i), star(i + 1), star(i)))
        faces.append((star(i), star(i + 1), upper(j + 1)))
        faces.append((star(i), upper(j + 1), upper(j)))
        faces.append((star(i + 1), upper(j + 2), upper(j + 1)))

    # Girdle band
    for j in range(GIRDLE_SEGMENTS):
        faces.append((upper(j), upper(j + 1), lower(j + 1)))
        faces.append((upper(j), lower(j + 1), lower(j)))

    # Pavilion: lower girdle pair, main facet, lower fan to the culet
    for i in range(MAIN_FACETS):
        j = 2 * i
        faces.append((pavilion(i), lower(j), lower(j + 1)))
        faces.append((pavilion(i + 1), lower(j + 1), lower(j + 2)))
        faces.append((pavilion(i), lower(j + 1), pavilion(i + 1)))
        faces.append((pavilion(i), pavilion(i + 1), CULET))

    return np.asarray(faces, dtype=np.int64)


def build_geometry(spec: ProportionSpec) -> Mesh:
    clamped = clamp_proportions(spec)
    mesh = Mesh(vertices=_brilliant_vertices(clamped), faces=_brilliant_faces())
    logger.debug("Built brilliant mesh: %d vertices, %d faces", mesh.vertex_count, mesh.face_count)
    return mesh


__all__ = [
    "Mesh",
    "build_geometry",
    "VERTEX_COUNT",
    "FACE_COUNT",
    "TABLE_CENTER",
    "TABLE_START",
    "STAR_START",
    "UPPER_GIRDLE_START",
    "LOWER_GIRDLE_START",
    "PAVILION_START",
    "CULET",
]
