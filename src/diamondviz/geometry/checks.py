from __future__ import annotations

from collections import Counter

import numpy as np

from diamondviz.errors import require_finite
from diamondviz.geometry.brilliant import Mesh
from diamondviz.geometry.proportions import ProportionSpec, clamp_proportions


def face_normals(mesh: Mesh) -> np.ndarray:
    tri = mesh.vertices[mesh.faces]
    normals = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    return normals / np.where(lengths > 0.0, lengths, 1.0)


def face_centroids(mesh: Mesh) -> np.ndarray:
    return mesh.vertices[mesh.faces].mean(axis=1)


def edge_use_counts(mesh: Mesh) -> Counter:
    counts: Counter = Counter()
    for a, b, c in mesh.faces.tolist():
        for u, v in ((a, b), (b, c), (c, a)):
            counts[(min(u, v), max(u, v))] += 1
    return counts


def is_watertight(mesh: Mesh) -> bool:
    counts = edge_use_counts(mesh)
    return bool(counts) and all(count == 2 for count in counts.values())


def is_consistently_oriented(mesh: Mesh) -> bool:
    # each directed edge appears once; its twin runs the other way
    directed: Counter = Counter()
    for a, b, c in mesh.faces.tolist():
        for u, v in ((a, b), (b, c), (c, a)):
            directed[(u, v)] += 1
    return all(count == 1 and directed.get((v, u), 0) == 1 for (u, v), count in directed.items())


def faces_point_outward(mesh: Mesh) -> bool:
    dots = np.einsum("ij,ij->i", face_normals(mesh), face_centroids(mesh))
    return bool(np.all(dots > 0.0))


def euler_characteristic(mesh: Mesh) -> int:
    return mesh.vertex_count - len(edge_use_counts(mesh)) + mesh.face_count


def envelope_radius(y: float, spec: ProportionSpec) -> float:
    """Largest horizontal radius of the stone silhouette at height ``y``."""
    spec = clamp_proportions(spec)
    half_girdle = spec.girdle_thickness / 2.0
    radius = spec.girdle_radius
    if y > spec.crown_height or y < -spec.pavilion_depth:
        return 0.0
    if y >= half_girdle:
        table_radius = spec.table_ratio * radius
        span = spec.crown_height - half_girdle
        fraction = (y - half_girdle) / span if span > 0 else 1.0
        return radius + ((table_radius - radius) * fraction)
    if y >= -half_girdle:
        return radius
    culet_radius = spec.culet_size / 2.0
    span = spec.pavilion_depth - half_girdle
    fraction = (-half_girdle - y) / span if span > 0 else 1.0
    return radius + ((culet_radius - radius) * fraction)


def contain_point(
    point: tuple[float, float, float],
    spec: ProportionSpec,
    margin: float = 0.9,
) -> tuple[float, float, float]:
    """Pull ``point`` inside the stone, shrunk by ``margin``."""
    margin = require_finite("margin", margin)
    x, y, z = (require_finite(axis, value) for axis, value in zip("xyz", point))
    spec = clamp_proportions(spec)
    y = max(-spec.pavilion_depth * margin, min(y, spec.crown_height * margin))
    limit = envelope_radius(y, spec) * margin
    horizontal = float(np.hypot(x, z))
    if horizontal > limit:
        scale = limit / horizontal if horizontal > 0 else 0.0
        x, z = x * scale, z * scale
    return (x, y, z)


__all__ = [
    "face_normals",
    "face_centroids",
    "edge_use_counts",
    "is_watertight",
    "is_consistently_oriented",
    "faces_point_outward",
    "euler_characteristic",
    "envelope_radius",
    "contain_point",
]
