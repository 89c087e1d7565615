from diamondviz.geometry.brilliant import FACE_COUNT, VERTEX_COUNT, Mesh, build_geometry
from diamondviz.geometry.checks import (
    contain_point,
    edge_use_counts,
    face_normals,
    faces_point_outward,
    is_consistently_oriented,
    is_watertight,
)
from diamondviz.geometry.proportions import REFERENCE_PROPORTIONS, ProportionSpec, clamp_proportions

__all__ = [
    "Mesh",
    "build_geometry",
    "VERTEX_COUNT",
    "FACE_COUNT",
    "ProportionSpec",
    "REFERENCE_PROPORTIONS",
    "clamp_proportions",
    "contain_point",
    "edge_use_counts",
    "face_normals",
    "faces_point_outward",
    "is_consistently_oriented",
    "is_watertight",
]
