from diamondviz.materials.deriver import (
    DisplayMode,
    InclusionMaterial,
    MaterialParams,
    derive_inclusion_material,
    derive_material_params,
)

__all__ = [
    "DisplayMode",
    "MaterialParams",
    "InclusionMaterial",
    "derive_material_params",
    "derive_inclusion_material",
]
