from diamondviz.inclusions.generator import (
    INCLUSION_TYPES,
    Inclusion,
    defect_area,
    defect_area_by_grade,
    generate_inclusions,
    inclusions_to_frame,
)
from diamondviz.inclusions.seeded import seeded_random

__all__ = [
    "INCLUSION_TYPES",
    "Inclusion",
    "generate_inclusions",
    "defect_area",
    "inclusions_to_frame",
    "defect_area_by_grade",
    "seeded_random",
]
