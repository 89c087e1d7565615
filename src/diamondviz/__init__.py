"""diamondviz public API: procedural round-brilliant diamonds for grading visualizations."""

from diamondviz.cut.grading import (
    CUT_GRADE_PRESETS,
    IDEAL_CUT,
    CutGradeResult,
    CutParameters,
    calculate_cut_grade,
    proportions_from_cut,
)
from diamondviz.errors import InvalidNumericInputError
from diamondviz.geometry.brilliant import Mesh, build_geometry
from diamondviz.geometry.proportions import REFERENCE_PROPORTIONS, ProportionSpec
from diamondviz.grades.clarity import DEFAULT_CLARITY_TABLE, ClarityGradeTable, ClarityParams
from diamondviz.grades.color import (
    DEFAULT_COLOR_TABLE,
    ColorAnchor,
    ColorGradeTable,
    Tint,
    interpolate_color_grade,
)
from diamondviz.grades.fluorescence import FLUORESCENCE_LEVELS, fluorescence_level
from diamondviz.grades.tables import GradeTables, load_grade_tables, save_grade_tables
from diamondviz.inclusions.generator import Inclusion, generate_inclusions
from diamondviz.inclusions.seeded import seeded_random
from diamondviz.materials.deriver import (
    DisplayMode,
    InclusionMaterial,
    MaterialParams,
    derive_inclusion_material,
    derive_material_params,
)
from diamondviz.quiz.questions import QuizQuestion, generate_quiz
from diamondviz.scene.export import export_scene
from diamondviz.scene.frame import DiamondScene, build_scene

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "InvalidNumericInputError",
    "seeded_random",
    "ProportionSpec",
    "REFERENCE_PROPORTIONS",
    "Mesh",
    "build_geometry",
    "Tint",
    "ColorAnchor",
    "ColorGradeTable",
    "DEFAULT_COLOR_TABLE",
    "interpolate_color_grade",
    "ClarityParams",
    "ClarityGradeTable",
    "DEFAULT_CLARITY_TABLE",
    "FLUORESCENCE_LEVELS",
    "fluorescence_level",
    "GradeTables",
    "load_grade_tables",
    "save_grade_tables",
    "Inclusion",
    "generate_inclusions",
    "DisplayMode",
    "MaterialParams",
    "InclusionMaterial",
    "derive_material_params",
    "derive_inclusion_material",
    "CutParameters",
    "CutGradeResult",
    "IDEAL_CUT",
    "CUT_GRADE_PRESETS",
    "calculate_cut_grade",
    "proportions_from_cut",
    "QuizQuestion",
    "generate_quiz",
    "DiamondScene",
    "build_scene",
    "export_scene",
]
