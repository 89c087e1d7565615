from diamondviz.grades.clarity import (
    DEFAULT_CLARITY_TABLE,
    ClarityGradeTable,
    ClarityParams,
    is_eye_clean,
)
from diamondviz.grades.color import (
    DEFAULT_COLOR_TABLE,
    ColorAnchor,
    ColorGradeTable,
    Tint,
    color_grade_position,
    interpolate_color_grade,
)
from diamondviz.grades.fluorescence import FLUORESCENCE_LEVELS, FluorescenceLevel, fluorescence_level
from diamondviz.grades.keys import grade_aliases, resolve_grade_key
from diamondviz.grades.tables import (
    DEFAULT_TABLES_PATH,
    GradeTables,
    load_grade_tables,
    resolve_grade_tables,
    save_grade_tables,
)

__all__ = [
    "Tint",
    "ColorAnchor",
    "ColorGradeTable",
    "DEFAULT_COLOR_TABLE",
    "interpolate_color_grade",
    "color_grade_position",
    "ClarityParams",
    "ClarityGradeTable",
    "DEFAULT_CLARITY_TABLE",
    "is_eye_clean",
    "FluorescenceLevel",
    "FLUORESCENCE_LEVELS",
    "fluorescence_level",
    "grade_aliases",
    "resolve_grade_key",
    "GradeTables",
    "DEFAULT_TABLES_PATH",
    "load_grade_tables",
    "save_grade_tables",
    "resolve_grade_tables",
]
