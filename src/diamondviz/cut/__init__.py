from diamondviz.cut.grading import (
    CUT_GRADE_PRESETS,
    IDEAL_CUT,
    CutGradeResult,
    CutParameters,
    calculate_cut_grade,
    light_exit,
    proportions_from_cut,
)

__all__ = [
    "CutParameters",
    "CutGradeResult",
    "IDEAL_CUT",
    "CUT_GRADE_PRESETS",
    "calculate_cut_grade",
    "light_exit",
    "proportions_from_cut",
]
