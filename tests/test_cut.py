from __future__ import annotations

import pytest

from diamondviz.cut.grading import (
    CUT_GRADE_PRESETS,
    IDEAL_CUT,
    CutParameters,
    calculate_cut_grade,
    is_deep,
    is_shallow,
    light_exit,
    proportions_from_cut,
)
from diamondviz.geometry.brilliant import build_geometry
from diamondviz.geometry.checks import is_watertight


def test_ideal_cut_scores_perfectly() -> None:
    result = calculate_cut_grade(IDEAL_CUT)

    assert result.grade == "Excellent"
    assert result.brilliance == 100.0
    assert result.fire == 100.0
    assert result.scintillation == 100.0
    assert light_exit(IDEAL_CUT) == "crown"


def test_very_good_preset_scores() -> None:
    result = calculate_cut_grade(CUT_GRADE_PRESETS["Very Good"])

    assert result.brilliance == pytest.approx(100 - 6 - 1.5 - 2.1)
    assert result.fire == pytest.approx(100 - 6 - 4.5 - 1.4)
    assert result.scintillation == pytest.approx(100 - 4.5 - 3 - 1.4)
    assert result.grade == "Very Good"


def test_scores_decrease_along_presets() -> None:
    averages = [calculate_cut_grade(params).average_score for params in CUT_GRADE_PRESETS.values()]

    assert averages == sorted(averages, reverse=True)


def test_poor_preset_grades_poor() -> None:
    result = calculate_cut_grade(CUT_GRADE_PRESETS["Poor"])

    assert result.grade == "Poor"
    assert "light leakage" in result.description


def test_scores_floor_at_zero() -> None:
    result = calculate_cut_grade(CutParameters(90.0, 10.0, 60.0, 62.0, 3.5))

    assert result.brilliance == 0.0
    assert result.fire == 0.0
    assert result.scintillation == 0.0


def test_deep_and_shallow_light_paths() -> None:
    deep = CutParameters(57.0, 34.5, 44.0, 70.0, 3.5)
    shallow = CutParameters(66.0, 25.0, 39.0, 56.0, 3.5)

    assert is_deep(deep)
    assert light_exit(deep) == "sides"
    assert is_shallow(shallow)
    assert light_exit(shallow) == "bottom"


def test_invalid_cut_parameters_raise() -> None:
    with pytest.raises(ValueError):
        CutParameters(120.0, 34.5, 40.8, 62.0, 3.5)
    with pytest.raises(ValueError):
        CutParameters(57.0, 95.0, 40.8, 62.0, 3.5)


def test_proportions_from_ideal_cut() -> None:
    spec = proportions_from_cut(IDEAL_CUT)

    assert spec.table_ratio == pytest.approx(0.57)
    assert spec.crown_height == pytest.approx(0.43 * 0.68728, rel=1e-3)
    assert spec.pavilion_depth == pytest.approx(0.86340, rel=1e-3)
    assert spec.girdle_thickness == pytest.approx(0.07)


@pytest.mark.parametrize("preset", list(CUT_GRADE_PRESETS))
def test_every_preset_builds_a_closed_mesh(preset: str) -> None:
    mesh = build_geometry(proportions_from_cut(CUT_GRADE_PRESETS[preset]))

    assert mesh.vertex_count == 58
    assert is_watertight(mesh)
