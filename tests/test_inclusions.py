from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from diamondviz.errors import InvalidNumericInputError
from diamondviz.grades.clarity import (
    DEFAULT_CLARITY_TABLE,
    ClarityGradeTable,
    ClarityParams,
    is_eye_clean,
)
from diamondviz.inclusions.generator import (
    INCLUSION_TYPES,
    defect_area,
    defect_area_by_grade,
    generate_inclusions,
    inclusions_to_frame,
)

SEEDS = [0, 1, 7, 42, 137, 2024, 99_999, -13.25]


def test_end_to_end_vs1_and_flawless() -> None:
    first = generate_inclusions("VS1", 42)
    second = generate_inclusions("VS1", 42)

    assert len(first) == 3
    assert first == second
    assert generate_inclusions("FL", 7) == []


def test_generation_is_deterministic_over_random_pairs() -> None:
    rng = np.random.default_rng(11)
    grades = DEFAULT_CLARITY_TABLE.keys
    for _ in range(40):
        grade = grades[int(rng.integers(0, len(grades)))]
        seed = float(rng.uniform(-1e4, 1e4))
        assert generate_inclusions(grade, seed) == generate_inclusions(grade, seed)


@pytest.mark.parametrize("seed", SEEDS)
def test_flawless_grades_are_empty(seed: float) -> None:
    assert generate_inclusions("FL", seed) == []
    assert generate_inclusions("IF", seed) == []


@pytest.mark.parametrize("seed", SEEDS)
def test_defect_area_is_monotonic_along_the_scale(seed: float) -> None:
    areas = [defect_area(generate_inclusions(grade, seed)) for grade in DEFAULT_CLARITY_TABLE.keys]

    assert all(later >= earlier for earlier, later in zip(areas, areas[1:]))
    assert areas[-1] > 0.0


@pytest.mark.parametrize("seed", SEEDS)
def test_inclusion_fields_stay_in_range(seed: float) -> None:
    params = DEFAULT_CLARITY_TABLE.resolve("I3")
    inclusions = generate_inclusions("I3", seed)

    assert len(inclusions) == params.count
    for item in inclusions:
        assert item.type in INCLUSION_TYPES
        assert item.is_carbon == (item.type == "carbon")
        assert 0.4 * params.max_size <= item.size <= params.max_size
        assert 0.6 * params.visibility <= item.opacity <= params.visibility
        assert all(0.0 <= angle < math.pi for angle in item.rotation)
        x, y, z = item.position
        assert math.sqrt(x**2 + (y / 0.8) ** 2 + z**2) <= 0.8 + 1e-9


def test_carbon_never_appears_without_carbon_bias() -> None:
    for seed in SEEDS:
        for grade in ("VVS1", "VVS2"):
            assert not any(item.is_carbon for item in generate_inclusions(grade, seed))


def test_unknown_grade_resolves_to_nearest(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="diamondviz"):
        inclusions = generate_inclusions("VS 3", 42)

    assert "Unknown clarity grade" in caplog.text
    assert len(inclusions) in {DEFAULT_CLARITY_TABLE.resolve(key).count for key in ("VS1", "VS2")}


def test_display_names_resolve_to_their_grades(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="diamondviz"):
        assert generate_inclusions("Flawless", 7) == []
        assert DEFAULT_CLARITY_TABLE.resolve("Included 3").grade == "I3"
        assert DEFAULT_CLARITY_TABLE.resolve("internally flawless").grade == "IF"
        assert DEFAULT_CLARITY_TABLE.resolve("Very Very Slightly Included 2").grade == "VVS2"

    assert "Unknown clarity grade" not in caplog.text


def test_similarity_ties_go_to_the_more_included_grade() -> None:
    assert DEFAULT_CLARITY_TABLE.resolve("VS").grade == "VS2"
    assert DEFAULT_CLARITY_TABLE.resolve("SI").grade == "SI2"


def test_unrecognised_grade_uses_documented_fallback() -> None:
    assert DEFAULT_CLARITY_TABLE.resolve("###").grade == "SI1"
    assert len(generate_inclusions("", 3)) == DEFAULT_CLARITY_TABLE.resolve("SI1").count


def test_numeric_grade_positions_are_clamped() -> None:
    assert DEFAULT_CLARITY_TABLE.resolve(4).grade == "VS1"
    assert DEFAULT_CLARITY_TABLE.resolve(-3).grade == "FL"
    assert DEFAULT_CLARITY_TABLE.resolve(50).grade == "I3"


def test_non_finite_seed_raises() -> None:
    with pytest.raises(InvalidNumericInputError):
        generate_inclusions("VS1", math.inf)


def test_table_rejects_non_monotonic_counts() -> None:
    grades = (
        ClarityParams("A", 3, 0.02, 0.2, 0.1, 0.0),
        ClarityParams("B", 2, 0.03, 0.3, 0.1, 0.0),
    )

    with pytest.raises(ValueError, match="count"):
        ClarityGradeTable(grades=grades, fallback_grade="A")


def test_eye_clean_boundary() -> None:
    assert is_eye_clean("VS2")
    assert is_eye_clean("SI1")
    assert not is_eye_clean("SI2")


def test_inclusion_frames() -> None:
    frame = inclusions_to_frame(generate_inclusions("SI2", 5))
    empty = inclusions_to_frame([])
    summary = defect_area_by_grade([1, 2])

    assert len(frame) == 10
    assert {"type", "x", "y", "z", "size", "opacity"}.issubset(frame.columns)
    assert empty.empty
    assert list(empty.columns) == list(frame.columns)
    assert len(summary) == 2 * len(DEFAULT_CLARITY_TABLE)
    assert summary.loc[summary["grade"] == "FL", "defect_area"].eq(0.0).all()
