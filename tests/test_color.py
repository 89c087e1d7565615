from __future__ import annotations

import logging
import math

import pytest

from diamondviz.errors import InvalidNumericInputError
from diamondviz.grades.color import (
    DEFAULT_COLOR_TABLE,
    ColorAnchor,
    ColorGradeTable,
    color_grade_position,
    hex_to_rgb,
    interpolate_color_grade,
    rgb_to_hex,
)


@pytest.mark.parametrize("position", range(len(DEFAULT_COLOR_TABLE)))
def test_integer_positions_return_anchor_values(position: int) -> None:
    assert interpolate_color_grade(position) == DEFAULT_COLOR_TABLE[position].tint


def test_out_of_range_positions_clamp_to_end_anchors() -> None:
    last = len(DEFAULT_COLOR_TABLE) - 1

    assert interpolate_color_grade(-5) == DEFAULT_COLOR_TABLE[0].tint
    assert interpolate_color_grade(999) == DEFAULT_COLOR_TABLE[last].tint


def test_fractional_position_is_linear_between_neighbours() -> None:
    tint = interpolate_color_grade(3.5)
    g, h = DEFAULT_COLOR_TABLE[3], DEFAULT_COLOR_TABLE[4]

    assert tint.hue == pytest.approx((g.hue + h.hue) / 2)
    assert tint.saturation == pytest.approx((g.saturation + h.saturation) / 2)
    assert tint.lightness == pytest.approx((g.lightness + h.lightness) / 2)
    assert tint.warmth == pytest.approx((g.warmth + h.warmth) / 2)


def test_warmth_grows_along_the_axis() -> None:
    warmth = [interpolate_color_grade(position / 4).warmth for position in range(0, 4 * 22 + 1)]

    assert warmth == sorted(warmth)


def test_non_finite_position_raises() -> None:
    with pytest.raises(InvalidNumericInputError):
        interpolate_color_grade(math.nan)


def test_colorless_grades_render_with_cool_cast() -> None:
    red, green, blue = interpolate_color_grade(0).to_rgb()

    assert blue >= red
    assert interpolate_color_grade(0).to_hex() == "#ffffff"


def test_warm_grades_render_yellow() -> None:
    red, green, blue = interpolate_color_grade(22).to_rgb()

    assert red > blue
    assert green > blue


def test_hex_round_trip() -> None:
    assert rgb_to_hex(hex_to_rgb("#1a1a1a")) == "#1a1a1a"


def test_grade_letters_resolve_to_positions() -> None:
    assert color_grade_position("D") == 0
    assert color_grade_position("h") == 4
    assert color_grade_position(" k ") == 7


def test_unknown_grade_letter_falls_back_with_warning(caplog) -> None:
    short_table = ColorGradeTable(anchors=DEFAULT_COLOR_TABLE.anchors[:10])

    with caplog.at_level(logging.WARNING, logger="diamondviz"):
        position = color_grade_position("P", short_table)

    assert short_table.keys[position] == "M"
    assert "Unknown color grade" in caplog.text


def test_unique_band_names_resolve_but_shared_ones_do_not() -> None:
    assert color_grade_position("Absolutely Colorless") == 0
    assert "COLORLESS" not in DEFAULT_COLOR_TABLE.aliases
    assert "NEARCOLORLESS" not in DEFAULT_COLOR_TABLE.aliases


def test_unparseable_grade_uses_table_fallback() -> None:
    assert DEFAULT_COLOR_TABLE.anchor("??").grade == "G"


def test_table_rejects_duplicates_and_bad_fallback() -> None:
    anchor = ColorAnchor("D", 0.0, 0.0, 1.0, 0.0)

    with pytest.raises(ValueError):
        ColorGradeTable(anchors=(anchor, anchor), fallback_grade="D")
    with pytest.raises(ValueError):
        ColorGradeTable(anchors=(anchor,), fallback_grade="G")
    with pytest.raises(ValueError):
        ColorGradeTable(anchors=())


def test_table_round_trips_through_dict() -> None:
    restored = ColorGradeTable.from_dict(DEFAULT_COLOR_TABLE.to_dict())

    assert restored == DEFAULT_COLOR_TABLE
    assert hash(restored) == hash(DEFAULT_COLOR_TABLE)
