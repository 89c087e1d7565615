from __future__ import annotations

import json

import pytest

from diamondviz.grades.clarity import DEFAULT_CLARITY_TABLE, ClarityGradeTable
from diamondviz.grades.color import DEFAULT_COLOR_TABLE, ColorGradeTable
from diamondviz.grades.tables import (
    DEFAULT_GRADE_TABLES,
    GradeTables,
    clear_table_cache,
    load_grade_tables,
    resolve_grade_tables,
    save_grade_tables,
)
from diamondviz.inclusions.generator import generate_inclusions


def test_save_and_load_grade_tables(tmp_path) -> None:
    clear_table_cache()
    path = save_grade_tables(DEFAULT_GRADE_TABLES, tmp_path / "config" / "grade_tables.json")

    payload = json.loads(path.read_text(encoding="utf-8"))
    clear_table_cache()
    loaded = load_grade_tables(path)

    assert payload["color"]["fallback_grade"] == "G"
    assert payload["clarity"]["fallback_grade"] == "SI1"
    assert loaded == DEFAULT_GRADE_TABLES
    assert load_grade_tables(path) is loaded


def test_load_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_grade_tables(tmp_path / "missing.json")


def test_resolve_falls_back_to_built_in_tables(tmp_path) -> None:
    assert resolve_grade_tables(tmp_path / "missing.json") is DEFAULT_GRADE_TABLES


def test_custom_clarity_table_drives_generation(tmp_path) -> None:
    clear_table_cache()
    payload = DEFAULT_CLARITY_TABLE.to_dict()
    payload["version"] = "2"
    for row in payload["grades"]:
        if row["grade"] == "VS1":
            row["count"] = 4
    path = tmp_path / "grade_tables.json"
    path.write_text(json.dumps({"clarity": payload}), encoding="utf-8")

    tables = load_grade_tables(path)

    assert tables.color == DEFAULT_COLOR_TABLE
    assert tables.clarity.version == "2"
    assert len(generate_inclusions("VS1", 42, table=tables.clarity)) == 4


def test_inconsistent_table_file_is_rejected(tmp_path) -> None:
    clear_table_cache()
    payload = DEFAULT_CLARITY_TABLE.to_dict()
    payload["grades"][3]["visibility"] = 0.99
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"clarity": payload}), encoding="utf-8")

    with pytest.raises(ValueError, match="visibility"):
        load_grade_tables(path)


def test_grade_tables_are_hashable() -> None:
    tables = GradeTables(
        color=ColorGradeTable.from_dict(DEFAULT_COLOR_TABLE.to_dict()),
        clarity=ClarityGradeTable.from_dict(DEFAULT_CLARITY_TABLE.to_dict()),
    )

    assert hash(tables) == hash(DEFAULT_GRADE_TABLES)
