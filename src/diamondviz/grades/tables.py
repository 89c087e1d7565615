from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from diamondviz.grades.clarity import DEFAULT_CLARITY_TABLE, ClarityGradeTable
from diamondviz.grades.color import DEFAULT_COLOR_TABLE, ColorGradeTable

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_TABLES_PATH = PROJECT_ROOT / "data" / "config" / "grade_tables.json"

_TABLE_CACHE: dict[str, GradeTables] = {}


@dataclass(frozen=True)
class GradeTables:
    color: ColorGradeTable = DEFAULT_COLOR_TABLE
    clarity: ClarityGradeTable = DEFAULT_CLARITY_TABLE

    def to_dict(self) -> dict[str, object]:
        return {
            "color": self.color.to_dict(),
            "clarity": self.clarity.to_dict(),
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> GradeTables:
        color = payload.get("color")
        clarity = payload.get("clarity")
        return GradeTables(
            color=DEFAULT_COLOR_TABLE if color is None else ColorGradeTable.from_dict(dict(color)),
            clarity=(
                DEFAULT_CLARITY_TABLE if clarity is None else ClarityGradeTable.from_dict(dict(clarity))
            ),
        )


DEFAULT_GRADE_TABLES = GradeTables()


def save_grade_tables(
    tables: GradeTables,
    tables_path: str | Path = DEFAULT_TABLES_PATH,
) -> Path:
    path = Path(tables_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(tables.to_dict(), indent=2), encoding="utf-8")
    _TABLE_CACHE[str(path.resolve())] = tables
    return path


def load_grade_tables(tables_path: str | Path = DEFAULT_TABLES_PATH) -> GradeTables:
    path = Path(tables_path)
    if not path.exists():
        msg = f"Grade table file does not exist: {path}"
        raise FileNotFoundError(msg)

    cache_key = str(path.resolve())
    if cache_key in _TABLE_CACHE:
        return _TABLE_CACHE[cache_key]

    payload = json.loads(path.read_text(encoding="utf-8"))
    tables = GradeTables.from_dict(payload)
    _TABLE_CACHE[cache_key] = tables
    logger.info(
        "Loaded grade tables from %s (color v%s, clarity v%s)",
        path,
        tables.color.version,
        tables.clarity.version,
    )
    return tables


def resolve_grade_tables(tables_path: str | Path | None = None) -> GradeTables:
    path = DEFAULT_TABLES_PATH if tables_path is None else Path(tables_path)
    try:
        return load_grade_tables(path)
    except FileNotFoundError:
        logger.debug("No grade table file at %s, using built-in tables", path)
        return DEFAULT_GRADE_TABLES


def clear_table_cache() -> None:
    _TABLE_CACHE.clear()


__all__ = [
    "GradeTables",
    "DEFAULT_GRADE_TABLES",
    "DEFAULT_TABLES_PATH",
    "load_grade_tables",
    "save_grade_tables",
    "resolve_grade_tables",
    "clear_table_cache",
]
