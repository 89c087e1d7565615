from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from diamondviz.cut.grading import (
    CUT_GRADE_PRESETS,
    CutParameters,
    calculate_cut_grade,
    light_exit,
    proportions_from_cut,
)
from diamondviz.geometry.proportions import REFERENCE_PROPORTIONS
from diamondviz.grades.fluorescence import FLUORESCENCE_LEVELS
from diamondviz.grades.tables import GradeTables, resolve_grade_tables
from diamondviz.inclusions.generator import defect_area, generate_inclusions, inclusions_to_frame
from diamondviz.logging_config import setup_logging
from diamondviz.materials.deriver import DisplayMode
from diamondviz.quiz.questions import QUIZ_KINDS, generate_quiz
from diamondviz.scene.export import export_scene
from diamondviz.scene.frame import build_scene
from diamondviz.scene.preview import write_preview_html

logger = logging.getLogger(__name__)


def _color_position(value: str, tables: GradeTables) -> float:
    try:
        return float(value)
    except ValueError:
        return float(tables.color.position(value))


def _run_scene(args: argparse.Namespace) -> int:
    tables = resolve_grade_tables(args.tables)
    proportions = REFERENCE_PROPORTIONS
    if args.cut is not None:
        proportions = proportions_from_cut(CUT_GRADE_PRESETS[args.cut])
    scene = build_scene(
        color_position=_color_position(args.color, tables),
        clarity_grade=args.clarity,
        seed=args.seed,
        proportions=proportions,
        mode=args.mode,
        fluorescence=args.fluorescence,
        tables=tables,
    )
    path, payload = export_scene(scene, output_path=args.output)
    summary = payload["summary"]
    print(
        f"{summary['color_grade']} / {summary['clarity_grade']} ({summary['mode']}): "
        f"{summary['vertex_count']} vertices, {summary['face_count']} faces, "
        f"{summary['inclusion_count']} inclusions"
    )
    print(f"Wrote scene to: {path}")
    if args.preview is not None:
        preview_path = write_preview_html(scene, args.preview)
        print(f"Wrote preview to: {preview_path}")
    return 0


def _run_inclusions(args: argparse.Namespace) -> int:
    tables = resolve_grade_tables(args.tables)
    inclusions = generate_inclusions(args.grade, args.seed, table=tables.clarity)
    frame = inclusions_to_frame(inclusions)
    if args.csv is not None:
        path = Path(args.csv)
        path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(path, index=False)
        print(f"Wrote {len(frame)} inclusions to: {path}")
    elif frame.empty:
        print("No inclusions.")
    else:
        print(frame.to_string(index=False, float_format=lambda value: f"{value:.4f}"))
    print(f"Defect area: {defect_area(inclusions):.5f}")
    return 0


def _run_cut(args: argparse.Namespace) -> int:
    if args.preset is not None:
        params = CUT_GRADE_PRESETS[args.preset]
    else:
        params = CutParameters(
            table_pct=args.table,
            crown_angle_deg=args.crown_angle,
            pavilion_angle_deg=args.pavilion_angle,
            depth_pct=args.depth,
            girdle_thickness_pct=args.girdle,
        )
    result = calculate_cut_grade(params)
    print(f"Cut grade: {result.grade}")
    print(f"  Brilliance:    {result.brilliance:.1f}")
    print(f"  Fire:          {result.fire:.1f}")
    print(f"  Scintillation: {result.scintillation:.1f}")
    print(f"  Light exits through the {light_exit(params)}")
    print(result.description)
    return 0


def _run_quiz(args: argparse.Namespace) -> int:
    for question in generate_quiz(args.kind, args.count, seed=args.seed):
        print(f"{question.id + 1:2d}. [{question.kind}] {' / '.join(question.options)}")
        if args.answers:
            print(f"    answer: {question.correct_answer} ({question.hint})")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diamondviz",
        description="Procedural diamond scenes, inclusion patterns and cut grading.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Log level for console and file output.",
    )
    parser.add_argument("--log-file", default=None, help="Also append logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scene = subparsers.add_parser("scene", help="Build and export a renderer scene payload.")
    scene.add_argument("--color", default="D", help="Color grade letter or axis position.")
    scene.add_argument("--clarity", default="VS1", help="Clarity grade (FL .. I3).")
    scene.add_argument("--seed", type=float, default=42.0, help="Inclusion seed.")
    scene.add_argument(
        "--mode",
        default=DisplayMode.NORMAL.value,
        help="Display mode: normal, magnified or uv_lit.",
    )
    scene.add_argument(
        "--fluorescence",
        default="None",
        choices=[level.level for level in FLUORESCENCE_LEVELS],
        help="Fluorescence level.",
    )
    scene.add_argument("--cut", default=None, choices=list(CUT_GRADE_PRESETS), help="Cut preset.")
    scene.add_argument("--tables", default=None, help="Path to a grade table JSON file.")
    scene.add_argument("--output", default=None, help="Scene JSON output path.")
    scene.add_argument("--preview", default=None, help="Optional HTML preview output path.")
    scene.set_defaults(handler=_run_scene)

    inclusions = subparsers.add_parser("inclusions", help="List the inclusions for a grade.")
    inclusions.add_argument("grade", help="Clarity grade (FL .. I3).")
    inclusions.add_argument("--seed", type=float, default=42.0, help="Inclusion seed.")
    inclusions.add_argument("--tables", default=None, help="Path to a grade table JSON file.")
    inclusions.add_argument("--csv", default=None, help="Write the listing to a CSV file.")
    inclusions.set_defaults(handler=_run_inclusions)

    cut = subparsers.add_parser("cut", help="Grade cut proportions.")
    cut.add_argument("--preset", default=None, choices=list(CUT_GRADE_PRESETS), help="Cut preset.")
    cut.add_argument("--table", type=float, default=57.0, help="Table size in percent.")
    cut.add_argument("--crown-angle", type=float, default=34.5, help="Crown angle in degrees.")
    cut.add_argument("--pavilion-angle", type=float, default=40.8, help="Pavilion angle in degrees.")
    cut.add_argument("--depth", type=float, default=62.0, help="Total depth in percent.")
    cut.add_argument("--girdle", type=float, default=3.5, help="Girdle thickness in percent.")
    cut.set_defaults(handler=_run_cut)

    quiz = subparsers.add_parser("quiz", help="Print a grading quiz.")
    quiz.add_argument("--kind", default="mixed", choices=list(QUIZ_KINDS), help="Question kind.")
    quiz.add_argument("--count", type=int, default=10, help="Number of questions.")
    quiz.add_argument("--seed", type=int, default=None, help="Quiz seed.")
    quiz.add_argument("--answers", action="store_true", help="Show answers and hints.")
    quiz.set_defaults(handler=_run_quiz)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose or args.log_level or args.log_file:
        setup_logging("debug" if args.verbose else (args.log_level or "info"), log_file=args.log_file)
    try:
        return args.handler(args)
    except ValueError as exc:
        logger.error("%s", exc)
        parser.exit(2, f"diamondviz: error: {exc}\n")


if __name__ == "__main__":
    raise SystemExit(main())
