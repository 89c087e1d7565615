from __future__ import annotations

import json

import plotly.graph_objects as go
import pytest

from diamondviz.geometry.checks import envelope_radius
from diamondviz.geometry.proportions import REFERENCE_PROPORTIONS
from diamondviz.materials.deriver import DisplayMode
from diamondviz.scene.export import export_scene
from diamondviz.scene.frame import build_scene, clear_scene_cache, scene_cache_info
from diamondviz.scene.preview import build_preview_figure, write_preview_html


def test_scene_bundles_engine_outputs() -> None:
    scene = build_scene(color_position=4, clarity_grade="SI1", seed=42)

    assert scene.color_grade == "H"
    assert scene.clarity.grade == "SI1"
    assert scene.mesh.vertex_count == 58
    assert len(scene.inclusions) == 7
    assert scene.mode is DisplayMode.NORMAL
    assert {item.inclusion_type for item in scene.inclusion_materials} == {
        item.type for item in scene.inclusions
    }


def test_scene_is_memoized() -> None:
    clear_scene_cache()
    first = build_scene(color_position=2.5, clarity_grade="VS2", seed=3, mode="magnified")
    second = build_scene(color_position=2.5, clarity_grade="VS2", seed=3, mode=DisplayMode.MAGNIFIED)

    assert first is second
    assert scene_cache_info().hits == 1
    clear_scene_cache()
    assert build_scene(color_position=2.5, clarity_grade="VS2", seed=3, mode="magnified") is not first


def test_uv_scene_uses_fluorescence_level() -> None:
    scene = build_scene(clarity_grade="VVS1", seed=1, mode="uv", fluorescence="Very Strong")

    assert scene.fluorescence.intensity == 0.9
    assert scene.material.emissive_intensity == pytest.approx(0.45)


def test_placed_inclusions_stay_inside_the_stone() -> None:
    scene = build_scene(clarity_grade="I3", seed=11, mode="magnified")

    placed = scene.placed_inclusions()

    assert len(placed) == 30
    for item in placed:
        x, y, z = item["render_position"]
        assert -REFERENCE_PROPORTIONS.pavilion_depth <= y <= REFERENCE_PROPORTIONS.crown_height
        assert (x**2 + z**2) ** 0.5 <= envelope_radius(y, REFERENCE_PROPORTIONS) + 1e-9
        assert item["render_size"] == pytest.approx(item["size"] * 2.5)
        assert 0.0 <= item["render_opacity"] <= 1.0


def test_flawless_scene_has_no_inclusions() -> None:
    scene = build_scene(clarity_grade="FL", seed=7)

    assert scene.inclusions == ()
    assert scene.defect_area == 0.0
    assert scene.to_dict()["inclusions"] == []


def test_export_scene_writes_json(tmp_path) -> None:
    scene = build_scene(color_position=0, clarity_grade="VS1", seed=42)
    output_path = tmp_path / "scene.json"

    written_path, payload = export_scene(scene, output_path=output_path)

    assert written_path.exists()
    assert "timestamp_utc" in payload
    assert payload["summary"]["inclusion_count"] == 3
    loaded = json.loads(written_path.read_text(encoding="utf-8"))
    assert loaded["scene"]["mode"] == "normal"
    assert len(loaded["scene"]["mesh"]["vertices"]) == 58
    assert len(loaded["scene"]["mesh"]["faces"]) == 112
    assert loaded["scene"]["material"]["ior"] == pytest.approx(2.417)


def test_preview_figure_has_mesh_and_inclusions(tmp_path) -> None:
    scene = build_scene(clarity_grade="SI2", seed=5)

    fig = build_preview_figure(scene)
    html_path = write_preview_html(scene, tmp_path / "preview.html")

    assert isinstance(fig, go.Figure)
    assert [trace.type for trace in fig.data] == ["mesh3d", "scatter3d"]
    assert len(fig.data[1].x) == 10
    assert html_path.exists()


def test_preview_figure_without_inclusions() -> None:
    fig = build_preview_figure(build_scene(clarity_grade="IF", seed=5))

    assert [trace.type for trace in fig.data] == ["mesh3d"]
