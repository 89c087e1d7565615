from __future__ import annotations

from pathlib import Path

import plotly.graph_objects as go

from diamondviz.grades.color import rgb_to_hex
from diamondviz.scene.frame import DiamondScene

PLOT_TEMPLATE = "plotly_dark"
INCLUSION_MARKER_SCALE = 400.0

INCLUSION_COLORS = {
    "pinpoint": "#f5f5f5",
    "crystal": "#dfe8ff",
    "needle": "#c8d6f0",
    "feather": "#b9c3d6",
    "cloud": "#9aa6bb",
    "carbon": "#1a1a1a",
}


def build_preview_figure(scene: DiamondScene, *, title: str | None = None) -> go.Figure:
    vertices = scene.mesh.vertices
    faces = scene.mesh.faces
    body_color = rgb_to_hex(scene.material.color_rgb)

    fig = go.Figure()
    fig.add_trace(
        go.Mesh3d(
            x=vertices[:, 0],
            y=vertices[:, 2],
            z=vertices[:, 1],
            i=faces[:, 0],
            j=faces[:, 1],
            k=faces[:, 2],
            color=body_color,
            opacity=max(0.1, 1.0 - scene.material.transmission),
            flatshading=True,
            name=f"{scene.color_grade} body",
            hoverinfo="skip",
        )
    )

    placed = scene.placed_inclusions()
    if placed:
        fig.add_trace(
            go.Scatter3d(
                x=[item["render_position"][0] for item in placed],
                y=[item["render_position"][2] for item in placed],
                z=[item["render_position"][1] for item in placed],
                mode="markers",
                name=f"{scene.clarity.grade} inclusions",
                text=[item["type"] for item in placed],
                marker=dict(
                    size=[max(2.0, item["render_size"] * INCLUSION_MARKER_SCALE) for item in placed],
                    color=[INCLUSION_COLORS[item["type"]] for item in placed],
                    opacity=0.9,
                ),
            )
        )

    fig.update_layout(
        template=PLOT_TEMPLATE,
        title=title or f"{scene.color_grade} / {scene.clarity.grade} ({scene.mode.value})",
        scene=dict(aspectmode="data", xaxis_title="x", yaxis_title="z", zaxis_title="y"),
        legend_title="Layer",
    )
    return fig


def write_preview_html(scene: DiamondScene, output_path: str | Path) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    build_preview_figure(scene).write_html(str(path), include_plotlyjs="cdn")
    return path


__all__ = ["build_preview_figure", "write_preview_html"]
