from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from diamondviz.scene.frame import DiamondScene

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_EXPORT_DIR = PROJECT_ROOT / "data" / "processed" / "scenes"


def export_scene(
    scene: DiamondScene,
    *,
    output_path: str | Path | None = None,
) -> tuple[Path, dict[str, Any]]:
    timestamp = datetime.now(tz=UTC).isoformat()
    payload: dict[str, Any] = {
        "timestamp_utc": timestamp,
        "scene": scene.to_dict(),
        "summary": {
            "color_grade": scene.color_grade,
            "clarity_grade": scene.clarity.grade,
            "mode": scene.mode.value,
            "vertex_count": scene.mesh.vertex_count,
            "face_count": scene.mesh.face_count,
            "inclusion_count": len(scene.inclusions),
            "defect_area": scene.defect_area,
        },
    }

    if output_path is None:
        DEFAULT_EXPORT_DIR.mkdir(parents=True, exist_ok=True)
        filename = datetime.now(tz=UTC).strftime("scene_%Y%m%dT%H%M%SZ.json")
        path = DEFAULT_EXPORT_DIR / filename
    else:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path, payload


__all__ = ["export_scene", "DEFAULT_EXPORT_DIR"]
