from diamondviz.scene.export import DEFAULT_EXPORT_DIR, export_scene
from diamondviz.scene.frame import DiamondScene, build_scene, clear_scene_cache, scene_cache_info
from diamondviz.scene.preview import build_preview_figure, write_preview_html

__all__ = [
    "DiamondScene",
    "build_scene",
    "clear_scene_cache",
    "scene_cache_info",
    "export_scene",
    "DEFAULT_EXPORT_DIR",
    "build_preview_figure",
    "write_preview_html",
]
