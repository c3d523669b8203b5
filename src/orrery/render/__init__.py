"""Rendering helpers for the orrery."""

from .camera import Camera
from .assets import (
    TextCache,
    get_text_surface,
    load_hud_font,
)
from .draw import (
    SceneRenderer,
    draw_orbit_line,
    draw_sphere,
    draw_starfield,
    generate_starfield,
    project_polyline,
)
from .scene import (
    OrreryScene,
    SceneGraph,
    SceneNode,
    add_orbit_path,
    build_orrery_scene,
)
from .ui import (
    ButtonVisualStyle,
    TrailToggleButton,
    TrailTogglePanel,
    build_hud_panel,
)

__all__ = [
    "ButtonVisualStyle",
    "Camera",
    "OrreryScene",
    "SceneGraph",
    "SceneNode",
    "SceneRenderer",
    "TextCache",
    "TrailToggleButton",
    "TrailTogglePanel",
    "add_orbit_path",
    "build_hud_panel",
    "build_orrery_scene",
    "draw_orbit_line",
    "draw_sphere",
    "draw_starfield",
    "generate_starfield",
    "get_text_surface",
    "load_hud_font",
    "project_polyline",
]
