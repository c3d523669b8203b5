"""Configuration dataclasses for the orrery."""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationCfg:
    time_step: float = 10.0
    trail_samples: int = 6
    trail_offset_step: float = math.pi
    path_step: float = math.pi / 64.0
    path_sweep: float = 2.2 * math.pi
    chase_height: float = 50.0
    show_trails_key: str = "="
    hide_trails_key: str = "-"
    reset_view_key: str = "5"
    view_keys: str = "123456789"
    log_every_ticks: int = 5
    runs_dir: str = "data/runs"

    @property
    def trail_offsets(self) -> tuple[float, ...]:
        return tuple(i * self.trail_offset_step for i in range(self.trail_samples))


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1000
    height: int = 800
    fps: int = 60
    background_color: tuple[int, int, int] = (4, 6, 14)
    orbit_color: tuple[int, int, int] = (255, 255, 255)
    orbit_line_width: int = 1
    trail_color: tuple[int, int, int] = (255, 0, 0)
    trail_line_width: int = 2
    camera_fov_deg: float = 75.0
    camera_near: float = 0.1
    camera_far: float = 1000.0
    camera_start_position: tuple[float, float, float] = (0.0, 0.0, 100.0)
    camera_start_target: tuple[float, float, float] = (0.0, 0.0, 0.0)
    camera_min_distance: float = 2.0
    camera_max_distance: float = 600.0
    rotate_sensitivity: float = 0.005
    zoom_step: float = 1.1
    star_count: int = 220
    sphere_min_pixels: int = 2
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_background_color: tuple[int, int, int, int] = (12, 18, 30, int(255 * 0.55))
    hud_font_names: tuple[str, ...] = ("consolas", "dejavusansmono", "menlo")
    hud_font_size: int = 15
    hud_padding: tuple[int, int] = (10, 8)
    hud_corner_radius: int = 12
    text_cache_size: int = 256
    button_color: tuple[int, int, int, int] = (8, 32, 64, int(255 * 0.78))
    button_hover_color: tuple[int, int, int, int] = (18, 52, 94, int(255 * 0.88))
    button_off_color: tuple[int, int, int, int] = (40, 40, 48, int(255 * 0.7))
    button_text_color: tuple[int, int, int] = (234, 241, 255)
    button_border_color: tuple[int, int, int, int] = (88, 140, 255, int(255 * 0.55))
    button_radius: int = 10
    button_size: tuple[int, int] = (190, 30)
    panel_margin: int = 12
    panel_spacing: int = 6


SIM_CFG = SimulationCfg()
RENDER_CFG = RenderCfg()


__all__ = ["RENDER_CFG", "SIM_CFG", "RenderCfg", "SimulationCfg"]
