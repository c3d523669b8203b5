from __future__ import annotations

import math
import random
from typing import Iterable, Sequence

import numpy as np
import pygame

from orrery.core.config import RENDER_CFG, RenderCfg

from .camera import Camera
from .scene import SceneGraph, SceneNode


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


# pygame draw calls overflow on coordinates far outside the surface.
_COORD_LIMIT = 30_000.0


def _screen_point(x: float, y: float) -> tuple[int, int]:
    return (
        int(_clamp(x, -_COORD_LIMIT, _COORD_LIMIT)),
        int(_clamp(y, -_COORD_LIMIT, _COORD_LIMIT)),
    )


def _shade(color: tuple[int, int, int], factor: float) -> tuple[int, int, int]:
    return tuple(int(_clamp(c * factor, 0, 255)) for c in color)  # type: ignore[return-value]


def draw_sphere(
    surface: pygame.Surface,
    position: tuple[int, int],
    radius: int,
    *,
    color: tuple[int, int, int],
) -> None:
    if radius <= 0:
        return
    pygame.draw.circle(surface, _shade(color, 0.55), position, radius)
    highlight = max(1, int(radius * 0.7))
    offset = (radius - highlight) // 2
    pygame.draw.circle(surface, color, (position[0] - offset, position[1] - offset), highlight)


def draw_orbit_line(
    surface: pygame.Surface,
    color: tuple[int, int, int] | tuple[int, int, int, int],
    points: Sequence[tuple[int, int]],
    width: int,
) -> None:
    if len(points) < 2:
        return
    if width <= 1:
        pygame.draw.aalines(surface, color, False, points)
    else:
        pygame.draw.lines(surface, color, False, points, width)
        pygame.draw.aalines(surface, color, False, points)


def generate_starfield(
    num_stars: int,
    *,
    rng: random.Random | None = None,
) -> list[dict[str, object]]:
    """Stars as directions on the unit sphere, drawn behind everything else."""

    rng = rng or random.Random()
    stars: list[dict[str, object]] = []
    for _ in range(num_stars):
        z = rng.uniform(-1.0, 1.0)
        phi = rng.uniform(0.0, 2.0 * math.pi)
        s = math.sqrt(1.0 - z * z)
        radius = rng.choice([1, 1, 1, 2])
        alpha = rng.randint(80, 150)
        base = rng.randint(200, 240)
        color = (
            max(0, base - rng.randint(10, 25)),
            max(0, base - rng.randint(5, 15)),
            base,
        )
        star_surface = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(star_surface, (*color, alpha), (radius, radius), radius)
        stars.append(
            {
                "dir": np.array([s * math.cos(phi), z, s * math.sin(phi)]),
                "surface": star_surface,
                "radius": radius,
            }
        )
    return stars


def draw_starfield(
    surface: pygame.Surface,
    starfield: Iterable[dict[str, object]],
    camera: Camera,
) -> None:
    right, up, forward = camera.basis()
    width, height = surface.get_size()
    focal = camera.focal_length
    for star in starfield:
        direction = star["dir"]  # type: ignore[index]
        depth = float(direction @ forward)
        if depth <= 1e-3:
            continue
        sx = width / 2.0 + float(direction @ right) / depth * focal
        sy = height / 2.0 - float(direction @ up) / depth * focal
        if not (0 <= sx < width and 0 <= sy < height):
            continue
        radius = star["radius"]  # type: ignore[index]
        surface.blit(star["surface"], (int(sx) - radius, int(sy) - radius))  # type: ignore[arg-type]


def project_polyline(
    camera: Camera, points: np.ndarray, origin: np.ndarray
) -> list[list[tuple[int, int]]]:
    """Project a polyline, splitting it where points fall behind the camera."""

    segments: list[list[tuple[int, int]]] = []
    current: list[tuple[int, int]] = []
    for point in points:
        projected = camera.world_to_screen(origin + point)
        if projected is None:
            if len(current) >= 2:
                segments.append(current)
            current = []
            continue
        current.append(_screen_point(projected[0], projected[1]))
    if len(current) >= 2:
        segments.append(current)
    return segments


class SceneRenderer:
    """Draws a :class:`SceneGraph` onto a pygame surface."""

    def __init__(
        self,
        surface: pygame.Surface,
        *,
        render_cfg: RenderCfg = RENDER_CFG,
        starfield: list[dict[str, object]] | None = None,
    ) -> None:
        self.surface = surface
        self._cfg = render_cfg
        self._starfield = (
            starfield
            if starfield is not None
            else generate_starfield(render_cfg.star_count, rng=random.Random(42))
        )

    def set_surface(self, surface: pygame.Surface) -> None:
        self.surface = surface

    def render(self, scene: SceneGraph, camera: Camera) -> None:
        cfg = self._cfg
        surface = self.surface
        surface.fill(cfg.background_color)
        draw_starfield(surface, self._starfield, camera)

        spheres: list[tuple[float, SceneNode, tuple[float, float, float]]] = []
        for node, parent_origin in scene.iter_visible():
            if node.kind == "line" and node.points is not None:
                for segment in project_polyline(camera, node.points, parent_origin):
                    draw_orbit_line(surface, node.color, segment, node.width)
                node.needs_update = False
            elif node.kind == "sphere":
                projected = camera.world_to_screen(parent_origin + node.position)
                if projected is not None:
                    spheres.append((projected[2], node, projected))

        # Painter's order: far spheres first.
        spheres.sort(key=lambda item: item[0], reverse=True)
        for depth, node, (sx, sy, _) in spheres:
            radius = max(cfg.sphere_min_pixels, int(round(camera.projected_radius(node.radius, depth))))
            draw_sphere(surface, _screen_point(sx, sy), radius, color=node.color)
