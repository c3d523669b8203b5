from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

_WORLD_UP = np.array([0.0, 1.0, 0.0])
# Used when looking straight along the world up axis (the chase view).
_FALLBACK_UP = np.array([0.0, 0.0, -1.0])


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


@dataclass
class CameraState:
    position: np.ndarray
    target: np.ndarray


class Camera:
    """Perspective camera looking at a target, with orbit-style manual controls."""

    def __init__(
        self,
        size: tuple[int, int],
        *,
        fov_deg: float = 75.0,
        near: float = 0.1,
        far: float = 1000.0,
        position: Sequence[float] = (0.0, 0.0, 100.0),
        target: Sequence[float] = (0.0, 0.0, 0.0),
        min_distance: float = 2.0,
        max_distance: float = 600.0,
        rotate_sensitivity: float = 0.005,
    ) -> None:
        if not 0.0 < fov_deg < 180.0:
            raise ValueError("Field of view must be between 0 and 180 degrees")
        self._size = size
        self._fov = math.radians(fov_deg)
        self._near = near
        self._far = far
        self._min_distance = min_distance
        self._max_distance = max_distance
        self._rotate_sensitivity = rotate_sensitivity
        self._home = CameraState(
            position=np.array(position, dtype=float),
            target=np.array(target, dtype=float),
        )
        self._state = CameraState(
            position=self._home.position.copy(),
            target=self._home.target.copy(),
        )
        self._drag_anchor: tuple[int, int] | None = None

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def aspect(self) -> float:
        width, height = self._size
        return width / max(height, 1)

    def update_size(self, size: tuple[int, int]) -> None:
        self._size = size

    @property
    def position(self) -> np.ndarray:
        return self._state.position

    @property
    def target(self) -> np.ndarray:
        return self._state.target

    @property
    def focal_length(self) -> float:
        """Pixels per unit at distance 1 along the view axis."""

        return (self._size[1] / 2.0) / math.tan(self._fov / 2.0)

    def set_position(self, position: Sequence[float]) -> None:
        self._state.position[:] = position

    def set_target(self, position: Sequence[float]) -> None:
        self._state.target[:] = position

    def reset(self) -> None:
        self._state.position[:] = self._home.position
        self._state.target[:] = self._home.target
        self._drag_anchor = None

    def basis(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return ``(right, up, forward)`` unit vectors of the view."""

        forward = self._state.target - self._state.position
        length = float(np.linalg.norm(forward))
        if length <= 1e-12:
            forward = np.array([0.0, 0.0, -1.0])
        else:
            forward = forward / length
        right = np.cross(forward, _WORLD_UP)
        if float(np.linalg.norm(right)) <= 1e-9:
            right = np.cross(forward, _FALLBACK_UP)
        right = right / np.linalg.norm(right)
        up = np.cross(right, forward)
        return right, up, forward

    def to_view(self, point: Sequence[float]) -> np.ndarray:
        right, up, forward = self.basis()
        offset = np.asarray(point, dtype=float) - self._state.position
        return np.array([offset @ right, offset @ up, offset @ forward])

    def world_to_screen(self, point: Sequence[float]) -> tuple[float, float, float] | None:
        """Project *point*; ``None`` when it lies outside the near/far range."""

        x, y, depth = self.to_view(point)
        if depth <= self._near or depth > self._far:
            return None
        width, height = self._size
        scale = self.focal_length / depth
        return width / 2.0 + x * scale, height / 2.0 - y * scale, float(depth)

    def projected_radius(self, radius: float, depth: float) -> float:
        if depth <= 0.0:
            return 0.0
        return radius * self.focal_length / depth

    def orbit(self, d_azimuth: float, d_polar: float) -> None:
        """Rotate the camera position about the target."""

        offset = self._state.position - self._state.target
        distance = float(np.linalg.norm(offset))
        if distance <= 1e-12:
            return
        azimuth = math.atan2(offset[0], offset[2]) + d_azimuth
        polar = math.acos(_clamp(offset[1] / distance, -1.0, 1.0)) + d_polar
        polar = _clamp(polar, 1e-3, math.pi - 1e-3)
        self._state.position[:] = self._state.target + distance * np.array(
            [
                math.sin(polar) * math.sin(azimuth),
                math.cos(polar),
                math.sin(polar) * math.cos(azimuth),
            ]
        )

    def zoom_by_factor(self, factor: float) -> None:
        """Move toward (factor < 1) or away from (factor > 1) the target."""

        offset = self._state.position - self._state.target
        distance = float(np.linalg.norm(offset))
        if distance <= 1e-12 or factor <= 0.0:
            return
        new_distance = _clamp(distance * factor, self._min_distance, self._max_distance)
        self._state.position[:] = self._state.target + offset * (new_distance / distance)

    def begin_drag(self, position: tuple[int, int]) -> None:
        self._drag_anchor = position

    def drag(self, position: tuple[int, int]) -> None:
        if self._drag_anchor is None:
            return
        dx = position[0] - self._drag_anchor[0]
        dy = position[1] - self._drag_anchor[1]
        if dx == 0 and dy == 0:
            return
        self.orbit(-dx * self._rotate_sensitivity, -dy * self._rotate_sensitivity)
        self._drag_anchor = position

    def end_drag(self) -> None:
        self._drag_anchor = None

    @property
    def dragging(self) -> bool:
        return self._drag_anchor is not None
