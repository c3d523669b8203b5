"""Camera view selection and the top-down chase view."""
from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np

from .config import SIM_CFG
from .errors import UnresolvedBodyReference
from .model import SimulationState, ViewSelection
from .system import OrbitalSystem


class CameraRig(Protocol):
    def set_position(self, position: Sequence[float]) -> None: ...

    def set_target(self, position: Sequence[float]) -> None: ...

    def reset(self) -> None: ...


class ViewController:
    """Keeps the camera above the selected body.

    In the default view the camera is left to the manual controls. Any other
    selection moves the camera target onto the body's world position and the
    camera straight above it by ``height``, every tick.
    """

    def __init__(
        self,
        system: OrbitalSystem,
        camera: CameraRig,
        *,
        height: float = SIM_CFG.chase_height,
    ) -> None:
        self._system = system
        self._camera = camera
        self._height = height

    @property
    def camera(self) -> CameraRig:
        return self._camera

    @property
    def height(self) -> float:
        return self._height

    def select(self, state: SimulationState, selection: ViewSelection) -> None:
        if not selection.is_default and selection.body_key not in self._system:
            raise UnresolvedBodyReference(f"Cannot view unknown body {selection.body_key!r}")
        state.view = selection

    def reset(self, state: SimulationState) -> None:
        state.view = ViewSelection.default()
        self._camera.reset()

    def apply(self, state: SimulationState) -> np.ndarray | None:
        """Reposition the camera for ``state.view``; returns the new target."""

        view = state.view
        if view.is_default:
            return None
        target = self._system.world_position(view.body_key)
        self._camera.set_target(target)
        self._camera.set_position(target + np.array([0.0, self._height, 0.0]))
        return target


__all__ = ["CameraRig", "ViewController"]
