"""Frame timing and the per-frame animation tick."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from .config import SIM_CFG
from .model import Body, SimulationState
from .physics import evaluate_orbit
from .system import OrbitalSystem
from .trail import TrailBuffer
from .view import ViewController


BodyHook = Callable[[Body], None]
RenderHook = Callable[[SimulationState], None]


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt


class AnimationClock:
    """Owns the simulation state and runs one frame per :meth:`tick`.

    Each tick advances the time by a fixed step, then updates body positions,
    trails and the camera in that order before calling ``render``.
    """

    def __init__(
        self,
        system: OrbitalSystem,
        trails: Mapping[str, TrailBuffer],
        view: ViewController,
        state: Optional[SimulationState] = None,
        *,
        step: float = SIM_CFG.time_step,
        on_body_moved: Optional[BodyHook] = None,
        render: Optional[RenderHook] = None,
    ) -> None:
        if step <= 0.0:
            raise ValueError("Time step must be positive")
        for key in trails:
            if system.get(key).params is None:
                raise ValueError(f"Body {key!r} has no orbit to trail")
        self.system = system
        self.trails = dict(trails)
        self.view = view
        self.state = state if state is not None else SimulationState()
        self.step = step
        self.on_body_moved = on_body_moved
        self.render = render

    def tick(self) -> SimulationState:
        state = self.state
        state.time += self.step
        state.tick += 1

        for body in self.system.orbiting():
            body.position[:] = evaluate_orbit(state.time, body.params, period_scaled=True)
            if self.on_body_moved is not None:
                self.on_body_moved(body)

        for key, trail in self.trails.items():
            trail.update(state.time, self.system.get(key).params)

        self.view.apply(state)

        if self.render is not None:
            self.render(state)
        return state

    def run(self, frames: int) -> SimulationState:
        for _ in range(frames):
            self.tick()
        return self.state


__all__ = ["AnimationClock", "FrameTimer"]
