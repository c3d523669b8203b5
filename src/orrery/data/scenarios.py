"""Preset body layouts for the orrery."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from orrery.core.model import OrbitParams


@dataclass(frozen=True)
class BodySpec:
    key: str
    name: str
    radius: float
    color: tuple[int, int, int]
    params: Optional[OrbitParams] = None
    parent: Optional[str] = None
    trail: bool = True


@dataclass(frozen=True)
class Scenario:
    key: str
    name: str
    description: str
    bodies: tuple[BodySpec, ...]
    view_order: tuple[str, ...]

    def trailed_keys(self) -> list[str]:
        return [body.key for body in self.bodies if body.params is not None and body.trail]


SCENARIO_DEFINITIONS: tuple[Scenario, ...] = (
    Scenario(
        key="classic",
        name="Classic",
        description="A sun with three planets; the second planet carries a moon.",
        bodies=(
            BodySpec("sun", "Sun", 5.0, (255, 196, 64)),
            BodySpec("planet1", "Planet 1", 2.0, (214, 170, 110), OrbitParams(10.0, 10.0, 5.0), "sun"),
            BodySpec("planet2", "Planet 2", 3.0, (70, 130, 210), OrbitParams(25.0, 25.0, 0.0), "sun"),
            BodySpec("moon", "Moon", 1.0, (170, 170, 170), OrbitParams(7.5, 7.5, 0.0), "planet2"),
            BodySpec("planet3", "Planet 3", 4.0, (90, 120, 230), OrbitParams(100.0, 50.0, 0.0), "sun"),
        ),
        view_order=("planet1", "planet2", "moon", "planet3"),
    ),
    Scenario(
        key="eccentric",
        name="Eccentric",
        description="Tilted and stretched orbits, including a moon on an ellipse.",
        bodies=(
            BodySpec("sun", "Sun", 5.0, (255, 196, 64)),
            BodySpec("inner", "Inner", 1.5, (200, 120, 90), OrbitParams(18.0, 8.0, 6.0), "sun"),
            BodySpec("giant", "Giant", 3.5, (210, 180, 140), OrbitParams(60.0, 40.0, -10.0), "sun"),
            BodySpec("giant_moon", "Giant Moon", 0.8, (190, 190, 200), OrbitParams(9.0, 5.0, 2.0), "giant"),
            BodySpec("comet", "Comet", 0.7, (180, 230, 255), OrbitParams(140.0, 12.0, 25.0), "sun"),
        ),
        view_order=("inner", "giant", "giant_moon", "comet"),
    ),
)

SCENARIOS: dict[str, Scenario] = {scenario.key: scenario for scenario in SCENARIO_DEFINITIONS}
SCENARIO_DISPLAY_ORDER: list[str] = [scenario.key for scenario in SCENARIO_DEFINITIONS]
DEFAULT_SCENARIO_KEY = SCENARIO_DISPLAY_ORDER[0]


__all__ = [
    "BodySpec",
    "DEFAULT_SCENARIO_KEY",
    "SCENARIO_DEFINITIONS",
    "SCENARIO_DISPLAY_ORDER",
    "SCENARIOS",
    "Scenario",
]
