"""Data models for the orrery state."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

import numpy as np

from .errors import InvalidOrbitParams


@dataclass(frozen=True)
class OrbitParams:
    """Extremes of an ellipse measured from its focus, plus a vertical tilt."""

    apogee: float
    perigee: float
    inclination: float = 0.0

    def __post_init__(self) -> None:
        values = (self.apogee, self.perigee, self.inclination)
        if not all(math.isfinite(v) for v in values):
            raise InvalidOrbitParams(f"orbit parameters must be finite: {values}")
        if self.perigee < 0.0:
            raise InvalidOrbitParams(f"perigee must be non-negative, got {self.perigee}")
        if self.apogee < self.perigee:
            raise InvalidOrbitParams(
                f"apogee ({self.apogee}) must not be smaller than perigee ({self.perigee})"
            )

    @property
    def semi_major_axis(self) -> float:
        return (self.apogee + self.perigee) / 2.0

    @property
    def semi_minor_axis(self) -> float:
        a = self.semi_major_axis
        return math.sqrt(max(0.0, a * a - (a - self.perigee) ** 2))

    @property
    def eccentricity(self) -> float:
        a = self.semi_major_axis
        if a <= 0.0:
            return 0.0
        b = self.semi_minor_axis
        return math.sqrt(max(0.0, 1.0 - (b * b) / (a * a)))

    @property
    def period(self) -> float:
        return self.semi_major_axis**3

    @property
    def is_circular(self) -> bool:
        return self.apogee == self.perigee

    @property
    def is_degenerate(self) -> bool:
        return self.semi_major_axis == 0.0


@dataclass(eq=False)
class Body:
    """A body in the orrery.

    ``parent`` is a non-owning back-reference to the body this one orbits; the
    central body has neither a parent nor orbit parameters. ``position`` is in
    the parent's local frame.
    """

    key: str
    name: str
    radius: float
    color: tuple[int, int, int]
    params: Optional[OrbitParams] = None
    parent: Optional["Body"] = None
    position: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=float))

    @property
    def is_central(self) -> bool:
        return self.parent is None

    def __repr__(self) -> str:
        parent = self.parent.key if self.parent is not None else None
        return f"Body(key={self.key!r}, parent={parent!r}, params={self.params!r})"


class ViewKind(Enum):
    DEFAULT = auto()
    BODY = auto()


@dataclass(frozen=True)
class ViewSelection:
    """Camera target selection: the free default view or a chase view of one body."""

    kind: ViewKind = ViewKind.DEFAULT
    body_key: Optional[str] = None

    @classmethod
    def default(cls) -> "ViewSelection":
        return cls()

    @classmethod
    def body(cls, key: str) -> "ViewSelection":
        return cls(ViewKind.BODY, key)

    @property
    def is_default(self) -> bool:
        return self.kind is ViewKind.DEFAULT

    def __str__(self) -> str:
        return "default" if self.is_default else str(self.body_key)


@dataclass
class SimulationState:
    """Mutable state advanced once per tick by the animation clock."""

    time: float = 0.0
    tick: int = 0
    view: ViewSelection = field(default_factory=ViewSelection.default)


__all__ = ["Body", "OrbitParams", "SimulationState", "ViewKind", "ViewSelection"]
