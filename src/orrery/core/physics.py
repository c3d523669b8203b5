"""Parametric ellipse evaluation for the orrery.

Positions are not integrated. The orbital angle is a direct function of the
simulation time, and the in-plane radius follows the focus-centred polar
equation of the ellipse::

    r = a (1 - e^2) / (1 - e cos(theta))

with ``x = r cos(theta)``, ``z = r sin(theta)`` and ``y = inclination * sin(theta)``.
"""
from __future__ import annotations

import math

import numpy as np

from .config import SIM_CFG
from .model import OrbitParams


def orbit_angle(
    time: float,
    params: OrbitParams,
    period_offset: float = 0.0,
    *,
    period_scaled: bool = False,
) -> float:
    """Orbital angle ``theta`` for *time*.

    A zero ``period_offset`` uses the time as the angle. A non-zero offset (or
    ``period_scaled``) shifts the time back by ``period_offset * a**2`` and
    divides by the period ``a**3``.
    """

    if period_offset == 0.0 and not period_scaled:
        return float(time)
    a = params.semi_major_axis
    period = params.period
    if period == 0.0:
        return 0.0
    return (time - period_offset * a * a) / period


def orbit_radius(theta: float, params: OrbitParams) -> float:
    """In-plane distance from the focus at angle *theta*."""

    a = params.semi_major_axis
    e = params.eccentricity
    semi_latus = a * (1.0 - e * e)
    if semi_latus <= 0.0:
        return 0.0
    return semi_latus / (1.0 - e * math.cos(theta))


def evaluate_orbit(
    time: float,
    params: OrbitParams,
    period_offset: float = 0.0,
    *,
    period_scaled: bool = False,
) -> np.ndarray:
    """Return the ``(x, y, z)`` position on the orbit at *time*."""

    if params.is_degenerate:
        return np.zeros(3, dtype=float)
    theta = orbit_angle(time, params, period_offset, period_scaled=period_scaled)
    r = orbit_radius(theta, params)
    sin_theta = math.sin(theta)
    return np.array(
        [r * math.cos(theta), params.inclination * sin_theta, r * sin_theta],
        dtype=float,
    )


def orbit_path(
    params: OrbitParams,
    *,
    step: float = SIM_CFG.path_step,
    sweep: float = SIM_CFG.path_sweep,
) -> np.ndarray:
    """Polyline for drawing the orbit, shape ``(N, 3)``.

    Samples run from 0 up to (not including) *sweep*. The default sweep of
    2.2 pi overlaps the start of the curve a little past the full turn.
    """

    if step <= 0.0:
        raise ValueError("Orbit path step must be positive")
    count = max(1, math.ceil(sweep / step - 1e-9))
    return np.array([evaluate_orbit(i * step, params) for i in range(count)], dtype=float)


__all__ = ["evaluate_orbit", "orbit_angle", "orbit_path", "orbit_radius"]
