import math

import numpy as np
import pytest

from orrery.core.model import OrbitParams
from orrery.core.physics import evaluate_orbit, orbit_angle, orbit_path, orbit_radius


def test_start_of_circular_orbit():
    pos = evaluate_orbit(0.0, OrbitParams(25.0, 25.0, 0.0))
    assert pos == pytest.approx([25.0, 0.0, 0.0])


@pytest.mark.parametrize("params", [
    OrbitParams(10.0, 10.0, 5.0),
    OrbitParams(100.0, 50.0, 0.0),
    OrbitParams(140.0, 12.0, 25.0),
])
@pytest.mark.parametrize("time", [0.0, 0.3, 1.7, 4.0, 123.4])
def test_angle_is_periodic_in_two_pi(params, time):
    a = evaluate_orbit(time, params, 0)
    b = evaluate_orbit(time + 2.0 * math.pi, params, 0)
    assert b[0] == pytest.approx(a[0], abs=1e-9)
    assert b[2] == pytest.approx(a[2], abs=1e-9)


def test_circular_orbit_keeps_its_radius():
    params = OrbitParams(7.5, 7.5, 0.0)
    for time in np.linspace(0.0, 50.0, 37):
        x, _, z = evaluate_orbit(float(time), params)
        assert math.hypot(x, z) == pytest.approx(7.5, abs=1e-9)


def test_ellipse_extremes_sit_on_the_x_axis():
    params = OrbitParams(100.0, 50.0, 0.0)
    assert evaluate_orbit(0.0, params) == pytest.approx([100.0, 0.0, 0.0])
    far_side = evaluate_orbit(math.pi, params)
    assert far_side[0] == pytest.approx(-50.0)
    assert far_side[2] == pytest.approx(0.0, abs=1e-9)


def test_inclination_only_moves_y():
    flat = evaluate_orbit(math.pi / 2, OrbitParams(10.0, 10.0, 0.0))
    tilted = evaluate_orbit(math.pi / 2, OrbitParams(10.0, 10.0, 5.0))
    assert tilted[1] == pytest.approx(5.0)
    assert flat[1] == pytest.approx(0.0)
    assert tilted[0] == pytest.approx(flat[0])
    assert tilted[2] == pytest.approx(flat[2])
    assert tilted[2] == pytest.approx(10.0)


def test_non_zero_offset_rescales_time_by_period():
    params = OrbitParams(10.0, 10.0, 0.0)
    theta = orbit_angle(1000.0, params, math.pi)
    assert theta == pytest.approx((1000.0 - math.pi * 100.0) / 1000.0)
    pos = evaluate_orbit(1000.0, params, math.pi)
    assert pos == pytest.approx([10.0 * math.cos(theta), 0.0, 10.0 * math.sin(theta)])


def test_period_scaled_phase_with_zero_offset():
    params = OrbitParams(25.0, 25.0, 0.0)
    assert orbit_angle(500.0, params) == 500.0
    assert orbit_angle(500.0, params, period_scaled=True) == pytest.approx(500.0 / 25.0**3)


def test_evaluation_is_deterministic():
    params = OrbitParams(100.0, 50.0, 3.0)
    first = evaluate_orbit(42.0, params, 2 * math.pi)
    second = evaluate_orbit(42.0, params, 2 * math.pi)
    assert np.array_equal(first, second)


def test_zero_orbit_stays_at_parent_origin():
    params = OrbitParams(0.0, 0.0, 3.0)
    for time, offset in [(0.0, 0.0), (10.0, 0.0), (10.0, math.pi)]:
        assert np.array_equal(evaluate_orbit(time, params, offset), np.zeros(3))


def test_radial_orbit_collapses_to_focus():
    params = OrbitParams(10.0, 0.0, 0.0)
    assert params.eccentricity == pytest.approx(1.0)
    assert orbit_radius(0.0, params) == 0.0
    assert np.all(np.isfinite(evaluate_orbit(0.0, params)))


def test_orbit_path_is_closed_circle():
    path = orbit_path(OrbitParams(10.0, 10.0, 0.0))
    assert path.shape == (141, 3)
    assert np.all(path[:, 1] == 0.0)
    assert np.hypot(path[:, 0], path[:, 2]) == pytest.approx(np.full(141, 10.0))
    # 128 steps of pi/64 make a full turn; the rest overlaps the start.
    assert path[128] == pytest.approx(path[0], abs=1e-9)
    assert path[140] == pytest.approx(path[12], abs=1e-9)


def test_orbit_path_rejects_bad_step():
    with pytest.raises(ValueError):
        orbit_path(OrbitParams(10.0, 10.0, 0.0), step=0.0)
