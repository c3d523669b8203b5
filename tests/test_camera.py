import math

import numpy as np
import pytest

from orrery.render.camera import Camera


def test_target_projects_to_screen_center():
    camera = Camera((800, 600))
    sx, sy, depth = camera.world_to_screen((0.0, 0.0, 0.0))
    assert (sx, sy) == pytest.approx((400.0, 300.0))
    assert depth == pytest.approx(100.0)


def test_focal_length_follows_vertical_fov():
    camera = Camera((800, 600), fov_deg=90.0)
    assert camera.focal_length == pytest.approx(300.0)
    # a point one unit up at depth one lands one focal length above center
    camera.set_position((0.0, 0.0, 1.0))
    _, sy, _ = camera.world_to_screen((0.0, 1.0, 0.0))
    assert sy == pytest.approx(0.0)


def test_points_outside_clip_range_are_dropped():
    camera = Camera((800, 600), far=150.0)
    assert camera.world_to_screen((0.0, 0.0, 200.0)) is None
    assert camera.world_to_screen((0.0, 0.0, 100.0)) is None
    assert camera.world_to_screen((0.0, 0.0, -100.0)) is None


def test_top_down_view_has_a_stable_basis():
    camera = Camera((800, 600), position=(0.0, 50.0, 0.0))
    right, up, forward = camera.basis()
    assert forward == pytest.approx([0.0, -1.0, 0.0])
    assert right == pytest.approx([1.0, 0.0, 0.0])
    assert up == pytest.approx([0.0, 0.0, -1.0])

    sx, _, _ = camera.world_to_screen((10.0, 0.0, 0.0))
    _, sy, _ = camera.world_to_screen((0.0, 0.0, -10.0))
    assert sx > 400.0
    assert sy < 300.0


def test_reset_restores_start_pose():
    camera = Camera((800, 600))
    camera.set_position((5.0, 60.0, 5.0))
    camera.set_target((5.0, 10.0, 5.0))
    camera.reset()
    assert camera.position == pytest.approx([0.0, 0.0, 100.0])
    assert camera.target == pytest.approx([0.0, 0.0, 0.0])


def test_resize_changes_aspect():
    camera = Camera((800, 600))
    camera.update_size((1200, 600))
    assert camera.aspect == pytest.approx(2.0)
    assert camera.world_to_screen((0.0, 0.0, 0.0))[0] == pytest.approx(600.0)


def test_zoom_is_clamped():
    camera = Camera((800, 600), min_distance=2.0, max_distance=600.0)
    camera.zoom_by_factor(100.0)
    assert np.linalg.norm(camera.position - camera.target) == pytest.approx(600.0)
    camera.zoom_by_factor(1e-6)
    assert np.linalg.norm(camera.position - camera.target) == pytest.approx(2.0)


def test_orbit_keeps_distance_to_target():
    camera = Camera((800, 600))
    camera.orbit(math.pi / 3, 0.4)
    assert np.linalg.norm(camera.position - camera.target) == pytest.approx(100.0)
    assert not np.allclose(camera.position, [0.0, 0.0, 100.0])


def test_drag_rotates_until_released():
    camera = Camera((800, 600))
    camera.begin_drag((100, 100))
    assert camera.dragging
    camera.drag((140, 90))
    moved = camera.position.copy()
    assert not np.allclose(moved, [0.0, 0.0, 100.0])

    camera.end_drag()
    camera.drag((300, 300))
    assert camera.position == pytest.approx(moved)


def test_field_of_view_must_be_sensible():
    with pytest.raises(ValueError):
        Camera((800, 600), fov_deg=180.0)
