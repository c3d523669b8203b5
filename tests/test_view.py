import numpy as np
import pytest

from orrery.core.controls import KeyboardControls, build_view_keys
from orrery.core.errors import UnresolvedBodyReference
from orrery.core.model import OrbitParams, SimulationState, ViewSelection
from orrery.core.trail import TrailBuffer
from orrery.core.view import ViewController
from orrery.render.camera import Camera


@pytest.fixture
def camera():
    return Camera((800, 600))


@pytest.fixture
def rig(system, camera):
    state = SimulationState()
    view = ViewController(system, camera)
    trails = [TrailBuffer(), TrailBuffer()]
    actions = []
    controls = KeyboardControls(
        state,
        view,
        trails,
        build_view_keys(["inner", "earth", "moon"]),
        on_action=lambda kind, detail: actions.append((kind, detail)),
    )
    return state, view, trails, controls, actions


def test_default_view_leaves_camera_alone(system, camera):
    view = ViewController(system, camera)
    camera.set_position((1.0, 2.0, 3.0))
    assert view.apply(SimulationState()) is None
    assert camera.position == pytest.approx([1.0, 2.0, 3.0])


def test_chase_view_sits_above_the_body(system, camera):
    system.get("earth").position[:] = (20.0, 1.5, -7.0)
    view = ViewController(system, camera)
    state = SimulationState(view=ViewSelection.body("earth"))

    view.apply(state)

    assert camera.target == pytest.approx([20.0, 1.5, -7.0])
    assert camera.position == pytest.approx([20.0, 51.5, -7.0])


def test_chase_view_uses_world_position_of_nested_body(system, camera):
    system.get("earth").position[:] = (25.0, 0.0, 0.0)
    system.get("moon").position[:] = (0.0, 0.0, 7.5)
    view = ViewController(system, camera, height=10.0)

    view.apply(SimulationState(view=ViewSelection.body("moon")))

    assert camera.target == pytest.approx([25.0, 0.0, 7.5])
    assert camera.position == pytest.approx([25.0, 10.0, 7.5])


def test_chase_view_fails_loudly_on_broken_parent_chain(system, camera):
    system.get("earth").parent = system.get("moon")
    view = ViewController(system, camera)
    with pytest.raises(UnresolvedBodyReference):
        view.apply(SimulationState(view=ViewSelection.body("earth")))


def test_selecting_unknown_body_is_rejected(system, camera):
    view = ViewController(system, camera)
    state = SimulationState()
    with pytest.raises(UnresolvedBodyReference):
        view.select(state, ViewSelection.body("pluto"))
    assert state.view.is_default


def test_keys_map_digits_in_view_order():
    keys = build_view_keys(["a", "b", "c", "d", "e"])
    assert list(keys) == ["1", "2", "3", "4", "6"]
    assert keys["4"] == ViewSelection.body("d")


def test_too_many_views_are_rejected():
    with pytest.raises(ValueError):
        build_view_keys([f"b{i}" for i in range(9)])


def test_number_keys_select_views(rig):
    state, _, _, controls, actions = rig
    assert controls.handle_key("3")
    assert state.view == ViewSelection.body("moon")
    assert actions[-1] == ("view", "moon")


def test_selection_holds_until_another_key(rig, system):
    state, view, _, controls, _ = rig
    controls.handle_key("2")
    for step in range(5):
        system.get("earth").position[:] = (step, 0.0, 0.0)
        view.apply(state)
    assert state.view == ViewSelection.body("earth")


def test_reset_key_restores_default_view_and_camera(rig, camera):
    state, view, _, controls, actions = rig
    controls.handle_key("1")
    view.apply(state)
    assert not np.allclose(camera.position, [0.0, 0.0, 100.0])

    controls.handle_key("5")

    assert state.view.is_default
    assert camera.position == pytest.approx([0.0, 0.0, 100.0])
    assert camera.target == pytest.approx([0.0, 0.0, 0.0])
    assert actions[-1] == ("reset", "default")


def test_trail_keys_toggle_every_trail(rig):
    _, _, trails, controls, actions = rig
    for trail in trails:
        trail.update(100.0, OrbitParams(10.0, 10.0, 0.0))
    snapshots = [trail.positions.copy() for trail in trails]

    controls.handle_key("-")
    assert not any(trail.visible for trail in trails)
    assert all(np.array_equal(t.positions, s) for t, s in zip(trails, snapshots))
    assert actions[-1] == ("trails", "hidden")

    controls.handle_key("=")
    assert all(trail.visible for trail in trails)


def test_unknown_keys_are_ignored(rig):
    state, _, trails, controls, actions = rig
    assert not controls.handle_key("x")
    assert not controls.handle_key("9")
    assert state.view.is_default
    assert all(trail.visible for trail in trails)
    assert actions == []


def test_reset_key_cannot_be_bound_to_a_view(system, camera):
    with pytest.raises(ValueError):
        KeyboardControls(
            SimulationState(),
            ViewController(system, camera),
            [],
            {"5": ViewSelection.body("earth")},
        )
