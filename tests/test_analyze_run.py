import numpy as np
import pytest

import analyze_run
from orrery.core.logging_utils import RunLogger
from orrery.core.model import SimulationState


@pytest.fixture
def recorded_run(tmp_path, system):
    with RunLogger(tmp_path, run_id="run") as logger:
        logger.log_event([0, 0.0, "start", "test"])
        for tick in range(1, 4):
            system.get("earth").position[:] = (3.0 * tick, 0.0, 4.0 * tick)
            logger.log_positions(SimulationState(time=10.0 * tick, tick=tick), system)
        logger.log_event([2, 20.0, "view", "earth"])
        logger.log_event([3, 30.0, "view", "moon"])
    return logger.run_dir


def test_timeseries_is_grouped_by_body(recorded_run):
    ts = analyze_run.load_timeseries(recorded_run / analyze_run.TIMESERIES_FILENAME)
    assert set(ts) == {"inner", "earth", "moon"}
    assert ts["earth"]["t"] == pytest.approx([10.0, 20.0, 30.0])
    assert ts["moon"]["wx"] == pytest.approx([3.0, 6.0, 9.0])


def test_radius_extremes(recorded_run):
    ts = analyze_run.load_timeseries(recorded_run / analyze_run.TIMESERIES_FILENAME)
    assert analyze_run.radius_extremes(ts["earth"]) == pytest.approx((5.0, 15.0))
    assert analyze_run.radius_extremes({"x": np.array([]), "z": np.array([])}) == (0.0, 0.0)


def test_events_are_counted_by_type(recorded_run):
    events = analyze_run.load_events(recorded_run / analyze_run.EVENTS_FILENAME)
    assert events[1] == {"tick": 2, "t": 20.0, "type": "view", "details": "earth"}
    assert analyze_run.summarize_events(events) == {"start": 1, "view": 2}


def test_figures_are_written(recorded_run):
    ts = analyze_run.load_timeseries(recorded_run / analyze_run.TIMESERIES_FILENAME)
    events = analyze_run.load_events(recorded_run / analyze_run.EVENTS_FILENAME)
    fig_dir = analyze_run.ensure_fig_dir(recorded_run)
    analyze_run.plot_tracks(fig_dir, ts)
    analyze_run.plot_heights(fig_dir, ts)
    analyze_run.plot_radius(fig_dir, ts, events)
    assert sorted(p.name for p in fig_dir.iterdir()) == ["heights.png", "radius.png", "tracks_xz.png"]
