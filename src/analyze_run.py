"""Analyze a recorded orrery run and generate diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
NUMERIC_COLUMNS = ("tick", "t", "x", "y", "z", "wx", "wy", "wz")


def load_timeseries(path: Path) -> Dict[str, Dict[str, np.ndarray]]:
    """Read ``timeseries.csv`` into ``{body: {column: array}}``."""

    columns: Dict[str, Dict[str, List[float]]] = {}
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            body = row.get("body")
            if not body:
                continue
            series = columns.setdefault(body, {name: [] for name in NUMERIC_COLUMNS})
            for name in NUMERIC_COLUMNS:
                series[name].append(float(row[name]))
    return {
        body: {name: np.asarray(values) for name, values in series.items()}
        for body, series in columns.items()
    }


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            events.append(
                {
                    "tick": int(row["tick"]),
                    "t": float(row["t"]),
                    "type": row["type"],
                    "details": row.get("details", ""),
                }
            )
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {}
    for event in events:
        summary[event["type"]] = summary.get(event["type"], 0) + 1
    return summary


def radius_extremes(series: Dict[str, np.ndarray]) -> tuple[float, float]:
    """Smallest and largest in-plane distance from the parent."""

    r = np.hypot(series["x"], series["z"])
    if r.size == 0:
        return 0.0, 0.0
    return float(r.min()), float(r.max())


def plot_tracks(fig_dir: Path, ts: Dict[str, Dict[str, np.ndarray]]) -> None:
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.scatter([0.0], [0.0], color="#ffc440", s=60, label="Central body")
    for body, series in ts.items():
        ax.plot(series["wx"], series["wz"], lw=1.0, label=body)
    ax.set_aspect("equal", "box")
    ax.set_xlabel("x")
    ax.set_ylabel("z")
    ax.set_title("World tracks (top-down)")
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "tracks_xz.png", dpi=150)
    plt.close(fig)


def plot_heights(fig_dir: Path, ts: Dict[str, Dict[str, np.ndarray]]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    for body, series in ts.items():
        ax.plot(series["t"], series["wy"], lw=1.0, label=body)
    ax.set_xlabel("t")
    ax.set_ylabel("world y")
    ax.set_title("Height above the orbital plane")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "heights.png", dpi=150)
    plt.close(fig)


def plot_radius(fig_dir: Path, ts: Dict[str, Dict[str, np.ndarray]], events: List[dict]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    for body, series in ts.items():
        ax.plot(series["t"], np.hypot(series["x"], series["z"]), lw=1.0, label=body)
    for event in events:
        if event["type"] in ("view", "reset"):
            ax.axvline(event["t"], color="#868e96", linestyle=":", alpha=0.5)
    ax.set_xlabel("t")
    ax.set_ylabel("r (parent frame)")
    ax.set_title("Distance from parent")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "radius.png", dpi=150)
    plt.close(fig)


def print_summary(
    run_dir: Path,
    meta: dict,
    ts: Dict[str, Dict[str, np.ndarray]],
    event_summary: Dict[str, int],
) -> None:
    print(f"Run: {run_dir.name}")
    print(f" Scenario: {meta.get('scenario_name', 'unknown')}")
    bodies = meta.get("bodies", {})
    for body, series in ts.items():
        r_min, r_max = radius_extremes(series)
        info = bodies.get(body, {})
        expected = ""
        if info.get("apogee") is not None:
            expected = f" (perigee {info['perigee']:g}, apogee {info['apogee']:g})"
        print(f" {body}: r in [{r_min:.3f}, {r_max:.3f}]{expected}, {series['t'].size} samples")
    print(
        " Events:" + ",".join(f" {etype}: {count}" for etype, count in event_summary.items())
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded run and write figures.")
    parser.add_argument("run_dir", nargs="?", help="Path to a specific run directory")
    parser.add_argument("--runs-dir", default=str(Path("data") / "runs"))
    args = parser.parse_args()

    base_runs_dir = Path(args.runs_dir)
    if args.run_dir:
        run_path = Path(args.run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / args.run_dir
    else:
        last_run_file = base_runs_dir / "last_run.txt"
        if not last_run_file.exists():
            parser.error("No run given and last_run.txt is missing.")
        run_id = last_run_file.read_text(encoding="utf-8").strip()
        run_path = base_runs_dir / run_id

    if not run_path.is_dir():
        parser.error(f"Run directory not found: {run_path}")

    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME

    if not meta_path.exists() or not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing meta/timeseries/events files.")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)

    ts = load_timeseries(ts_path)
    events = load_events(ev_path)

    if not ts:
        parser.error("timeseries.csv is empty, nothing to analyze.")

    fig_dir = ensure_fig_dir(run_path)
    plot_tracks(fig_dir, ts)
    plot_heights(fig_dir, ts)
    plot_radius(fig_dir, ts, events)

    print_summary(run_path, meta, ts, summarize_events(events))


if __name__ == "__main__":
    main()
