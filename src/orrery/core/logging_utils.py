"""Run recording for the orrery."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .model import SimulationState
from .system import OrbitalSystem


LAST_RUN_MARKER = "last_run.txt"


def allocate_run_dir(root_dir: Path, run_id: Optional[str] = None) -> Path:
    """Create a fresh run folder under *root_dir*.

    Without *run_id* the folder is named ``YYYYmmdd_HHMMSS_run``. A taken name
    gets a numeric suffix (``_01``, ``_02``... for timestamps, ``_1``, ``_2``...
    for explicit ids).
    """

    root_dir.mkdir(parents=True, exist_ok=True)
    if run_id:
        base, width = run_id, 0
    else:
        base, width = f"{datetime.now():%Y%m%d_%H%M%S}_run", 2
    candidate = root_dir / base
    suffix = 1
    while candidate.exists():
        candidate = root_dir / f"{base}_{str(suffix).zfill(width)}"
        suffix += 1
    candidate.mkdir(parents=True, exist_ok=False)
    return candidate


class _CsvChannel:
    """Append-only CSV file with a row buffer."""

    def __init__(self, path: Path, header: Sequence[str], flush_threshold: int) -> None:
        self.path = path
        self._threshold = max(1, flush_threshold)
        self._rows: list[str] = []
        self._fh = path.open("w", newline="")
        self._fh.write(",".join(header) + "\n")

    def append(self, row: str) -> None:
        self._rows.append(row)
        if len(self._rows) >= self._threshold:
            self.flush()

    def flush(self) -> None:
        if self._rows:
            self._fh.write("\n".join(self._rows) + "\n")
            self._rows.clear()
        self._fh.flush()

    def close(self) -> None:
        self.flush()
        self._fh.close()


class RunLogger:
    """Buffered logger that stores body positions and events to CSV files.

    Parameters
    ----------
    root_dir:
        Root directory where run folders are created.
    run_id:
        Optional custom run identifier. Defaults to ``YYYYmmdd_HHMMSS_run``.
    timeseries_flush_threshold:
        Buffered position rows before an automatic flush.
    events_flush_threshold:
        Buffered event rows before an automatic flush.
    """

    TIMESERIES_HEADER = ["tick", "t", "body", "x", "y", "z", "wx", "wy", "wz"]
    EVENTS_HEADER = ["tick", "t", "type", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 20,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.run_dir = allocate_run_dir(self.root_dir, run_id)
        self.run_id = self.run_dir.name

        self.timeseries_path = self.run_dir / "timeseries.csv"
        self.events_path = self.run_dir / "events.csv"
        self.meta_path = self.run_dir / "meta.json"

        self._timeseries = _CsvChannel(
            self.timeseries_path, self.TIMESERIES_HEADER, timeseries_flush_threshold
        )
        self._events = _CsvChannel(self.events_path, self.EVENTS_HEADER, events_flush_threshold)
        self.closed = False

        (self.root_dir / LAST_RUN_MARKER).write_text(self.run_id, encoding="utf-8")

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_ts(self, values: Sequence[object]) -> None:
        self._timeseries.append(self._format_row(values))

    def log_event(self, values: Sequence[object]) -> None:
        self._events.append(self._format_row(values))

    def record_event(self, state: SimulationState, kind: str, details: str = "") -> None:
        """Log an event stamped with the current tick and time."""

        self.log_event([state.tick, state.time, kind, details])

    def log_positions(self, state: SimulationState, system: OrbitalSystem) -> None:
        """One timeseries row per orbiting body: local and world coordinates."""

        for body in system.orbiting():
            world = system.world_position(body)
            self.log_ts(
                [
                    state.tick,
                    state.time,
                    body.key,
                    *(float(v) for v in body.position),
                    *(float(v) for v in world),
                ]
            )

    def close(self) -> None:
        if self.closed:
            return
        self._timeseries.close()
        self._events.close()
        self.closed = True

    @classmethod
    def _format_row(cls, values: Sequence[object]) -> str:
        return ",".join(cls._format_value(v) for v in values)

    @staticmethod
    def _format_value(value: object) -> str:
        if isinstance(value, float):
            return f"{value:.10g}"
        return str(value)

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["LAST_RUN_MARKER", "RunLogger", "allocate_run_dir"]
