"""Backward-looking position trails."""
from __future__ import annotations

from typing import Callable, Optional, Sequence

import numpy as np

from .config import SIM_CFG
from .model import OrbitParams
from .physics import evaluate_orbit


PointsSink = Callable[[np.ndarray], None]


class TrailBuffer:
    """Fixed set of positions re-sampled from the orbit every tick.

    The samples are not a history of earlier frames. Each ``update`` evaluates
    the orbit again at the same backward offsets, so slot 0 is the most recent
    point and the last slot the oldest. ``sink`` is called once per update with
    the whole buffer.
    """

    def __init__(
        self,
        offsets: Sequence[float] = SIM_CFG.trail_offsets,
        *,
        sink: Optional[PointsSink] = None,
        visible: bool = True,
    ) -> None:
        if not offsets:
            raise ValueError("A trail needs at least one sample offset")
        self._offsets = tuple(float(k) for k in offsets)
        self._positions = np.zeros((len(self._offsets), 3), dtype=float)
        self.sink = sink
        self.visible = visible
        self.needs_update = False
        self.revision = 0

    @property
    def offsets(self) -> tuple[float, ...]:
        return self._offsets

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def update(self, time: float, params: OrbitParams) -> None:
        for slot, offset in enumerate(self._offsets):
            self._positions[slot] = evaluate_orbit(time, params, offset, period_scaled=True)
        self.needs_update = True
        self.revision += 1
        if self.sink is not None:
            self.sink(self._positions)


def set_all_visible(trails: Sequence[TrailBuffer], visible: bool) -> None:
    for trail in trails:
        trail.visible = visible


__all__ = ["PointsSink", "TrailBuffer", "set_all_visible"]
