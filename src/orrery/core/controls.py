"""Keyboard bindings for trail visibility and camera views."""
from __future__ import annotations

from typing import Callable, Mapping, Optional, Sequence

from .config import SIM_CFG, SimulationCfg
from .model import SimulationState, ViewSelection
from .trail import TrailBuffer, set_all_visible
from .view import ViewController


ActionHook = Callable[[str, str], None]


def build_view_keys(view_order: Sequence[str], cfg: SimulationCfg = SIM_CFG) -> dict[str, ViewSelection]:
    """Map digit keys to body views in *view_order*, skipping the reset key."""

    keys = [key for key in cfg.view_keys if key != cfg.reset_view_key]
    if len(view_order) > len(keys):
        raise ValueError(f"At most {len(keys)} selectable views are supported")
    return {key: ViewSelection.body(body_key) for key, body_key in zip(keys, view_order)}


class KeyboardControls:
    """Lookup table from key characters to actions on the shared state.

    ``on_action`` receives ``(kind, detail)`` for every applied action, e.g.
    ``("view", "planet2")`` or ``("trails", "hidden")``.
    """

    def __init__(
        self,
        state: SimulationState,
        view: ViewController,
        trails: Sequence[TrailBuffer],
        view_keys: Mapping[str, ViewSelection],
        *,
        cfg: SimulationCfg = SIM_CFG,
        on_action: Optional[ActionHook] = None,
    ) -> None:
        if cfg.reset_view_key in view_keys:
            raise ValueError(f"Key {cfg.reset_view_key!r} is reserved for the default view")
        self._state = state
        self._view = view
        self._trails = list(trails)
        self.on_action = on_action
        self._table: dict[str, Callable[[], None]] = {
            cfg.show_trails_key: lambda: self._set_trails(True),
            cfg.hide_trails_key: lambda: self._set_trails(False),
            cfg.reset_view_key: self._reset_view,
        }
        for key, selection in view_keys.items():
            self._table[key] = lambda selection=selection: self._select(selection)

    @property
    def keys(self) -> list[str]:
        return list(self._table)

    def handle_key(self, key: str) -> bool:
        """Apply the action bound to *key*; unknown keys are ignored."""

        action = self._table.get(key)
        if action is None:
            return False
        action()
        return True

    def _notify(self, kind: str, detail: str) -> None:
        if self.on_action is not None:
            self.on_action(kind, detail)

    def _set_trails(self, visible: bool) -> None:
        set_all_visible(self._trails, visible)
        self._notify("trails", "shown" if visible else "hidden")

    def _select(self, selection: ViewSelection) -> None:
        self._view.select(self._state, selection)
        self._notify("view", str(selection))

    def _reset_view(self) -> None:
        self._view.reset(self._state)
        self._notify("reset", "default")


__all__ = ["ActionHook", "KeyboardControls", "build_view_keys"]
