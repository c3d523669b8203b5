"""Fonts and cached text surfaces for the HUD."""
from __future__ import annotations

from collections import OrderedDict

import pygame

from orrery.core.config import RENDER_CFG, RenderCfg


Color = tuple[int, int, int] | tuple[int, int, int, int]


class TextCache:
    """Least-recently-used store of rendered text surfaces.

    HUD labels change rarely compared to the frame rate, so each
    ``(font, text, colour)`` combination is rendered once and reused.
    """

    def __init__(self, max_size: int = RENDER_CFG.text_cache_size) -> None:
        if max_size <= 0:
            raise ValueError("Text cache size must be positive")
        self.max_size = max_size
        self._surfaces: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()

    def __len__(self) -> int:
        return len(self._surfaces)

    def render(self, font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
        key = (id(font), text, color)
        surface = self._surfaces.get(key)
        if surface is None:
            surface = font.render(text, True, color)
            self._surfaces[key] = surface
            while len(self._surfaces) > self.max_size:
                self._surfaces.popitem(last=False)
        else:
            self._surfaces.move_to_end(key)
        return surface

    def clear(self) -> None:
        self._surfaces.clear()


_TEXT_CACHE = TextCache()


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Render *text* through the shared :class:`TextCache`."""

    return _TEXT_CACHE.render(font, text, color)


def load_hud_font(render_cfg: RenderCfg = RENDER_CFG, *, bold: bool = False) -> pygame.font.Font:
    """First installed face from ``render_cfg.hud_font_names``, else pygame's default font."""

    if not pygame.font.get_init():
        pygame.font.init()
    for name in render_cfg.hud_font_names:
        path = pygame.font.match_font(name, bold=bold)
        if path:
            return pygame.font.Font(path, render_cfg.hud_font_size)
    return pygame.font.Font(None, render_cfg.hud_font_size)


__all__ = ["Color", "TextCache", "get_text_surface", "load_hud_font"]
