"""HUD panels and the trail toggle buttons."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

import pygame

from orrery.core.config import RENDER_CFG, RenderCfg
from orrery.core.trail import TrailBuffer

from .assets import Color, get_text_surface


@dataclass(frozen=True)
class ButtonVisualStyle:
    base_color: Color
    hover_color: Color
    text_color: tuple[int, int, int]
    radius: int
    border_color: Color | None = None
    border_width: int = 0


def _draw_rounded(surface: pygame.Surface, color: Color, radius: int, border: int = 0) -> None:
    pygame.draw.rect(surface, color, surface.get_rect(), border, border_radius=radius)


@dataclass(eq=False)
class TrailToggleButton:
    """One button bound to the ``visible`` flag of a trail."""

    key: str
    label: str
    trail: TrailBuffer
    rect: pygame.Rect

    @property
    def text(self) -> str:
        return f"{self.label}: {'on' if self.trail.visible else 'off'}"

    def draw(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        style: ButtonVisualStyle,
        hovered: bool,
    ) -> None:
        face = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        _draw_rounded(face, style.hover_color if hovered else style.base_color, style.radius)
        if style.border_color is not None and style.border_width > 0:
            _draw_rounded(face, style.border_color, style.radius, style.border_width)
        surface.blit(face, self.rect.topleft)
        text_surf = get_text_surface(font, self.text, style.text_color)
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))


class TrailTogglePanel:
    """Column of per-trail toggles in the top-right corner of the window.

    Toggling a button flips only that trail; the ``=`` and ``-`` keys still
    switch every trail at once.
    """

    def __init__(
        self,
        trails: Mapping[str, TrailBuffer],
        labels: Mapping[str, str],
        *,
        render_cfg: RenderCfg = RENDER_CFG,
        on_toggle: Callable[[str, bool], None] | None = None,
    ) -> None:
        self._cfg = render_cfg
        self.on_toggle = on_toggle
        self._on_style = ButtonVisualStyle(
            base_color=render_cfg.button_color,
            hover_color=render_cfg.button_hover_color,
            text_color=render_cfg.button_text_color,
            radius=render_cfg.button_radius,
            border_color=render_cfg.button_border_color,
            border_width=1,
        )
        self._off_style = ButtonVisualStyle(
            base_color=render_cfg.button_off_color,
            hover_color=render_cfg.button_hover_color,
            text_color=render_cfg.button_text_color,
            radius=render_cfg.button_radius,
        )
        self.buttons = [
            TrailToggleButton(
                key,
                f"{labels.get(key, key)} Trail",
                trail,
                pygame.Rect((0, 0), render_cfg.button_size),
            )
            for key, trail in trails.items()
        ]

    def button_at(self, pos: tuple[int, int]) -> TrailToggleButton | None:
        for button in self.buttons:
            if button.rect.collidepoint(pos):
                return button
        return None

    def toggle(self, key: str) -> bool:
        for button in self.buttons:
            if button.key == key:
                button.trail.visible = not button.trail.visible
                if self.on_toggle is not None:
                    self.on_toggle(key, button.trail.visible)
                return button.trail.visible
        raise KeyError(key)

    def layout(self, size: tuple[int, int]) -> None:
        """Stack the buttons against the right edge of a window of *size*."""

        button_w, button_h = self._cfg.button_size
        x = size[0] - button_w - self._cfg.panel_margin
        for index, button in enumerate(self.buttons):
            button.rect.topleft = (x, self._cfg.panel_margin + index * (button_h + self._cfg.panel_spacing))

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Toggle the clicked trail; ``True`` when the click was consumed."""

        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return False
        button = self.button_at(event.pos)
        if button is None:
            return False
        self.toggle(button.key)
        return True

    def draw(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        mouse_pos: tuple[int, int] | None = None,
    ) -> None:
        if mouse_pos is None:
            mouse_pos = pygame.mouse.get_pos()
        for button in self.buttons:
            style = self._on_style if button.trail.visible else self._off_style
            button.draw(surface, font, style, button.rect.collidepoint(mouse_pos))


def build_hud_panel(
    font: pygame.font.Font,
    lines: Sequence[str],
    *,
    render_cfg: RenderCfg = RENDER_CFG,
) -> pygame.Surface:
    """Translucent box with one line of HUD text per entry."""

    if not lines:
        raise ValueError("lines must not be empty")
    padding_x, padding_y = render_cfg.hud_padding
    line_height = font.get_linesize()
    width = max(font.size(text)[0] for text in lines) + padding_x * 2
    height = line_height * len(lines) + padding_y * 2
    panel = pygame.Surface((width, height), pygame.SRCALPHA)
    _draw_rounded(panel, render_cfg.hud_background_color, render_cfg.hud_corner_radius)
    for row, text in enumerate(lines):
        if text:
            panel.blit(
                get_text_surface(font, text, render_cfg.hud_text_color),
                (padding_x, padding_y + row * line_height),
            )
    return panel


__all__ = ["ButtonVisualStyle", "TrailToggleButton", "TrailTogglePanel", "build_hud_panel"]
