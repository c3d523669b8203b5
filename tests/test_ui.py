import pygame
import pytest

from orrery.core.config import RENDER_CFG
from orrery.core.trail import TrailBuffer
from orrery.render.assets import TextCache, load_hud_font
from orrery.render.ui import TrailTogglePanel, build_hud_panel


@pytest.fixture(scope="module")
def font():
    pygame.font.init()
    yield load_hud_font()
    pygame.font.quit()


@pytest.fixture
def trails():
    return {"planet1": TrailBuffer(), "moon": TrailBuffer()}


def _click(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos)


def test_buttons_stack_in_top_right_corner(trails):
    panel = TrailTogglePanel(trails, {"planet1": "Planet 1"})
    panel.layout((1000, 800))
    first, second = panel.buttons
    width, height = RENDER_CFG.button_size
    assert first.rect.topright == (1000 - RENDER_CFG.panel_margin, RENDER_CFG.panel_margin)
    assert second.rect.top == first.rect.bottom + RENDER_CFG.panel_spacing
    assert first.rect.width == width and first.rect.height == height


def test_button_text_tracks_visibility(trails):
    panel = TrailTogglePanel(trails, {"planet1": "Planet 1"})
    button = panel.buttons[0]
    assert button.text == "Planet 1 Trail: on"
    trails["planet1"].visible = False
    assert button.text == "Planet 1 Trail: off"
    assert panel.buttons[1].text == "moon Trail: on"


def test_click_toggles_only_that_trail(trails):
    toggled = []
    panel = TrailTogglePanel(trails, {}, on_toggle=lambda key, visible: toggled.append((key, visible)))
    panel.layout((1000, 800))

    assert panel.handle_event(_click(panel.buttons[1].rect.center))

    assert trails["planet1"].visible
    assert not trails["moon"].visible
    assert toggled == [("moon", False)]


def test_clicks_elsewhere_pass_through(trails):
    panel = TrailTogglePanel(trails, {})
    panel.layout((1000, 800))
    assert not panel.handle_event(_click((5, 5)))
    assert not panel.handle_event(_click(panel.buttons[0].rect.center, button=3))
    assert all(trail.visible for trail in trails.values())


def test_unknown_toggle_key(trails):
    with pytest.raises(KeyError):
        TrailTogglePanel(trails, {}).toggle("comet")


def test_panel_draws_without_display(trails, font):
    surface = pygame.Surface((1000, 800))
    panel = TrailTogglePanel(trails, {})
    panel.layout(surface.get_size())
    panel.draw(surface, font, mouse_pos=(0, 0))
    assert tuple(surface.get_at(panel.buttons[0].rect.center))[:3] != (0, 0, 0)


def test_hud_panel_grows_with_lines(font):
    small = build_hud_panel(font, ["t = 10"])
    large = build_hud_panel(font, ["t = 10", "View: Moon", "a much longer line of text"])
    assert large.get_height() > small.get_height()
    assert large.get_width() > small.get_width()
    with pytest.raises(ValueError):
        build_hud_panel(font, [])


def test_text_cache_reuses_and_evicts(font):
    cache = TextCache(max_size=2)
    first = cache.render(font, "a", (255, 255, 255))
    assert cache.render(font, "a", (255, 255, 255)) is first
    cache.render(font, "b", (255, 255, 255))
    cache.render(font, "c", (255, 255, 255))
    assert len(cache) == 2
    assert cache.render(font, "a", (255, 255, 255)) is not first
