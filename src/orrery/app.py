"""
Orrery - animated orbits with trails and a chase camera
=======================================================

Bodies follow fixed parametric ellipses around their parents. Keys ``1``-``4``
lock a top-down camera onto a body, ``5`` returns to the free camera, ``=`` and
``-`` show and hide every trail. Runs can also be recorded without a window.
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence

import pygame
from pygame.locals import DOUBLEBUF, RESIZABLE

from orrery import __version__
from orrery.core.config import RENDER_CFG, SIM_CFG, RenderCfg, SimulationCfg
from orrery.core.controls import KeyboardControls, build_view_keys
from orrery.core.logging_utils import RunLogger
from orrery.core.model import SimulationState
from orrery.core.system import OrbitalSystem
from orrery.core.timekeeping import AnimationClock, FrameTimer
from orrery.core.trail import TrailBuffer
from orrery.core.view import ViewController
from orrery.data.scenarios import DEFAULT_SCENARIO_KEY, SCENARIO_DISPLAY_ORDER, SCENARIOS, Scenario
from orrery.render.assets import load_hud_font
from orrery.render.camera import Camera
from orrery.render.draw import SceneRenderer
from orrery.render.scene import OrreryScene, build_orrery_scene
from orrery.render.ui import TrailTogglePanel, build_hud_panel


@dataclass
class Simulation:
    scenario: Scenario
    system: OrbitalSystem
    state: SimulationState
    trails: dict[str, TrailBuffer]
    camera: Camera
    view: ViewController
    controls: KeyboardControls
    clock: AnimationClock
    scene: OrreryScene

    def view_label(self) -> str:
        view = self.state.view
        if view.is_default:
            return "Free camera"
        return self.system.get(view.body_key).name


def build_simulation(
    scenario: Scenario,
    *,
    size: tuple[int, int] | None = None,
    sim_cfg: SimulationCfg = SIM_CFG,
    render_cfg: RenderCfg = RENDER_CFG,
) -> Simulation:
    """Wire the body tree, trails, camera, controls and scene for *scenario*."""

    system = OrbitalSystem.from_scenario(scenario)
    for key in scenario.view_order:
        system.get(key)

    trails = {key: TrailBuffer(sim_cfg.trail_offsets) for key in scenario.trailed_keys()}
    camera = Camera(
        size or (render_cfg.width, render_cfg.height),
        fov_deg=render_cfg.camera_fov_deg,
        near=render_cfg.camera_near,
        far=render_cfg.camera_far,
        position=render_cfg.camera_start_position,
        target=render_cfg.camera_start_target,
        min_distance=render_cfg.camera_min_distance,
        max_distance=render_cfg.camera_max_distance,
        rotate_sensitivity=render_cfg.rotate_sensitivity,
    )
    state = SimulationState()
    view = ViewController(system, camera, height=sim_cfg.chase_height)
    controls = KeyboardControls(
        state,
        view,
        list(trails.values()),
        build_view_keys(scenario.view_order, sim_cfg),
        cfg=sim_cfg,
    )
    scene = build_orrery_scene(system, trails, sim_cfg=sim_cfg, render_cfg=render_cfg)
    clock = AnimationClock(
        system,
        trails,
        view,
        state,
        step=sim_cfg.time_step,
        on_body_moved=scene.move_body,
    )
    return Simulation(scenario, system, state, trails, camera, view, controls, clock, scene)


def start_run_logging(sim: Simulation, runs_dir: str, sim_cfg: SimulationCfg = SIM_CFG) -> RunLogger:
    logger = RunLogger(runs_dir)
    logger.write_meta(
        {
            "scenario_key": sim.scenario.key,
            "scenario_name": sim.scenario.name,
            "bodies": {
                body.key: {
                    "name": body.name,
                    "parent": body.parent.key if body.parent is not None else None,
                    "apogee": body.params.apogee if body.params is not None else None,
                    "perigee": body.params.perigee if body.params is not None else None,
                    "inclination": body.params.inclination if body.params is not None else None,
                }
                for body in sim.system
            },
            "view_order": list(sim.scenario.view_order),
            "time_step": sim_cfg.time_step,
            "trail_samples": sim_cfg.trail_samples,
            "chase_height": sim_cfg.chase_height,
            "log_every_ticks": sim_cfg.log_every_ticks,
            "code_version": f"orrery {__version__}",
        }
    )
    state = sim.state

    def log_action(kind: str, detail: str) -> None:
        logger.record_event(state, kind, detail)

    sim.controls.on_action = log_action
    logger.record_event(state, "start", sim.scenario.key)
    return logger


def make_position_logger(
    logger: RunLogger, sim: Simulation, every: int
) -> Callable[[SimulationState], None]:
    every = max(1, every)

    def log_positions(state: SimulationState) -> None:
        if state.tick % every == 0:
            logger.log_positions(state, sim.system)

    return log_positions


def controls_hint(sim: Simulation, sim_cfg: SimulationCfg = SIM_CFG) -> str:
    view_keys = [
        key for key in sim.controls.keys if key in sim_cfg.view_keys and key != sim_cfg.reset_view_key
    ]
    views = f"{view_keys[0]}-{view_keys[-1]} views  " if view_keys else ""
    return (
        f"{views}{sim_cfg.reset_view_key} reset  "
        f"{sim_cfg.show_trails_key} / {sim_cfg.hide_trails_key} trails"
    )


def parse_size(text: str) -> tuple[int, int]:
    try:
        width_text, height_text = text.lower().split("x")
        size = int(width_text), int(height_text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from None
    if size[0] <= 0 or size[1] <= 0:
        raise argparse.ArgumentTypeError("window size must be positive")
    return size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orrery",
        description="Animate bodies on elliptical orbits with trails and a chase camera.",
    )
    parser.add_argument("--scenario", default=DEFAULT_SCENARIO_KEY, choices=SCENARIO_DISPLAY_ORDER)
    parser.add_argument("--list-scenarios", action="store_true", help="Print the presets and exit")
    parser.add_argument("--headless", action="store_true", help="Record without opening a window")
    parser.add_argument("--frames", type=int, default=None, help="Stop after this many ticks")
    parser.add_argument("--no-log", action="store_true", help="Do not record the run")
    parser.add_argument("--runs-dir", default=SIM_CFG.runs_dir)
    parser.add_argument("--fps", type=int, default=RENDER_CFG.fps)
    parser.add_argument("--size", type=parse_size, default=(RENDER_CFG.width, RENDER_CFG.height))
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_headless(sim: Simulation, frames: int, logger: Optional[RunLogger]) -> SimulationState:
    if logger is not None:
        sim.clock.render = make_position_logger(logger, sim, SIM_CFG.log_every_ticks)
    state = sim.clock.run(frames)
    if logger is not None:
        logger.record_event(state, "end", "headless")
    return state


def run_window(
    sim: Simulation,
    *,
    fps: int,
    frames: Optional[int],
    logger: Optional[RunLogger],
    render_cfg: RenderCfg = RENDER_CFG,
) -> None:
    pygame.init()
    pygame.display.set_caption(f"Orrery - {sim.scenario.name}")
    flags = RESIZABLE | DOUBLEBUF
    screen = pygame.display.set_mode(sim.camera.size, flags)

    font = load_hud_font(render_cfg)
    renderer = SceneRenderer(screen, render_cfg=render_cfg)
    labels = {body.key: body.name for body in sim.system}
    state = sim.state

    def log_toggle(key: str, visible: bool) -> None:
        if logger is not None:
            logger.record_event(state, "trail", f"{key}:{'on' if visible else 'off'}")

    panel = TrailTogglePanel(sim.trails, labels, render_cfg=render_cfg, on_toggle=log_toggle)
    panel.layout(screen.get_size())
    hint = controls_hint(sim)

    clock = pygame.time.Clock()
    frame_timer = FrameTimer()
    log_positions = (
        make_position_logger(logger, sim, SIM_CFG.log_every_ticks) if logger is not None else None
    )

    def quit_app() -> None:
        if logger is not None:
            logger.record_event(state, "end", "window")
            logger.close()
        pygame.quit()
        sys.exit()

    def render(current: SimulationState) -> None:
        if log_positions is not None:
            log_positions(current)
        sim.scene.sync_visibility()
        renderer.render(sim.scene.graph, sim.camera)
        frame_ms = frame_timer.tick() * 1000.0
        hud = build_hud_panel(
            font,
            [
                f"t = {current.time:,.0f}",
                f"View: {sim.view_label()}",
                hint,
                "drag rotate  wheel zoom  esc quit",
                f"{frame_ms:5.1f} ms/frame",
            ],
            render_cfg=render_cfg,
        )
        screen.blit(hud, (render_cfg.panel_margin, render_cfg.panel_margin))
        panel.draw(screen, font)
        pygame.display.flip()

    sim.clock.render = render

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_app()
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    quit_app()
                elif event.unicode:
                    sim.controls.handle_key(event.unicode)
            elif event.type == pygame.VIDEORESIZE:
                size = (max(1, event.w), max(1, event.h))
                screen = pygame.display.set_mode(size, flags)
                sim.camera.update_size(size)
                renderer.set_surface(screen)
                panel.layout(size)
                if logger is not None:
                    logger.record_event(state, "resize", f"{size[0]}x{size[1]}")
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if panel.handle_event(event):
                    continue
                if event.button == 1:
                    sim.camera.begin_drag(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1:
                    sim.camera.end_drag()
            elif event.type == pygame.MOUSEMOTION:
                if sim.camera.dragging:
                    sim.camera.drag(event.pos)
            elif event.type == pygame.MOUSEWHEEL:
                if event.y != 0:
                    sim.camera.zoom_by_factor(render_cfg.zoom_step ** (-event.y))

        sim.clock.tick()
        if frames is not None and state.tick >= frames:
            quit_app()
        clock.tick(fps)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_scenarios:
        for key in SCENARIO_DISPLAY_ORDER:
            scenario = SCENARIOS[key]
            print(f"{key:<12} {scenario.name}: {scenario.description}")
        return 0
    if args.frames is not None and args.frames < 0:
        parser.error("--frames must not be negative")
    if args.fps <= 0:
        parser.error("--fps must be positive")
    if args.headless and args.frames is None:
        parser.error("--headless needs --frames")

    render_cfg = replace(RENDER_CFG, width=args.size[0], height=args.size[1], fps=args.fps)
    sim = build_simulation(SCENARIOS[args.scenario], size=args.size, render_cfg=render_cfg)
    logger = None if args.no_log else start_run_logging(sim, args.runs_dir)

    if args.headless:
        try:
            state = run_headless(sim, args.frames, logger)
        finally:
            if logger is not None:
                logger.close()
        where = f" to {logger.run_dir}" if logger is not None else ""
        print(f"Simulated {state.tick} ticks (t = {state.time:g}){where}")
        return 0

    run_window(sim, fps=args.fps, frames=args.frames, logger=logger, render_cfg=render_cfg)
    return 0


if __name__ == "__main__":
    sys.exit(main())
