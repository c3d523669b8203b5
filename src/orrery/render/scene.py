"""Minimal scene graph used to draw the orrery."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

import numpy as np

from orrery.core.config import RENDER_CFG, SIM_CFG, RenderCfg, SimulationCfg
from orrery.core.model import Body, OrbitParams
from orrery.core.physics import orbit_path
from orrery.core.system import OrbitalSystem
from orrery.core.trail import TrailBuffer


Color = tuple[int, int, int]


@dataclass(eq=False)
class SceneNode:
    name: str
    kind: str = "group"
    color: Color = (255, 255, 255)
    radius: float = 0.0
    width: int = 1
    position: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=float))
    points: Optional[np.ndarray] = None
    visible: bool = True
    needs_update: bool = False
    parent: Optional["SceneNode"] = None
    children: list["SceneNode"] = field(default_factory=list)


class SceneGraph:
    """Tree of nodes with parent-relative translations."""

    def __init__(self) -> None:
        self.root = SceneNode("scene")

    def create_sphere(self, radius: float, color: Color, name: str = "sphere") -> SceneNode:
        if radius <= 0.0:
            raise ValueError("Sphere radius must be positive")
        return SceneNode(name, kind="sphere", color=color, radius=radius)

    def create_line(
        self,
        points: Sequence[Sequence[float]] | np.ndarray,
        color: Color,
        name: str = "line",
        *,
        width: int = 1,
    ) -> SceneNode:
        node = SceneNode(name, kind="line", color=color, width=width)
        self.set_points(node, points)
        return node

    def attach(self, parent: SceneNode, child: SceneNode) -> None:
        ancestor: SceneNode | None = parent
        while ancestor is not None:
            if ancestor is child:
                raise ValueError(f"Attaching {child.name!r} under {parent.name!r} forms a cycle")
            ancestor = ancestor.parent
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = parent
        parent.children.append(child)

    def add(self, child: SceneNode) -> SceneNode:
        self.attach(self.root, child)
        return child

    def set_local_position(self, node: SceneNode, x: float, y: float, z: float) -> None:
        node.position[:] = (x, y, z)

    def set_points(self, node: SceneNode, points: Sequence[Sequence[float]] | np.ndarray) -> None:
        array = np.asarray(points, dtype=float)
        if array.ndim != 2 or array.shape[1] != 3:
            raise ValueError(f"Line points must have shape (N, 3), got {array.shape}")
        if node.points is not None and node.points.shape == array.shape:
            node.points[:] = array
        else:
            node.points = array.copy()
        node.needs_update = True

    def get_world_position(self, node: SceneNode) -> np.ndarray:
        total = np.zeros(3, dtype=float)
        current: SceneNode | None = node
        while current is not None:
            total += current.position
            current = current.parent
        return total

    def iter_visible(self) -> Iterator[tuple[SceneNode, np.ndarray]]:
        """Yield ``(node, world origin of its parent)`` depth first, skipping hidden subtrees."""

        stack: list[tuple[SceneNode, np.ndarray]] = [(self.root, np.zeros(3, dtype=float))]
        while stack:
            node, parent_origin = stack.pop()
            if not node.visible:
                continue
            yield node, parent_origin
            origin = parent_origin + node.position
            for child in reversed(node.children):
                stack.append((child, origin))


def add_orbit_path(
    graph: SceneGraph,
    parent: SceneNode,
    params: OrbitParams,
    *,
    name: str = "orbit",
    sim_cfg: SimulationCfg = SIM_CFG,
    render_cfg: RenderCfg = RENDER_CFG,
) -> SceneNode:
    points = orbit_path(params, step=sim_cfg.path_step, sweep=sim_cfg.path_sweep)
    line = graph.create_line(points, render_cfg.orbit_color, name, width=render_cfg.orbit_line_width)
    graph.attach(parent, line)
    return line


@dataclass
class OrreryScene:
    graph: SceneGraph
    body_nodes: dict[str, SceneNode]
    orbit_nodes: dict[str, SceneNode]
    trail_nodes: dict[str, SceneNode]
    trails: dict[str, TrailBuffer] = field(default_factory=dict)

    def move_body(self, body: Body) -> None:
        self.graph.set_local_position(self.body_nodes[body.key], *body.position)

    def sync_visibility(self) -> None:
        for key, trail in self.trails.items():
            self.trail_nodes[key].visible = trail.visible


def build_orrery_scene(
    system: OrbitalSystem,
    trails: dict[str, TrailBuffer],
    *,
    sim_cfg: SimulationCfg = SIM_CFG,
    render_cfg: RenderCfg = RENDER_CFG,
) -> OrreryScene:
    """Create sphere, orbit and trail nodes for every body in *system*.

    Orbit outlines and trails are attached to the parent body's node so they
    move with it. Each trail's sink is pointed at its line node.
    """

    graph = SceneGraph()
    body_nodes: dict[str, SceneNode] = {}
    orbit_nodes: dict[str, SceneNode] = {}
    trail_nodes: dict[str, SceneNode] = {}

    for body in system:
        node = graph.create_sphere(body.radius, body.color, body.key)
        node.position[:] = body.position
        if body.parent is None:
            graph.add(node)
        else:
            parent_node = body_nodes[body.parent.key]
            graph.attach(parent_node, node)
            orbit_nodes[body.key] = add_orbit_path(
                graph,
                parent_node,
                body.params,
                name=f"{body.key}_orbit",
                sim_cfg=sim_cfg,
                render_cfg=render_cfg,
            )
        body_nodes[body.key] = node

    for key, trail in trails.items():
        body = system.get(key)
        if body.parent is None:
            raise ValueError(f"Central body {key!r} cannot carry a trail")
        line = graph.create_line(
            trail.positions,
            render_cfg.trail_color,
            f"{key}_trail",
            width=render_cfg.trail_line_width,
        )
        line.visible = trail.visible
        graph.attach(body_nodes[body.parent.key], line)
        trail.sink = lambda points, line=line: graph.set_points(line, points)
        trail_nodes[key] = line

    return OrreryScene(graph, body_nodes, orbit_nodes, trail_nodes, dict(trails))


__all__ = [
    "Color",
    "OrreryScene",
    "SceneGraph",
    "SceneNode",
    "add_orbit_path",
    "build_orrery_scene",
]
