"""Body tree for the orrery and world-position resolution."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Union

import numpy as np

from .errors import UnresolvedBodyReference
from .model import Body

if TYPE_CHECKING:  # pragma: no cover
    from orrery.data.scenarios import Scenario


BodyRef = Union[str, Body]


class OrbitalSystem:
    """Registry of bodies forming a tree through their parent references.

    Bodies must be added parents first, so iteration order is always a valid
    evaluation order for positions.
    """

    def __init__(self) -> None:
        self._bodies: dict[str, Body] = {}

    @classmethod
    def from_scenario(cls, scenario: "Scenario") -> "OrbitalSystem":
        system = cls()
        for body_spec in scenario.bodies:
            parent = system.get(body_spec.parent) if body_spec.parent is not None else None
            system.add(
                Body(
                    key=body_spec.key,
                    name=body_spec.name,
                    radius=body_spec.radius,
                    color=body_spec.color,
                    params=body_spec.params,
                    parent=parent,
                )
            )
        return system

    def add(self, body: Body) -> Body:
        if body.key in self._bodies:
            raise ValueError(f"Duplicate body key: {body.key!r}")
        parent = body.parent
        if parent is not None and self._bodies.get(parent.key) is not parent:
            raise UnresolvedBodyReference(
                f"Parent {parent.key!r} of {body.key!r} is not part of this system"
            )
        if parent is not None and body.params is None:
            raise ValueError(f"Body {body.key!r} has a parent but no orbit parameters")
        self._bodies[body.key] = body
        return body

    def get(self, key: str) -> Body:
        try:
            return self._bodies[key]
        except KeyError:
            raise UnresolvedBodyReference(f"Unknown body {key!r}") from None

    def __contains__(self, key: object) -> bool:
        return key in self._bodies

    def __iter__(self) -> Iterator[Body]:
        return iter(self._bodies.values())

    def __len__(self) -> int:
        return len(self._bodies)

    @property
    def keys(self) -> list[str]:
        return list(self._bodies)

    def orbiting(self) -> list[Body]:
        return [body for body in self._bodies.values() if body.params is not None]

    def _resolve(self, ref: BodyRef) -> Body:
        if isinstance(ref, Body):
            if self._bodies.get(ref.key) is not ref:
                raise UnresolvedBodyReference(f"Body {ref.key!r} is not part of this system")
            return ref
        return self.get(ref)

    def chain(self, ref: BodyRef) -> list[Body]:
        """Bodies from *ref* up to the root, *ref* first."""

        body = self._resolve(ref)
        chain: list[Body] = []
        seen: set[int] = set()
        current: Body | None = body
        while current is not None:
            if id(current) in seen:
                raise UnresolvedBodyReference(f"Parent cycle through {current.key!r}")
            if self._bodies.get(current.key) is not current:
                raise UnresolvedBodyReference(
                    f"Parent {current.key!r} of {body.key!r} is not part of this system"
                )
            seen.add(id(current))
            chain.append(current)
            current = current.parent
        return chain

    def world_position(self, ref: BodyRef) -> np.ndarray:
        """Position of *ref* with every parent's local offset applied."""

        total = np.zeros(3, dtype=float)
        for body in self.chain(ref):
            total += body.position
        return total


__all__ = ["BodyRef", "OrbitalSystem"]
