"""Exceptions raised while configuring the orrery."""
from __future__ import annotations


class OrreryError(Exception):
    """Base class for orrery configuration errors."""


class InvalidOrbitParams(OrreryError, ValueError):
    """Orbit parameters that do not describe an ellipse."""


class UnresolvedBodyReference(OrreryError, LookupError):
    """A body key or parent link that cannot be resolved."""


__all__ = ["InvalidOrbitParams", "OrreryError", "UnresolvedBodyReference"]
