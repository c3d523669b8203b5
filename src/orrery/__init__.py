"""Animated orrery: bodies on parametric ellipses with trails and a chase camera."""

__version__ = "1.0.0"
