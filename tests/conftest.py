import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from orrery.core.model import Body, OrbitParams
from orrery.core.system import OrbitalSystem
from orrery.data.scenarios import SCENARIOS


@pytest.fixture
def classic():
    return SCENARIOS["classic"]


@pytest.fixture
def system():
    # sun -> earth -> moon, plus an inclined inner planet
    system = OrbitalSystem()
    sun = system.add(Body("sun", "Sun", 5.0, (255, 200, 0)))
    system.add(Body("inner", "Inner", 2.0, (200, 150, 100), OrbitParams(10.0, 10.0, 5.0), sun))
    earth = system.add(Body("earth", "Earth", 3.0, (0, 100, 200), OrbitParams(25.0, 25.0, 0.0), sun))
    system.add(Body("moon", "Moon", 1.0, (150, 150, 150), OrbitParams(7.5, 7.5, 0.0), earth))
    return system
