from __future__ import annotations

from pathlib import Path

import pytest

from arena.geometry import Point, Rect
from arena.world import World, Target
from navigator import Simulation

WORLDS = Path(__file__).resolve().parent.parent / "worlds"


def make_world(obstacles=(), target=(90.0, 80.0), **meta) -> World:
    world = World(initialized=True, meta=dict(meta))
    return world.initialize(
        obstacles=[Rect(*r) for r in obstacles],
        target=Target(Point(*target), 1.0),
    )


def make_sim(obstacles=(), target=(90.0, 80.0), **kwargs) -> Simulation:
    kwargs.setdefault("src", (10.0, 10.0))
    return Simulation(world=make_world(obstacles, target), **kwargs)


@pytest.fixture
def worlds() -> Path:
    return WORLDS
