"""
Shared fixtures for the Shrdlite test suite.

The "small world" is a reduced version of the classic Shrdlite example
world:

    column:   0     1      2     3          4     5
              e     a,l    -     k,g,c,b    -     d,m,f
"""

import pytest

from component_1_world_model import WorldObject, WorldState
from infrastructure.cache_manager import reset_cache_manager
from shrdlite_config import reset_config

SMALL_WORLD_OBJECTS = {
    "a": WorldObject("brick", "large", "green"),
    "b": WorldObject("brick", "small", "white"),
    "c": WorldObject("plank", "large", "red"),
    "d": WorldObject("plank", "small", "green"),
    "e": WorldObject("ball", "large", "white"),
    "f": WorldObject("ball", "small", "black"),
    "g": WorldObject("table", "large", "blue"),
    "k": WorldObject("box", "large", "yellow"),
    "l": WorldObject("box", "large", "red"),
    "m": WorldObject("box", "small", "blue"),
}


@pytest.fixture(autouse=True)
def fresh_infrastructure(monkeypatch):
    """Isolate configuration and caches between tests."""
    for name in (
        "SHRDLITE_MAX_EXPANSIONS",
        "SHRDLITE_CLEARANCE_COST",
        "SHRDLITE_NARRATE_PLANS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    reset_cache_manager()
    yield
    reset_config()
    reset_cache_manager()


@pytest.fixture
def small_world():
    """Small example world, arm over column 0, nothing held."""
    return WorldState.create(
        stacks=[["e"], ["a", "l"], [], ["k", "g", "c", "b"], [], ["d", "m", "f"]],
        objects=SMALL_WORLD_OBJECTS,
        arm=0,
    )


@pytest.fixture
def tiny_world():
    """Two bricks stacked in column 0, empty column 1."""
    return WorldState.create(
        stacks=[["a", "b"], []],
        objects={
            "a": WorldObject("brick", "large", "green"),
            "b": WorldObject("brick", "small", "white"),
        },
    )
