"""Shared fixtures for roster engine tests."""

import pytest

from roster_engine.models import Player, Team, UnassignedPool
from tests.helpers import make_players, make_teams


@pytest.fixture
def six_teams() -> list[Team]:
    return make_teams(6)


@pytest.fixture
def example_pool() -> UnassignedPool:
    """62 forwards, 31 defensemen and 9 goalies."""
    forwards = (
        make_players("c", "C", 21)
        + make_players("lw", "LW", 21)
        + make_players("rw", "RW", 20)
    )
    return UnassignedPool(
        forwards=forwards,
        defensemen=make_players("d", "D", 31),
        goalies=make_players("g", "G", 9),
    )


@pytest.fixture
def roster() -> list[Player]:
    """A full team: 14 forwards, 8 defensemen, 3 goalies."""
    return (
        make_players("c", "C", 5)
        + make_players("lw", "LW", 5)
        + make_players("rw", "RW", 4)
        + make_players("d", "D", 8)
        + make_players("g", "G", 3)
    )
