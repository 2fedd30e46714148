"""Tests for core data structures."""

import pytest

from roster_engine.models import (
    Assignment,
    Player,
    PoolCategory,
    Position,
    Team,
    UnassignedPool,
    category_for,
    partition_by_category,
)


def test_player_dataclass() -> None:
    """Test Player creation coerces the position code."""
    player = Player(id="p1", name="Sidney Crosby", position="C")

    assert player.id == "p1"
    assert player.name == "Sidney Crosby"
    assert player.position is Position.CENTER
    assert player.category is PoolCategory.FORWARDS


def test_player_rejects_unknown_position() -> None:
    """Test positions outside the closed set are rejected."""
    with pytest.raises(ValueError):
        Player(id="p1", name="Nobody", position="QB")


def test_category_for() -> None:
    """Test position to category mapping."""
    assert category_for(Position.LEFT_WING) is PoolCategory.FORWARDS
    assert category_for(Position.RIGHT_WING) is PoolCategory.FORWARDS
    assert category_for(Position.DEFENSE) is PoolCategory.DEFENSEMEN
    assert category_for(Position.GOALIE) is PoolCategory.GOALIES


def test_team_dataclass() -> None:
    """Test Team creation."""
    team = Team(id="t1", name="Pittsburgh")

    assert team.id == "t1"
    assert team.name == "Pittsburgh"


def test_assignment_defaults_to_active() -> None:
    """Test assignments carry the active status by default."""
    assignment = Assignment("p1", "t1")

    assert assignment.status == "active"
    assert assignment == Assignment("p1", "t1", "active")


def test_partition_by_category_keeps_order() -> None:
    """Test partitioning keeps input order within each category."""
    players = [
        Player("g1", "Goalie One", "G"),
        Player("c1", "Center One", "C"),
        Player("d1", "Defense One", "D"),
        Player("rw1", "Wing One", "RW"),
    ]

    partitioned = partition_by_category(players)

    assert [p.id for p in partitioned[PoolCategory.FORWARDS]] == ["c1", "rw1"]
    assert [p.id for p in partitioned[PoolCategory.DEFENSEMEN]] == ["d1"]
    assert [p.id for p in partitioned[PoolCategory.GOALIES]] == ["g1"]


def test_partition_by_category_empty() -> None:
    """Test every category is present even with no players."""
    partitioned = partition_by_category([])

    assert set(partitioned) == set(PoolCategory)
    assert all(players == [] for players in partitioned.values())


class TestUnassignedPool:
    """Tests for UnassignedPool construction."""

    def test_from_players_excludes_assigned(self) -> None:
        """Test players already on a team are left out of the pool."""
        players = [
            Player("c1", "Center One", "C"),
            Player("c2", "Center Two", "C"),
            Player("d1", "Defense One", "D"),
            Player("g1", "Goalie One", "G"),
        ]

        pool = UnassignedPool.from_players(players, assigned_ids={"c2", "g1"})

        assert [p.id for p in pool.forwards] == ["c1"]
        assert [p.id for p in pool.defensemen] == ["d1"]
        assert pool.goalies == []
        assert len(pool) == 2

    def test_category_lookup(self, example_pool: UnassignedPool) -> None:
        """Test category() accepts enum members and plain names."""
        assert pool_sizes(example_pool) == (62, 31, 9)
        assert example_pool.category(PoolCategory.GOALIES) is example_pool.goalies
        assert example_pool.category("defensemen") is example_pool.defensemen

    def test_player_ids_goalies_first(self) -> None:
        """Test player_ids lists goalies, then defensemen, then forwards."""
        pool = UnassignedPool(
            forwards=[Player("c1", "C", "C")],
            defensemen=[Player("d1", "D", "D")],
            goalies=[Player("g1", "G", "G")],
        )

        assert pool.player_ids() == ["g1", "d1", "c1"]


def pool_sizes(pool: UnassignedPool) -> tuple[int, int, int]:
    return len(pool.forwards), len(pool.defensemen), len(pool.goalies)
