"""Core data structures shared by the distribution engine and lineup sessions."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from .config import ASSIGNMENT_STATUS, CATEGORY_ORDER, POSITION_CATEGORIES

logger = logging.getLogger(__name__)


class Position(str, Enum):
    """Closed set of player positions."""

    CENTER = "C"
    LEFT_WING = "LW"
    RIGHT_WING = "RW"
    DEFENSE = "D"
    GOALIE = "G"


class PoolCategory(str, Enum):
    """Pool partition a position belongs to."""

    FORWARDS = "forwards"
    DEFENSEMEN = "defensemen"
    GOALIES = "goalies"


def category_for(position: Position) -> PoolCategory:
    """Map a position to its pool category.

    Args:
        position: Player position

    Returns:
        Pool category (forwards, defensemen or goalies)
    """
    return PoolCategory(POSITION_CATEGORIES[Position(position).value])


@dataclass
class Player:
    """Player identity and position.

    Attributes:
        id: Unique player identifier
        name: Display name
        position: Position code (C, LW, RW, D, G)
    """

    id: str
    name: str
    position: Position

    def __post_init__(self) -> None:
        """Coerce raw position codes into Position members."""
        self.position = Position(self.position)

    @property
    def category(self) -> PoolCategory:
        return category_for(self.position)


@dataclass
class Team:
    """Team identity.

    Attributes:
        id: Unique team identifier
        name: Display name
    """

    id: str
    name: str


@dataclass(frozen=True)
class Assignment:
    """Link of one player to one team produced by distribution."""

    player_id: str
    team_id: str
    status: str = ASSIGNMENT_STATUS


def partition_by_category(players: Iterable[Player]) -> dict[PoolCategory, list[Player]]:
    """Split players into forwards, defensemen and goalies, keeping order.

    Args:
        players: Players to partition

    Returns:
        Dictionary with one (possibly empty) list per category
    """
    partitioned: dict[PoolCategory, list[Player]] = {
        PoolCategory(category): [] for category in CATEGORY_ORDER
    }
    for player in players:
        partitioned[player.category].append(player)
    return partitioned


@dataclass
class UnassignedPool:
    """Players not attached to any team, partitioned by category.

    Attributes:
        forwards: Centers and wingers
        defensemen: Defensemen
        goalies: Goalies
    """

    forwards: list[Player] = field(default_factory=list)
    defensemen: list[Player] = field(default_factory=list)
    goalies: list[Player] = field(default_factory=list)

    @classmethod
    def from_players(
        cls, players: Iterable[Player], assigned_ids: Iterable[str] = ()
    ) -> "UnassignedPool":
        """Build a pool from every league player not already on a team.

        Args:
            players: All players in the league
            assigned_ids: Ids of players currently linked to a team

        Returns:
            Fresh UnassignedPool
        """
        taken = set(assigned_ids)
        partitioned = partition_by_category(p for p in players if p.id not in taken)
        pool = cls(
            forwards=partitioned[PoolCategory.FORWARDS],
            defensemen=partitioned[PoolCategory.DEFENSEMEN],
            goalies=partitioned[PoolCategory.GOALIES],
        )
        logger.debug(
            f"Built pool: {len(pool.forwards)} F, {len(pool.defensemen)} D, "
            f"{len(pool.goalies)} G"
        )
        return pool

    def category(self, category: PoolCategory | str) -> list[Player]:
        """Get the player list for a category."""
        return getattr(self, PoolCategory(category).value)

    def player_ids(self) -> list[str]:
        """Get all player ids across categories, goalies first."""
        return [
            player.id
            for category in CATEGORY_ORDER
            for player in self.category(category)
        ]

    def __len__(self) -> int:
        return len(self.forwards) + len(self.defensemen) + len(self.goalies)


@dataclass
class DistributionSummary:
    """Totals describing one distribution run.

    Attributes:
        teams: Number of target teams
        total_players: Number of assignments emitted
        goalies: Goalie assignments
        skaters: Forward and defense assignments
        quotas: Per-team quota used for each category
        team_counts: team_id -> category -> number of players received
    """

    teams: int
    total_players: int
    goalies: int
    skaters: int
    quotas: dict[str, int] = field(default_factory=dict)
    team_counts: dict[str, dict[str, int]] = field(default_factory=dict)
