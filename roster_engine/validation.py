"""Validation of distribution results and lineups."""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from roster_engine.config import CATEGORY_ORDER
from roster_engine.distribution import summarize
from roster_engine.lineup import ALL_SLOTS, Lineup
from roster_engine.models import Assignment, Player, Team, UnassignedPool

logger = logging.getLogger(__name__)


class ValidationResult:
    """Container for validation check results."""

    def __init__(self) -> None:
        """Initialize validation result container."""
        self.passed: bool = True
        self.messages: list[str] = []

    def add_failure(self, message: str) -> None:
        """Add a validation failure message."""
        self.passed = False
        self.messages.append(f"❌ {message}")
        logger.warning(message)

    def add_success(self, message: str) -> None:
        """Add a validation success message."""
        self.messages.append(f"✅ {message}")
        logger.info(message)

    def add_info(self, message: str) -> None:
        """Add informational message."""
        self.messages.append(f"ℹ️  {message}")
        logger.info(message)

    def add_violations(self, headline: str, violations: list[str], limit: int = 5) -> None:
        """Add a failure followed by up to `limit` individual violations."""
        self.add_failure(f"{headline}: {len(violations)}")
        for violation in violations[:limit]:
            self.add_failure(f"  {violation}")
        if len(violations) > limit:
            self.add_failure(f"  ... and {len(violations) - limit} more violations")


def check_exhaustive(
    pool: UnassignedPool, assignments: Sequence[Assignment]
) -> tuple[bool, list[str]]:
    """Check that every pooled player is assigned exactly once.

    Args:
        pool: Pool that was distributed
        assignments: Assignments produced from the pool

    Returns:
        Tuple of (is_valid, list_of_violations)
    """
    violations = []
    expected = Counter(pool.player_ids())
    emitted = Counter(assignment.player_id for assignment in assignments)

    for player_id, count in expected.items():
        if emitted[player_id] == 0:
            violations.append(f"Player {player_id} was not assigned")
        elif emitted[player_id] != count:
            violations.append(
                f"Player {player_id} assigned {emitted[player_id]} times, expected {count}"
            )
    for player_id in emitted.keys() - expected.keys():
        violations.append(f"Player {player_id} is not in the pool")

    return len(violations) == 0, violations


def check_fairness(
    pool: UnassignedPool, teams: Sequence[Team], assignments: Sequence[Assignment]
) -> tuple[bool, list[str]]:
    """Check per-team category counts against quotas and round-robin fairness.

    When a category covers every team's quota, each team must receive at
    least the quota and no two teams may differ by more than one. When it
    does not, teams are filled in order: counts never exceed the quota and
    never increase along the team order.

    Returns:
        Tuple of (is_valid, list_of_violations)
    """
    violations = []
    summary = summarize(assignments, pool, teams)

    for category in CATEGORY_ORDER:
        quota = summary.quotas.get(category, 0)
        counts = [summary.team_counts[team.id][category] for team in teams]
        if not counts:
            continue

        if len(pool.category(category)) >= quota * len(teams):
            for team, count in zip(teams, counts):
                if count < quota:
                    violations.append(
                        f"{team.name} has {count} {category}, below quota {quota}"
                    )
            if max(counts) - min(counts) > 1:
                violations.append(
                    f"{category} counts range from {min(counts)} to {max(counts)}"
                )
        else:
            for i, (team, count) in enumerate(zip(teams, counts)):
                if count > quota:
                    violations.append(
                        f"{team.name} has {count} {category}, above quota {quota}"
                    )
                if i and count > counts[i - 1]:
                    violations.append(
                        f"{team.name} has more {category} than the team before it"
                    )

    return len(violations) == 0, violations


def validate_distribution(
    pool: UnassignedPool, teams: Sequence[Team], assignments: Sequence[Assignment]
) -> ValidationResult:
    """Run all distribution checks.

    Args:
        pool: Pool that was distributed
        teams: Target teams in distribution order
        assignments: Assignments produced from the pool

    Returns:
        ValidationResult with one message per check
    """
    result = ValidationResult()

    exhaustive, missing = check_exhaustive(pool, assignments)
    if exhaustive:
        result.add_success(f"All {len(pool)} pooled players assigned exactly once")
    else:
        result.add_violations("Assignment coverage violations", missing)

    fair, unfair = check_fairness(pool, teams, assignments)
    if fair:
        result.add_success("Per-team counts respect quotas and round-robin order")
    else:
        result.add_violations("Quota violations", unfair)

    return result


def check_single_occupancy(lineup: Lineup) -> tuple[bool, list[str]]:
    """Check that no player occupies more than one slot.

    Returns:
        Tuple of (is_valid, list_of_violations)
    """
    seen: dict[str, list[str]] = {}
    for slot_id in ALL_SLOTS:
        for player_id in lineup.players_in(slot_id):
            seen.setdefault(player_id, []).append(slot_id)

    violations = [
        f"Player {player_id} is in {', '.join(slots)}"
        for player_id, slots in seen.items()
        if len(slots) > 1
    ]
    return len(violations) == 0, violations


def check_roster_membership(
    lineup: Lineup, roster: Iterable[Player]
) -> tuple[bool, list[str]]:
    """Check that every lineup player is on the team's roster.

    Returns:
        Tuple of (is_valid, list_of_violations)
    """
    roster_ids = {player.id for player in roster}
    violations = [
        f"Player {player_id} is not on the roster"
        for player_id in sorted(lineup.assigned_player_ids() - roster_ids)
    ]
    return len(violations) == 0, violations


def validate_lineup(lineup: Lineup, roster: Iterable[Player]) -> ValidationResult:
    """Run all lineup checks.

    Args:
        lineup: Lineup to check
        roster: Team's players

    Returns:
        ValidationResult with one message per check
    """
    result = ValidationResult()

    single, duplicates = check_single_occupancy(lineup)
    if single:
        result.add_success("Every player occupies at most one slot")
    else:
        result.add_violations("Players in multiple slots", duplicates)

    member, strangers = check_roster_membership(lineup, roster)
    if member:
        result.add_success("All lineup players are on the roster")
    else:
        result.add_violations("Lineup players missing from roster", strangers)

    filled = sum(1 for player_id in lineup.singletons.values() if player_id)
    result.add_info(f"{filled}/{len(lineup.singletons)} line, pair and goalie slots filled")

    return result
