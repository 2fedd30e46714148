"""Distribution engine: partitions an unassigned pool across a league's teams."""

import logging
import random
from collections.abc import Sequence
from typing import TypeVar

from .config import CATEGORY_ORDER, QUOTA_BOUNDS
from .errors import NoTargetsError
from .models import (
    Assignment,
    DistributionSummary,
    Player,
    PoolCategory,
    Team,
    UnassignedPool,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fisher_yates_shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return an unbiased random permutation of items.

    Args:
        items: Sequence to shuffle (left untouched)
        rng: Random source, defaults to the module-level generator

    Returns:
        New list holding the same items in shuffled order
    """
    randint = rng.randint if rng is not None else random.randint
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def compute_quota(pool_size: int, team_count: int, category: PoolCategory | str) -> int:
    """Compute the per-team quota for one category.

    Args:
        pool_size: Number of players available in the category
        team_count: Number of target teams (must be positive)
        category: Pool category whose bounds apply

    Returns:
        floor(pool_size / team_count) clamped to the category's [min, max]
    """
    if team_count <= 0:
        raise NoTargetsError()
    minimum, maximum = QUOTA_BOUNDS[PoolCategory(category).value]
    return min(maximum, max(minimum, pool_size // team_count))


def _distribute_category(
    players: list[Player], teams: Sequence[Team], quota: int
) -> list[Assignment]:
    """Assign one shuffled category: quota-limited pass, then round-robin."""
    assignments = []
    cursor = 0

    for team in teams:
        taken = 0
        while taken < quota and cursor < len(players):
            assignments.append(Assignment(players[cursor].id, team.id))
            cursor += 1
            taken += 1

    leftover = len(players) - cursor
    if leftover:
        logger.debug(f"Distributing {leftover} leftover players round-robin")

    team_index = 0
    while cursor < len(players):
        team = teams[team_index % len(teams)]
        assignments.append(Assignment(players[cursor].id, team.id))
        cursor += 1
        team_index += 1

    return assignments


def distribute(
    pool: UnassignedPool,
    teams: Sequence[Team],
    rng: random.Random | None = None,
) -> list[Assignment]:
    """Assign every pooled player to a team under positional quotas.

    Each category is shuffled independently. Teams are filled in order up to
    the category quota until the category runs out; whatever is left over is
    dealt round-robin starting from the first team.

    Args:
        pool: Unassigned players partitioned by category
        teams: Target teams, in distribution order
        rng: Random source for shuffling

    Returns:
        Assignments for goalies, then defensemen, then forwards

    Raises:
        NoTargetsError: If teams is empty
    """
    if not teams:
        raise NoTargetsError()

    assignments: list[Assignment] = []
    for category in CATEGORY_ORDER:
        players = pool.category(category)
        quota = compute_quota(len(players), len(teams), category)
        shuffled = fisher_yates_shuffle(players, rng)

        if len(shuffled) < quota * len(teams):
            logger.warning(
                f"Only {len(shuffled)} {category} for {len(teams)} teams "
                f"(quota {quota}); later teams will be short"
            )
        logger.info(f"Allocating {quota} {category} per team")

        category_assignments = _distribute_category(shuffled, teams, quota)
        for assignment in category_assignments:
            logger.debug(f"{category}: {assignment.player_id} -> {assignment.team_id}")
        assignments.extend(category_assignments)

    logger.info(f"Distribution complete: {len(assignments)} assignments")
    return assignments


def summarize(
    assignments: Sequence[Assignment],
    pool: UnassignedPool,
    teams: Sequence[Team],
) -> DistributionSummary:
    """Summarize a distribution run.

    Args:
        assignments: Output of distribute()
        pool: Pool the assignments were drawn from
        teams: Target teams

    Returns:
        DistributionSummary with totals and per-team category counts
    """
    category_of = {}
    for category in CATEGORY_ORDER:
        for player in pool.category(category):
            category_of[player.id] = category

    team_counts = {team.id: {category: 0 for category in CATEGORY_ORDER} for team in teams}
    for assignment in assignments:
        category = category_of.get(assignment.player_id)
        if category is None:
            continue
        team_counts.setdefault(
            assignment.team_id, {c: 0 for c in CATEGORY_ORDER}
        )[category] += 1

    goalies = sum(counts["goalies"] for counts in team_counts.values())
    quotas = {}
    if teams:
        quotas = {
            category: compute_quota(len(pool.category(category)), len(teams), category)
            for category in CATEGORY_ORDER
        }

    return DistributionSummary(
        teams=len(teams),
        total_players=len(assignments),
        goalies=goalies,
        skaters=len(assignments) - goalies,
        quotas=quotas,
        team_counts=team_counts,
    )
