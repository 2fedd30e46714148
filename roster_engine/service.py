"""Orchestration of distribution runs and lineup sessions against external stores."""

import logging
import random

from roster_engine.distribution import distribute, summarize
from roster_engine.errors import NoTargetsError
from roster_engine.lineup import Lineup, LineupDocument
from roster_engine.models import Assignment, DistributionSummary, Team, UnassignedPool
from roster_engine.session import LineupSession
from roster_engine.storage import AssignmentSink, LineupStore, PoolSource, RosterSource

logger = logging.getLogger(__name__)


def plan_distribution(
    league_id: str,
    source: PoolSource,
    rng: random.Random | None = None,
) -> tuple[list[Team], UnassignedPool, list[Assignment]]:
    """Fetch a league's teams and pool and compute assignments without persisting.

    Returns:
        Tuple of (teams, pool, assignments)

    Raises:
        NoTargetsError: If the league has no teams
    """
    teams = source.fetch_teams(league_id)
    if not teams:
        raise NoTargetsError(league_id)

    pool = source.fetch_unassigned_pool(league_id)
    logger.info(
        f"Found {len(teams)} teams and {len(pool)} unassigned players "
        f"({len(pool.forwards)} F, {len(pool.defensemen)} D, {len(pool.goalies)} G)"
    )

    return teams, pool, distribute(pool, teams, rng)


def auto_fill_rosters(
    league_id: str,
    source: PoolSource,
    sink: AssignmentSink,
    rng: random.Random | None = None,
) -> DistributionSummary:
    """Distribute a league's unassigned players across all of its teams.

    Args:
        league_id: League to fill
        source: Provides the teams and the unassigned pool
        sink: Receives the assignments as a clear-then-insert replace
        rng: Random source for shuffling

    Returns:
        Summary of the persisted distribution

    Raises:
        NoTargetsError: If the league has no teams
        PersistenceError: If the sink rejects the write; retry from a fresh pool
    """
    logger.info(f"Starting auto-distribution for league {league_id}")

    teams, pool, assignments = plan_distribution(league_id, source, rng)
    sink.persist_assignments(league_id, [team.id for team in teams], assignments)

    summary = summarize(assignments, pool, teams)
    logger.info(
        f"Distribution complete: {summary.total_players} players "
        f"({summary.goalies} goalies, {summary.skaters} skaters) "
        f"across {summary.teams} teams"
    )
    return summary


def open_lineup(
    league_id: str,
    team_id: str,
    roster_source: RosterSource,
    lineup_store: LineupStore,
) -> LineupSession:
    """Start a lineup session from the team's roster and saved lineup.

    Args:
        league_id: League the team belongs to
        team_id: Team whose lineup is edited
        roster_source: Provides the team's players
        lineup_store: Provides the saved lineup, if any

    Returns:
        LineupSession seeded with the saved lineup or an empty one
    """
    roster = roster_source.fetch_roster(team_id)
    document = lineup_store.load_lineup(league_id, team_id)
    if document is None:
        logger.info(f"No saved lineup for team {team_id}, starting empty")

    return LineupSession(roster, Lineup.from_document(document))


def save_lineup(
    session: LineupSession,
    league_id: str,
    team_id: str,
    lineup_store: LineupStore,
) -> LineupDocument:
    """Write the session's lineup back as a whole-document replace.

    Returns:
        The document as stored
    """
    return lineup_store.save_lineup(session.to_document(league_id, team_id))


def delete_lineup(league_id: str, team_id: str, lineup_store: LineupStore) -> None:
    lineup_store.delete_lineup(league_id, team_id)
    logger.info(f"Deleted lineup for team {team_id}")
