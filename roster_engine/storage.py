"""Collaborator interfaces for rosters and lineups, with in-memory and JSON-file stores."""

import copy
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from roster_engine.data_io import LeagueSnapshot, load_league_file, save_league_file
from roster_engine.errors import PersistenceError
from roster_engine.lineup import LineupDocument
from roster_engine.models import Assignment, Player, Team, UnassignedPool

logger = logging.getLogger(__name__)


class PoolSource(Protocol):
    def fetch_unassigned_pool(self, league_id: str) -> UnassignedPool: ...

    def fetch_teams(self, league_id: str) -> list[Team]: ...


class AssignmentSink(Protocol):
    def persist_assignments(
        self, league_id: str, team_ids: Sequence[str], assignments: Sequence[Assignment]
    ) -> None: ...


class RosterSource(Protocol):
    def fetch_roster(self, team_id: str) -> list[Player]: ...


class LineupStore(Protocol):
    def load_lineup(self, league_id: str, team_id: str) -> LineupDocument | None: ...

    def save_lineup(self, document: LineupDocument) -> LineupDocument: ...

    def delete_lineup(self, league_id: str, team_id: str) -> None: ...


class InMemoryLeagueStore:
    """Dictionary-backed store implementing every collaborator interface.

    Attributes:
        players: league_id -> player_id -> Player
        teams: league_id -> list of Team
        rosters: league_id -> list of roster links (Assignment)
        lineups: (league_id, team_id) -> LineupDocument
    """

    def __init__(self) -> None:
        self.players: dict[str, dict[str, Player]] = {}
        self.teams: dict[str, list[Team]] = {}
        self.rosters: dict[str, list[Assignment]] = {}
        self.lineups: dict[tuple[str, str], LineupDocument] = {}

    def add_team(self, league_id: str, team: Team) -> None:
        self.teams.setdefault(league_id, []).append(team)

    def add_player(self, league_id: str, player: Player) -> None:
        self.players.setdefault(league_id, {})[player.id] = player

    def link_player(self, league_id: str, team_id: str, player_id: str) -> None:
        """Attach a player to a team's roster."""
        self.rosters.setdefault(league_id, []).append(Assignment(player_id, team_id))

    def load_snapshot(self, snapshot: LeagueSnapshot) -> None:
        """Replace everything stored for the snapshot's league."""
        league_id = snapshot.league_id
        self.teams[league_id] = list(snapshot.teams)
        self.players[league_id] = {player.id: player for player in snapshot.players}
        self.rosters[league_id] = list(snapshot.rosters)
        for key in [key for key in self.lineups if key[0] == league_id]:
            del self.lineups[key]
        for document in snapshot.lineups:
            self.lineups[(league_id, document["team_id"])] = copy.deepcopy(document)

    def snapshot(self, league_id: str) -> LeagueSnapshot:
        """Export everything stored for one league."""
        return LeagueSnapshot(
            league_id=league_id,
            teams=list(self.teams.get(league_id, [])),
            players=list(self.players.get(league_id, {}).values()),
            rosters=list(self.rosters.get(league_id, [])),
            lineups=[
                copy.deepcopy(document)
                for (lid, _), document in self.lineups.items()
                if lid == league_id
            ],
        )

    def _league_of(self, team_id: str) -> str | None:
        for league_id, teams in self.teams.items():
            if any(team.id == team_id for team in teams):
                return league_id
        return None

    def fetch_teams(self, league_id: str) -> list[Team]:
        """Get the league's teams ordered by name."""
        return sorted(self.teams.get(league_id, []), key=lambda team: team.name)

    def fetch_unassigned_pool(self, league_id: str) -> UnassignedPool:
        """Get league players with no roster link, partitioned by category."""
        assigned = {link.player_id for link in self.rosters.get(league_id, [])}
        return UnassignedPool.from_players(
            self.players.get(league_id, {}).values(), assigned
        )

    def persist_assignments(
        self, league_id: str, team_ids: Sequence[str], assignments: Sequence[Assignment]
    ) -> None:
        """Replace the affected teams' links for the assigned players.

        Links of team_ids whose player appears in assignments are cleared and
        the new links inserted. Players already rostered and absent from
        assignments keep their links. Either the whole replacement is applied
        or nothing changes.

        Raises:
            PersistenceError: If an assignment references an unknown team or player
        """
        known_teams = {team.id for team in self.teams.get(league_id, [])}
        known_players = self.players.get(league_id, {})
        for assignment in assignments:
            if assignment.team_id not in known_teams:
                raise PersistenceError(
                    f"Unknown team {assignment.team_id} in league {league_id}"
                )
            if assignment.player_id not in known_players:
                raise PersistenceError(
                    f"Unknown player {assignment.player_id} in league {league_id}"
                )

        cleared = set(team_ids)
        relinked = {assignment.player_id for assignment in assignments}
        kept = [
            link
            for link in self.rosters.get(league_id, [])
            if link.team_id not in cleared or link.player_id not in relinked
        ]
        self.rosters[league_id] = kept + list(assignments)
        logger.info(
            f"Linked {len(assignments)} players across {len(cleared)} teams, "
            f"keeping {len(kept)} existing links"
        )

    def fetch_roster(self, team_id: str) -> list[Player]:
        """Get the players linked to a team, in link order."""
        league_id = self._league_of(team_id)
        if league_id is None:
            return []
        players = self.players.get(league_id, {})
        return [
            players[link.player_id]
            for link in self.rosters.get(league_id, [])
            if link.team_id == team_id and link.player_id in players
        ]

    def load_lineup(self, league_id: str, team_id: str) -> LineupDocument | None:
        document = self.lineups.get((league_id, team_id))
        return copy.deepcopy(document) if document is not None else None

    def save_lineup(self, document: LineupDocument) -> LineupDocument:
        """Replace the stored lineup for the document's team.

        Returns:
            The stored document, stamped with updated_at
        """
        try:
            key = (document["league_id"], document["team_id"])
        except KeyError as e:
            raise PersistenceError(f"Lineup document missing {e.args[0]}") from e

        stored = copy.deepcopy(document)
        stored["updated_at"] = datetime.now(UTC).isoformat()
        self.lineups[key] = stored
        logger.info(f"Saved lineup for team {key[1]}")
        return copy.deepcopy(stored)

    def delete_lineup(self, league_id: str, team_id: str) -> None:
        self.lineups.pop((league_id, team_id), None)


class JsonLeagueStore(InMemoryLeagueStore):
    """InMemoryLeagueStore persisted to a single-league JSON snapshot file.

    Every successful write is flushed back to the file. A write whose flush
    fails is rolled back in memory before the error propagates.
    """

    def __init__(self, file_path: str | Path):
        super().__init__()
        self.file_path = Path(file_path)
        snapshot = load_league_file(self.file_path)
        self.league_id = snapshot.league_id
        self.load_snapshot(snapshot)

    def flush(self) -> None:
        try:
            save_league_file(self.file_path, self.snapshot(self.league_id))
        except OSError as e:
            raise PersistenceError(f"Could not write {self.file_path}: {e}") from e

    def _restore_lineup(
        self, key: tuple[str, str], previous: LineupDocument | None
    ) -> None:
        if previous is None:
            self.lineups.pop(key, None)
        else:
            self.lineups[key] = previous

    def persist_assignments(
        self, league_id: str, team_ids: Sequence[str], assignments: Sequence[Assignment]
    ) -> None:
        previous = list(self.rosters.get(league_id, []))
        super().persist_assignments(league_id, team_ids, assignments)
        try:
            self.flush()
        except PersistenceError:
            self.rosters[league_id] = previous
            raise

    def save_lineup(self, document: LineupDocument) -> LineupDocument:
        key = (document.get("league_id"), document.get("team_id"))
        previous = self.lineups.get(key)
        stored = super().save_lineup(document)
        try:
            self.flush()
        except PersistenceError:
            self._restore_lineup(key, previous)
            raise
        return stored

    def delete_lineup(self, league_id: str, team_id: str) -> None:
        key = (league_id, team_id)
        previous = self.lineups.get(key)
        super().delete_lineup(league_id, team_id)
        try:
            self.flush()
        except PersistenceError:
            self._restore_lineup(key, previous)
            raise
