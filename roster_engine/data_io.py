"""Data input/output for league snapshot files and run artifacts."""

import csv
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from roster_engine.config import ARTIFACTS_DIR, ASSIGNMENT_STATUS, CATEGORY_ORDER
from roster_engine.errors import LeagueFileError
from roster_engine.lineup import SINGLETON_SLOTS, CAPPED_SLOTS, Lineup, LineupDocument
from roster_engine.models import Assignment, DistributionSummary, Player, Team

logger = logging.getLogger(__name__)


@dataclass
class LeagueSnapshot:
    """Everything stored about one league.

    Attributes:
        league_id: League identifier
        teams: Teams in the league
        players: Every player in the league, rostered or not
        rosters: Team-roster links
        lineups: Saved lineup documents
    """

    league_id: str
    teams: list[Team] = field(default_factory=list)
    players: list[Player] = field(default_factory=list)
    rosters: list[Assignment] = field(default_factory=list)
    lineups: list[LineupDocument] = field(default_factory=list)


def _require(record: dict[str, Any], key: str, where: str) -> Any:
    if key not in record or record[key] in (None, ""):
        raise LeagueFileError(f"{where}: missing '{key}'")
    return record[key]


def load_league_file(file_path: str | Path) -> LeagueSnapshot:
    """Load a league snapshot from a JSON file.

    Args:
        file_path: Path to the league JSON file

    Returns:
        Parsed LeagueSnapshot

    Raises:
        LeagueFileError: If the file is missing, not JSON, or malformed
    """
    path = Path(file_path)
    try:
        with open(path, "r") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise LeagueFileError(f"League file does not exist: {path}") from e
    except json.JSONDecodeError as e:
        raise LeagueFileError(f"League file is not valid JSON: {path} ({e})") from e

    if not isinstance(raw, dict):
        raise LeagueFileError(f"League file must contain a JSON object: {path}")

    league_id = str(_require(raw, "league_id", str(path)))

    teams = []
    for i, record in enumerate(raw.get("teams") or []):
        where = f"teams[{i}]"
        teams.append(
            Team(id=str(_require(record, "id", where)), name=str(record.get("name", "")))
        )

    players = []
    for i, record in enumerate(raw.get("players") or []):
        where = f"players[{i}]"
        try:
            players.append(
                Player(
                    id=str(_require(record, "id", where)),
                    name=str(record.get("name", "")),
                    position=_require(record, "position", where),
                )
            )
        except ValueError as e:
            raise LeagueFileError(f"{where}: {e}") from e

    rosters = []
    for i, record in enumerate(raw.get("rosters") or []):
        where = f"rosters[{i}]"
        rosters.append(
            Assignment(
                player_id=str(_require(record, "player_id", where)),
                team_id=str(_require(record, "team_id", where)),
                status=record.get("status") or ASSIGNMENT_STATUS,
            )
        )

    lineups = list(raw.get("lineups") or [])
    for i, document in enumerate(lineups):
        _require(document, "team_id", f"lineups[{i}]")
        document.setdefault("league_id", league_id)

    logger.info(
        f"Loaded league {league_id}: {len(teams)} teams, {len(players)} players, "
        f"{len(rosters)} roster links, {len(lineups)} lineups"
    )
    return LeagueSnapshot(league_id, teams, players, rosters, lineups)


def save_league_file(file_path: str | Path, snapshot: LeagueSnapshot) -> None:
    """Write a league snapshot to a JSON file.

    Args:
        file_path: Destination path
        snapshot: League contents to write
    """
    data = {
        "league_id": snapshot.league_id,
        "teams": [{"id": team.id, "name": team.name} for team in snapshot.teams],
        "players": [
            {"id": p.id, "name": p.name, "position": p.position.value}
            for p in snapshot.players
        ],
        "rosters": [
            {"player_id": a.player_id, "team_id": a.team_id, "status": a.status}
            for a in snapshot.rosters
        ],
        "lineups": snapshot.lineups,
    }

    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    logger.debug(f"Wrote league snapshot to {path}")


def create_run_directory(league_id: str, base_dir: str | Path = ARTIFACTS_DIR) -> tuple[str, Path]:
    """Create a timestamped directory for this distribution run.

    Args:
        league_id: League being distributed
        base_dir: Parent directory for run folders

    Returns:
        Tuple of (run_id, artifacts_directory_path)
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_id = f"{timestamp}_{league_id}"

    run_dir = Path(base_dir) / f"run_{run_id}"
    run_dir.mkdir(parents=True, exist_ok=True)

    logger.info(f"Created run directory: {run_dir}")
    return run_id, run_dir


def save_assignments_csv(
    file_path: Path,
    assignments: Sequence[Assignment],
    players: Sequence[Player],
    teams: Sequence[Team],
) -> None:
    """Save distribution assignments to CSV, one row per player.

    Args:
        file_path: Path where to save the CSV
        assignments: Assignments produced by distribution
        players: Players referenced by the assignments
        teams: Teams referenced by the assignments
    """
    players_by_id = {player.id: player for player in players}
    team_names = {team.id: team.name for team in teams}

    rows = []
    for assignment in assignments:
        player = players_by_id.get(assignment.player_id)
        rows.append(
            {
                "player_id": assignment.player_id,
                "player_name": player.name if player else "",
                "position": player.position.value if player else "",
                "team_id": assignment.team_id,
                "team_name": team_names.get(assignment.team_id, ""),
                "status": assignment.status,
            }
        )

    with open(file_path, "w", newline="") as f:
        writer = csv.DictWriter(
            f,
            fieldnames=[
                "player_id",
                "player_name",
                "position",
                "team_id",
                "team_name",
                "status",
            ],
        )
        writer.writeheader()
        writer.writerows(rows)


def save_team_counts_csv(
    file_path: Path, summary: DistributionSummary, teams: Sequence[Team]
) -> list[dict[str, Any]]:
    """Save per-team category counts to CSV and return the rows.

    Args:
        file_path: Path where to save the CSV
        summary: Summary of the distribution run
        teams: Teams in distribution order

    Returns:
        List of row dictionaries written
    """
    rows = []
    for team in teams:
        counts = summary.team_counts.get(team.id, {})
        row: dict[str, Any] = {"team_id": team.id, "team_name": team.name}
        for category in CATEGORY_ORDER:
            row[category] = counts.get(category, 0)
        row["total"] = sum(counts.values())
        rows.append(row)

    with open(file_path, "w", newline="") as f:
        writer = csv.DictWriter(
            f, fieldnames=["team_id", "team_name", *CATEGORY_ORDER, "total"]
        )
        writer.writeheader()
        writer.writerows(rows)

    return rows


def save_lineup_csv(
    file_path: Path, lineup: Lineup, players: Sequence[Player]
) -> None:
    """Save a lineup to CSV, one row per occupied slot position.

    Args:
        file_path: Path where to save the CSV
        lineup: Lineup to export
        players: Roster used to resolve player names
    """
    names = {player.id: player.name for player in players}

    with open(file_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["slot", "player_id", "player_name"])
        for slot_id in SINGLETON_SLOTS + CAPPED_SLOTS:
            for player_id in lineup.players_in(slot_id):
                writer.writerow([slot_id, player_id, names.get(player_id, "")])
