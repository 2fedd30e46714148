"""Builders for players and teams used across tests."""

import json
from pathlib import Path

from roster_engine.models import Player, Team


def make_players(prefix: str, position: str, count: int) -> list[Player]:
    """Create `count` players named prefix1..prefixN at one position."""
    return [
        Player(f"{prefix}{i}", f"{prefix.upper()} Player {i}", position)
        for i in range(1, count + 1)
    ]


def make_teams(count: int) -> list[Team]:
    return [Team(f"t{i}", f"Team {i:02d}") for i in range(1, count + 1)]


def league_payload(
    forwards: int = 30, defensemen: int = 14, goalies: int = 6, teams: int = 2
) -> dict:
    """Build a league snapshot dictionary with no roster links."""
    players = []
    for prefix, position, count in (
        ("c", "C", forwards),
        ("d", "D", defensemen),
        ("g", "G", goalies),
    ):
        players.extend(
            {"id": p.id, "name": p.name, "position": p.position.value}
            for p in make_players(prefix, position, count)
        )
    return {
        "league_id": "league-1",
        "teams": [{"id": t.id, "name": t.name} for t in make_teams(teams)],
        "players": players,
        "rosters": [],
        "lineups": [],
    }


def write_league_file(path: Path, payload: dict | None = None) -> Path:
    """Write a league snapshot JSON file and return its path."""
    with open(path, "w") as f:
        json.dump(payload if payload is not None else league_payload(), f)
    return path
