"""Command-line interface for roster distribution and lineup inspection."""

import logging
import random
import sys
from pathlib import Path

import click

from roster_engine.config import ARTIFACTS_DIR, CATEGORY_ORDER
from roster_engine.data_io import (
    create_run_directory,
    save_assignments_csv,
    save_lineup_csv,
    save_team_counts_csv,
)
from roster_engine.distribution import summarize
from roster_engine.errors import RosterEngineError
from roster_engine.lineup import ALL_SLOTS
from roster_engine.service import open_lineup, plan_distribution
from roster_engine.storage import JsonLeagueStore
from roster_engine.validation import ValidationResult, validate_distribution, validate_lineup


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""

    RED = "\033[91m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    BLUE = "\033[94m"
    RESET = "\033[0m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors and emojis for different log levels."""

    LEVEL_COLORS = {
        "DEBUG": Colors.BLUE,
        "INFO": "",  # No color - plain white/default
        "WARNING": Colors.YELLOW,
        "ERROR": Colors.RED,
        "CRITICAL": Colors.RED,
    }

    LEVEL_EMOJIS = {
        "DEBUG": "🔍 ",
        "INFO": "",
        "WARNING": "⚠️  ",
        "ERROR": "❌ ",
        "CRITICAL": "💥 ",
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors and emojis."""
        level_color = self.LEVEL_COLORS.get(record.levelname, "")
        level_emoji = self.LEVEL_EMOJIS.get(record.levelname, "")

        message = record.getMessage()
        if level_color:
            return f"{level_emoji}{level_color}{message}{Colors.RESET}"
        return f"{level_emoji}{message}"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application with colors and emojis.

    Args:
        verbose: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ColoredFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()  # Remove any existing handlers
    root_logger.addHandler(handler)


def print_report(title: str, result: ValidationResult) -> None:
    click.echo("\n" + "=" * 60)
    click.echo(title)
    click.echo("=" * 60)
    for message in result.messages:
        click.echo(message)
    click.echo("=" * 60)


@click.group()
@click.option("--verbose", is_flag=True, help="Enable verbose (DEBUG level) logging")
def main(verbose: bool) -> None:
    """Distribute league players to teams and inspect team lineups."""
    setup_logging(verbose)


@main.command()
@click.argument("league_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--seed", type=int, default=None, help="Seed for a reproducible shuffle")
@click.option(
    "--dry-run",
    is_flag=True,
    help="Compute and report the distribution without writing it back",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=ARTIFACTS_DIR,
    show_default=True,
    help="Directory for run artifacts",
)
@click.option("--no-artifacts", is_flag=True, help="Disable writing run artifacts")
def distribute(
    league_file: str,
    seed: int | None,
    dry_run: bool,
    output_dir: str,
    no_artifacts: bool,
) -> None:
    """Auto-fill every team roster in LEAGUE_FILE from its unassigned players."""
    try:
        store = JsonLeagueStore(league_file)
        league_id = store.league_id
        rng = random.Random(seed) if seed is not None else None

        teams, pool, assignments = plan_distribution(league_id, store, rng)
        summary = summarize(assignments, pool, teams)
        result = validate_distribution(pool, teams, assignments)

        if dry_run:
            result.add_info("Dry run: league file left unchanged")
        else:
            store.persist_assignments(league_id, [team.id for team in teams], assignments)
            result.add_info(f"Wrote {len(assignments)} roster links to {league_file}")

        if not no_artifacts:
            _, run_dir = create_run_directory(league_id, output_dir)
            pooled = pool.goalies + pool.defensemen + pool.forwards
            save_assignments_csv(run_dir / "assignments.csv", assignments, pooled, teams)
            save_team_counts_csv(run_dir / "team_counts.csv", summary, teams)
            result.add_info(f"Artifacts saved to: {run_dir}")
    except RosterEngineError as e:
        logging.error(f"Distribution failed: {e}")
        sys.exit(1)

    quotas = ", ".join(f"{c}={summary.quotas[c]}" for c in CATEGORY_ORDER)
    result.add_info(
        f"{summary.total_players} players ({summary.goalies} goalies, "
        f"{summary.skaters} skaters) across {summary.teams} teams; quotas {quotas}"
    )
    print_report("DISTRIBUTION RESULTS", result)
    sys.exit(0 if result.passed else 1)


@main.group()
def lineup() -> None:
    """Inspect saved team lineups."""


@lineup.command()
@click.argument("league_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("team_id")
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also export the lineup to this CSV file",
)
def show(league_file: str, team_id: str, csv_path: str | None) -> None:
    """Print the saved lineup of TEAM_ID."""
    try:
        store = JsonLeagueStore(league_file)
        session = open_lineup(store.league_id, team_id, store, store)
    except RosterEngineError as e:
        logging.error(f"Could not load lineup: {e}")
        sys.exit(1)

    for slot_id in ALL_SLOTS:
        names = []
        for player_id in session.lineup.players_in(slot_id):
            player = session.player(player_id)
            names.append(player.name if player else player_id)
        click.echo(f"{slot_id:<10} {', '.join(names) if names else '-'}")

    if csv_path:
        save_lineup_csv(Path(csv_path), session.lineup, list(session.roster.values()))
        click.echo(f"Lineup exported to {csv_path}")


@lineup.command()
@click.argument("league_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("team_id")
def check(league_file: str, team_id: str) -> None:
    """Validate the saved lineup of TEAM_ID."""
    try:
        store = JsonLeagueStore(league_file)
        session = open_lineup(store.league_id, team_id, store, store)
    except RosterEngineError as e:
        logging.error(f"Could not load lineup: {e}")
        sys.exit(1)

    result = validate_lineup(session.lineup, session.roster.values())
    print_report("LINEUP VALIDATION RESULTS", result)
    sys.exit(0 if result.passed else 1)


if __name__ == "__main__":
    main()
