"""Exception types raised by the roster engine."""


class RosterEngineError(Exception):
    """Base class for all roster engine errors."""


class NoTargetsError(RosterEngineError, ValueError):
    """Raised when distribution is invoked without any target teams."""

    def __init__(self, league_id: str | None = None) -> None:
        self.league_id = league_id
        if league_id:
            message = f"No teams found in league {league_id}"
        else:
            message = "No teams to distribute players to"
        super().__init__(message)


class UnknownSlotError(RosterEngineError, KeyError):
    """Raised when a lineup operation addresses a slot that does not exist."""

    def __init__(self, slot_id: str) -> None:
        self.slot_id = slot_id
        super().__init__(f"Unknown lineup slot: {slot_id!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class PersistenceError(RosterEngineError):
    """Raised when an external store fails to read or write."""


class LeagueFileError(RosterEngineError):
    """Raised when a league snapshot file is missing or malformed."""
