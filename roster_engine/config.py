"""Configuration data structures and settings for roster distribution and lineups."""

# Per-team quota bounds for the distribution engine: (minimum, maximum).
# Maximums follow a 50-player roster: 10% goalies, 30% defense, 60% forwards.
QUOTA_BOUNDS = {
    "goalies": (3, 5),
    "defensemen": (6, 15),
    "forwards": (12, 30),
}

# Order in which categories are distributed and emitted
CATEGORY_ORDER = ("goalies", "defensemen", "forwards")

# Position code -> pool category
POSITION_CATEGORIES = {
    "C": "forwards",
    "LW": "forwards",
    "RW": "forwards",
    "D": "defensemen",
    "G": "goalies",
}

# Lineup slot taxonomy
FORWARD_LINES = 4  # line1..line4
FORWARD_POSITIONS = ("lw", "c", "rw")
DEFENSE_PAIRS = 3  # pair1..pair3
DEFENSE_POSITIONS = ("ld", "rd")
GOALIE_ROLES = ("starter", "backup")

# Capped-set slots and their maximum sizes
SPECIAL_TEAMS_CAPS = {
    "pp1": 5,
    "pp2": 5,
    "pk1": 4,
    "pk2": 4,
}

# Status written alongside every roster link created by distribution
ASSIGNMENT_STATUS = "active"

# Base directory for run artifacts written by the CLI
ARTIFACTS_DIR = "artifacts"


def get_singleton_slots() -> list[str]:
    """Get all singleton slot keys in lineup order.

    Returns:
        List of 20 slot keys: forward lines, defense pairs, then goalie roles
    """
    slots = [
        f"line{line}.{position}"
        for line in range(1, FORWARD_LINES + 1)
        for position in FORWARD_POSITIONS
    ]
    slots.extend(
        f"pair{pair}.{position}"
        for pair in range(1, DEFENSE_PAIRS + 1)
        for position in DEFENSE_POSITIONS
    )
    slots.extend(GOALIE_ROLES)
    return slots


def get_all_slots() -> list[str]:
    """Get every slot key, singleton slots first then capped-set slots."""
    return get_singleton_slots() + list(SPECIAL_TEAMS_CAPS)
