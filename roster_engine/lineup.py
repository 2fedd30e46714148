"""Lineup aggregate: singleton slots, capped special-teams units and their document form."""

import copy
import logging
from typing import Any

from .config import SPECIAL_TEAMS_CAPS, get_all_slots, get_singleton_slots
from .errors import UnknownSlotError

logger = logging.getLogger(__name__)

SINGLETON_SLOTS = tuple(get_singleton_slots())
CAPPED_SLOTS = tuple(SPECIAL_TEAMS_CAPS)
ALL_SLOTS = tuple(get_all_slots())

# A LineupDocument is the flat, field-per-slot serialization of a Lineup:
# league_id, team_id, line1_lw ... backup (id or None), pp1 ... pk2 (list of ids)
LineupDocument = dict[str, Any]


def is_singleton_slot(slot_id: str) -> bool:
    return slot_id in SINGLETON_SLOTS


def is_capped_slot(slot_id: str) -> bool:
    return slot_id in SPECIAL_TEAMS_CAPS


def document_field(slot_id: str) -> str:
    """Map a slot key such as 'line2.c' to its document field 'line2_c'."""
    return slot_id.replace(".", "_")


def check_slot(slot_id: str) -> None:
    if slot_id not in ALL_SLOTS:
        raise UnknownSlotError(slot_id)


class Lineup:
    """All slot assignments for one team.

    Singleton slots hold one player id or None. Capped-set slots hold an
    ordered list of distinct player ids no longer than the unit's cap.

    Attributes:
        singletons: slot key -> player id or None
        units: capped slot key -> list of player ids
    """

    def __init__(
        self,
        singletons: dict[str, str | None] | None = None,
        units: dict[str, list[str]] | None = None,
    ):
        self.singletons: dict[str, str | None] = {slot: None for slot in SINGLETON_SLOTS}
        self.units: dict[str, list[str]] = {slot: [] for slot in CAPPED_SLOTS}

        for slot_id, player_id in (singletons or {}).items():
            check_slot(slot_id)
            self.singletons[slot_id] = player_id
        for slot_id, player_ids in (units or {}).items():
            check_slot(slot_id)
            self.units[slot_id] = list(player_ids)

    @classmethod
    def empty(cls) -> "Lineup":
        return cls()

    def get(self, slot_id: str) -> str | list[str] | None:
        """Get the occupant of a slot (id or None for singletons, list for units)."""
        check_slot(slot_id)
        if is_singleton_slot(slot_id):
            return self.singletons[slot_id]
        return list(self.units[slot_id])

    def players_in(self, slot_id: str) -> list[str]:
        """Get the player ids occupying a slot as a list."""
        check_slot(slot_id)
        if is_singleton_slot(slot_id):
            occupant = self.singletons[slot_id]
            return [occupant] if occupant is not None else []
        return list(self.units[slot_id])

    def assign(self, slot_id: str, player_id: str) -> bool:
        """Write a player into a slot.

        A singleton slot is overwritten and its previous occupant becomes
        unassigned. A capped unit only gains the player when it is not already
        a member and the unit is below its cap. Players assigned elsewhere in
        the lineup are not evicted.

        Args:
            slot_id: Slot key, e.g. 'line1.c', 'pair2.rd', 'starter', 'pp1'
            player_id: Player to place

        Returns:
            True if the lineup changed, False for a no-op

        Raises:
            UnknownSlotError: If slot_id is not a lineup slot
        """
        check_slot(slot_id)

        if is_singleton_slot(slot_id):
            previous = self.singletons[slot_id]
            self.singletons[slot_id] = player_id
            if previous is not None and previous != player_id:
                logger.debug(f"{previous} replaced by {player_id} in {slot_id}")
            return previous != player_id

        unit = self.units[slot_id]
        if player_id in unit:
            return False
        if len(unit) >= SPECIAL_TEAMS_CAPS[slot_id]:
            logger.debug(f"{slot_id} is full, ignoring {player_id}")
            return False
        unit.append(player_id)
        return True

    def unassign(self, slot_id: str, player_id: str | None = None) -> bool:
        """Remove a player from a slot.

        Singleton slots are cleared regardless of player_id. Capped units drop
        player_id if it is a member.

        Returns:
            True if the lineup changed, False for a no-op
        """
        check_slot(slot_id)

        if is_singleton_slot(slot_id):
            changed = self.singletons[slot_id] is not None
            self.singletons[slot_id] = None
            return changed

        unit = self.units[slot_id]
        if player_id is None or player_id not in unit:
            return False
        unit.remove(player_id)
        return True

    def assigned_player_ids(self) -> frozenset[str]:
        """Derive the set of player ids occupying any slot."""
        ids = {player_id for player_id in self.singletons.values() if player_id}
        for unit in self.units.values():
            ids.update(unit)
        return frozenset(ids)

    def slots_of(self, player_id: str) -> list[str]:
        """Get every slot key currently holding player_id."""
        return [slot_id for slot_id in ALL_SLOTS if player_id in self.players_in(slot_id)]

    def clear(self) -> None:
        for slot_id in SINGLETON_SLOTS:
            self.singletons[slot_id] = None
        for slot_id in CAPPED_SLOTS:
            self.units[slot_id] = []

    def clone(self) -> "Lineup":
        return copy.deepcopy(self)

    def to_document(self, league_id: str, team_id: str) -> LineupDocument:
        """Serialize to the flat field-per-slot document form.

        Args:
            league_id: League the team belongs to
            team_id: Team owning the lineup

        Returns:
            Dictionary with 20 singleton fields and 4 list fields
        """
        document: LineupDocument = {"league_id": league_id, "team_id": team_id}
        for slot_id in SINGLETON_SLOTS:
            document[document_field(slot_id)] = self.singletons[slot_id]
        for slot_id in CAPPED_SLOTS:
            document[slot_id] = list(self.units[slot_id])
        return document

    @classmethod
    def from_document(cls, document: LineupDocument | None) -> "Lineup":
        """Rebuild a Lineup from its document form.

        Missing or null unit fields load as empty units. Units are
        de-duplicated and truncated to their cap.

        Args:
            document: Stored lineup document, or None for an empty lineup

        Returns:
            Lineup holding the document's assignments
        """
        lineup = cls()
        if not document:
            return lineup

        for slot_id in SINGLETON_SLOTS:
            lineup.singletons[slot_id] = document.get(document_field(slot_id)) or None

        for slot_id in CAPPED_SLOTS:
            stored = document.get(slot_id) or []
            unit: list[str] = []
            for player_id in stored:
                if player_id not in unit:
                    unit.append(player_id)
            cap = SPECIAL_TEAMS_CAPS[slot_id]
            if len(unit) > cap:
                logger.warning(
                    f"Stored {slot_id} has {len(unit)} players, keeping first {cap}"
                )
            lineup.units[slot_id] = unit[:cap]

        return lineup

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Lineup):
            return NotImplemented
        return self.singletons == other.singletons and self.units == other.units

    def __repr__(self) -> str:
        filled = sum(1 for player_id in self.singletons.values() if player_id)
        units = ", ".join(f"{slot}={len(ids)}" for slot, ids in self.units.items())
        return f"Lineup({filled}/{len(SINGLETON_SLOTS)} slots, {units})"
