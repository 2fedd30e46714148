"""Interactive lineup session: click-to-select and drag gestures over one Lineup."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .lineup import Lineup, LineupDocument, check_slot
from .models import Player, PoolCategory, partition_by_category

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """Nothing selected and nothing being dragged."""


@dataclass(frozen=True)
class SlotSelected:
    """A slot was picked and awaits a player."""

    slot_id: str


@dataclass(frozen=True)
class PlayerSelected:
    """A player was picked and awaits a slot."""

    player_id: str


@dataclass(frozen=True)
class Dragging:
    """A player card is being dragged."""

    player_id: str


SelectionState = Idle | SlotSelected | PlayerSelected
DragState = Idle | Dragging

IDLE = Idle()


class LineupSession:
    """Mutable lineup editing session for one team's roster.

    Click selection and drag gestures are tracked independently and both
    complete through assign(), so either gesture, in either order, produces
    the same lineup.

    Attributes:
        lineup: Lineup being edited
        roster: Team players by id, in roster order
        selection: Idle, SlotSelected or PlayerSelected
        drag: Idle or Dragging
    """

    def __init__(self, roster: Iterable[Player], lineup: Lineup | None = None):
        """Initialize a session.

        Args:
            roster: Players on the team
            lineup: Previously saved lineup, or None to start empty
        """
        self.roster: dict[str, Player] = {player.id: player for player in roster}
        self.lineup = lineup if lineup is not None else Lineup.empty()
        self.selection: SelectionState = IDLE
        self.drag: DragState = IDLE
        self._by_category = partition_by_category(self.roster.values())

        unknown = self.lineup.assigned_player_ids() - self.roster.keys()
        if unknown:
            logger.warning(
                f"Lineup references {len(unknown)} players not on the roster: "
                f"{sorted(unknown)}"
            )

    @property
    def state(self) -> Idle | SlotSelected | PlayerSelected | Dragging:
        """Current interaction state, a drag taking precedence over selection."""
        if isinstance(self.drag, Dragging):
            return self.drag
        return self.selection

    def player(self, player_id: str) -> Player | None:
        return self.roster.get(player_id)

    def assign(self, slot_id: str, player_id: str) -> bool:
        """Place a player in a slot and reset click selection.

        Args:
            slot_id: Target slot key
            player_id: Player to place

        Returns:
            True if the lineup changed
        """
        changed = self.lineup.assign(slot_id, player_id)
        self.selection = IDLE
        if changed:
            logger.debug(f"Assigned {player_id} to {slot_id}")
        return changed

    def unassign(self, slot_id: str, player_id: str | None = None) -> bool:
        changed = self.lineup.unassign(slot_id, player_id)
        if changed:
            logger.debug(f"Removed {player_id or 'occupant'} from {slot_id}")
        return changed

    def select_slot(self, slot_id: str) -> SelectionState:
        """Select a slot, completing the assignment if a player is waiting.

        Args:
            slot_id: Slot that was clicked

        Returns:
            Selection state after the click
        """
        check_slot(slot_id)
        if isinstance(self.selection, PlayerSelected):
            self.assign(slot_id, self.selection.player_id)
        else:
            self.selection = SlotSelected(slot_id)
        return self.selection

    def select_player(self, player_id: str) -> SelectionState:
        """Select a player, completing the assignment if a slot is waiting.

        Args:
            player_id: Player that was clicked

        Returns:
            Selection state after the click
        """
        if isinstance(self.selection, SlotSelected):
            self.assign(self.selection.slot_id, player_id)
        else:
            self.selection = PlayerSelected(player_id)
        return self.selection

    def clear_selection(self) -> None:
        self.selection = IDLE

    def begin_drag(self, player_id: str) -> None:
        self.drag = Dragging(player_id)

    def end_drag(self) -> None:
        self.drag = IDLE

    def drop(self, slot_id: str) -> bool:
        """Drop the dragged player on a slot.

        Args:
            slot_id: Slot receiving the drop

        Returns:
            True if the lineup changed, False if nothing was being dragged
        """
        check_slot(slot_id)
        if not isinstance(self.drag, Dragging):
            return False
        player_id = self.drag.player_id
        self.drag = IDLE
        return self.assign(slot_id, player_id)

    def available_players(self, category: PoolCategory | str) -> list[Player]:
        """Get roster players of a category that occupy no slot.

        Args:
            category: forwards, defensemen or goalies

        Returns:
            Unassigned players in roster order
        """
        assigned = self.lineup.assigned_player_ids()
        return [
            player
            for player in self._by_category[PoolCategory(category)]
            if player.id not in assigned
        ]

    def to_document(self, league_id: str, team_id: str) -> LineupDocument:
        return self.lineup.to_document(league_id, team_id)
