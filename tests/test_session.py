"""Tests for the interactive lineup session state machine."""

import logging

import pytest

from roster_engine.errors import UnknownSlotError
from roster_engine.lineup import Lineup
from roster_engine.models import Player, PoolCategory
from roster_engine.session import (
    Dragging,
    Idle,
    LineupSession,
    PlayerSelected,
    SlotSelected,
)


@pytest.fixture
def session(roster: list[Player]) -> LineupSession:
    return LineupSession(roster)


def ids(players: list[Player]) -> list[str]:
    return [player.id for player in players]


class TestClickSelection:
    """Tests for click-to-select gestures."""

    def test_starts_idle(self, session: LineupSession) -> None:
        assert session.state == Idle()
        assert session.selection == Idle()
        assert session.drag == Idle()

    def test_select_slot_waits_for_player(self, session: LineupSession) -> None:
        assert session.select_slot("line1.c") == SlotSelected("line1.c")
        assert session.lineup.get("line1.c") is None

    def test_select_player_waits_for_slot(self, session: LineupSession) -> None:
        assert session.select_player("c1") == PlayerSelected("c1")
        assert session.lineup.assigned_player_ids() == frozenset()

    def test_player_then_slot_assigns(self, session: LineupSession) -> None:
        session.select_player("c1")
        state = session.select_slot("line1.c")

        assert state == Idle()
        assert session.lineup.get("line1.c") == "c1"

    def test_slot_then_player_assigns(self, session: LineupSession) -> None:
        session.select_slot("line1.c")
        state = session.select_player("c1")

        assert state == Idle()
        assert session.lineup.get("line1.c") == "c1"

    def test_both_orders_are_equivalent(self, roster: list[Player]) -> None:
        """Test either selection order yields the same lineup and Idle state."""
        player_first = LineupSession(roster)
        player_first.select_player("d3")
        player_first.select_slot("pair2.ld")

        slot_first = LineupSession(roster)
        slot_first.select_slot("pair2.ld")
        slot_first.select_player("d3")

        assert player_first.lineup == slot_first.lineup
        assert player_first.state == slot_first.state == Idle()

    def test_reselecting_replaces_selection(self, session: LineupSession) -> None:
        session.select_slot("line1.c")
        session.select_slot("line2.c")

        assert session.selection == SlotSelected("line2.c")

        session.clear_selection()
        session.select_player("c1")
        session.select_player("c2")

        assert session.selection == PlayerSelected("c2")

    def test_select_unknown_slot_raises(self, session: LineupSession) -> None:
        session.select_slot("line1.c")

        with pytest.raises(UnknownSlotError):
            session.select_slot("line9.c")

        assert session.selection == SlotSelected("line1.c")

        session.clear_selection()
        session.select_player("c1")
        with pytest.raises(UnknownSlotError):
            session.select_slot("bogus")

        assert session.selection == PlayerSelected("c1")
        assert session.lineup.assigned_player_ids() == frozenset()

    def test_completion_into_full_unit_still_clears(self, session: LineupSession) -> None:
        """Test a no-op assignment still ends the selection."""
        for player_id in ("c1", "c2", "d1", "d2"):
            session.assign("pk1", player_id)

        session.select_player("d3")
        session.select_slot("pk1")

        assert session.state == Idle()
        assert session.lineup.get("pk1") == ["c1", "c2", "d1", "d2"]

    def test_clear_selection(self, session: LineupSession) -> None:
        session.select_slot("starter")
        session.clear_selection()

        assert session.selection == Idle()


class TestDrag:
    """Tests for drag gestures."""

    def test_drag_and_drop(self, session: LineupSession) -> None:
        session.begin_drag("g1")

        assert session.state == Dragging("g1")
        assert session.drop("starter") is True
        assert session.lineup.get("starter") == "g1"
        assert session.state == Idle()

    def test_drop_without_drag_is_no_op(self, session: LineupSession) -> None:
        assert session.drop("starter") is False
        assert session.lineup.get("starter") is None

    def test_drop_on_unknown_slot_keeps_drag(self, session: LineupSession) -> None:
        session.begin_drag("g1")

        with pytest.raises(UnknownSlotError):
            session.drop("net")

        assert session.state == Dragging("g1")

    def test_end_drag_cancels(self, session: LineupSession) -> None:
        session.begin_drag("g1")
        session.end_drag()

        assert session.drop("starter") is False
        assert session.drag == Idle()

    def test_drag_does_not_disturb_selection(self, session: LineupSession) -> None:
        session.select_slot("line1.c")
        session.begin_drag("g1")

        assert session.selection == SlotSelected("line1.c")
        assert session.state == Dragging("g1")

        session.end_drag()

        assert session.state == SlotSelected("line1.c")

    def test_selection_does_not_disturb_drag(self, session: LineupSession) -> None:
        session.begin_drag("c1")
        session.select_player("c2")

        assert session.drag == Dragging("c1")
        assert session.selection == PlayerSelected("c2")

    def test_drop_matches_click_result(self, roster: list[Player]) -> None:
        """Test dragging and clicking produce the same lineup."""
        dragged = LineupSession(roster)
        dragged.begin_drag("lw2")
        dragged.drop("pp1")

        clicked = LineupSession(roster)
        clicked.select_player("lw2")
        clicked.select_slot("pp1")

        assert dragged.lineup == clicked.lineup


class TestAvailablePlayers:
    """Tests for the derived available-player lists."""

    def test_all_available_initially(self, session: LineupSession) -> None:
        assert len(session.available_players(PoolCategory.FORWARDS)) == 14
        assert len(session.available_players("defensemen")) == 8
        assert ids(session.available_players("goalies")) == ["g1", "g2", "g3"]

    def test_assigned_player_excluded(self, session: LineupSession) -> None:
        session.assign("line1.lw", "lw1")

        assert "lw1" not in ids(session.available_players("forwards"))
        assert len(session.available_players("forwards")) == 13

    def test_special_teams_count_as_assigned(self, session: LineupSession) -> None:
        session.assign("pp1", "d1")

        assert "d1" not in ids(session.available_players("defensemen"))

    def test_unassign_makes_player_available_again(self, session: LineupSession) -> None:
        session.assign("backup", "g2")
        session.unassign("backup")

        assert ids(session.available_players("goalies")) == ["g1", "g2", "g3"]

    def test_overwritten_player_is_available(self, session: LineupSession) -> None:
        session.assign("line1.c", "c1")
        session.assign("line1.c", "c2")

        available = ids(session.available_players("forwards"))
        assert "c1" in available
        assert "c2" not in available

    def test_keeps_roster_order(self, session: LineupSession) -> None:
        session.assign("pair1.ld", "d2")

        assert ids(session.available_players("defensemen")) == [
            "d1", "d3", "d4", "d5", "d6", "d7", "d8"
        ]


class TestDirectAssign:
    """Tests for programmatic assign/unassign on the session."""

    def test_assign_clears_selection(self, session: LineupSession) -> None:
        session.select_slot("line3.c")
        session.assign("line4.c", "c4")

        assert session.selection == Idle()

    def test_assign_tolerates_duplicates(self, session: LineupSession) -> None:
        """Test the session does not evict a player assigned elsewhere."""
        session.assign("line1.c", "c1")
        session.assign("line2.c", "c1")

        assert session.lineup.slots_of("c1") == ["line1.c", "line2.c"]

    def test_unassign_unit_member(self, session: LineupSession) -> None:
        session.assign("pp2", "rw1")

        assert session.unassign("pp2", "rw1") is True
        assert session.unassign("pp2", "rw1") is False


def test_loaded_lineup(roster: list[Player]) -> None:
    """Test a session can start from a saved lineup."""
    saved = Lineup()
    saved.assign("starter", "g1")

    session = LineupSession(roster, saved)

    assert session.lineup.get("starter") == "g1"
    assert ids(session.available_players("goalies")) == ["g2", "g3"]


def test_unknown_players_warn(roster: list[Player], caplog: pytest.LogCaptureFixture) -> None:
    """Test a lineup referencing players off the roster logs a warning."""
    saved = Lineup()
    saved.assign("line1.c", "traded-away")

    with caplog.at_level(logging.WARNING):
        LineupSession(roster, saved)

    assert "not on the roster" in caplog.text


def test_player_lookup(session: LineupSession) -> None:
    assert session.player("g1").position.value == "G"
    assert session.player("nobody") is None


def test_to_document(session: LineupSession) -> None:
    session.assign("line1.c", "c1")

    document = session.to_document("league-1", "t1")

    assert document["line1_c"] == "c1"
    assert document["team_id"] == "t1"
