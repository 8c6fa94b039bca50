"""
Tests for SessionTracker: connect/disconnect bookkeeping and spawn reminders.
"""

from conftest import make_player
from models.enums import CsTeam
from services.session_tracker import SessionTracker


def test_connect_is_idempotent():
    tracker = SessionTracker()
    player = make_player(3)

    assert tracker.on_connect(player) is True
    assert tracker.on_connect(player) is False
    assert len(tracker) == 1
    assert 3 in tracker


def test_ineligible_players_are_not_tracked():
    tracker = SessionTracker()
    tracker.on_connect(make_player(1, is_bot=True))
    tracker.on_connect(make_player(2, is_hltv=True))
    assert len(tracker) == 0


def test_disconnect_removes_session():
    tracker = SessionTracker()
    tracker.on_connect(make_player(5))
    tracker.on_disconnect(5)
    tracker.on_disconnect(5)
    assert 5 not in tracker


def test_spawn_notifies_once():
    tracker = SessionTracker()
    player = make_player(2)
    tracker.on_connect(player)

    assert tracker.on_spawn(player, update_available=True) is True
    assert tracker.on_spawn(player, update_available=True) is False
    assert tracker.is_notified(2)


def test_spawn_without_update_does_nothing():
    tracker = SessionTracker()
    player = make_player(2)
    tracker.on_connect(player)

    assert tracker.on_spawn(player, update_available=False) is False
    assert not tracker.is_notified(2)


def test_spectator_spawn_is_skipped():
    tracker = SessionTracker()
    spectator = make_player(4, team=CsTeam.SPECTATOR)
    tracker.on_connect(spectator)
    assert tracker.on_spawn(spectator, update_available=True) is False


def test_new_map_round_trip():
    """reset_for_new_map() then a spawn yields exactly one new notification."""
    tracker = SessionTracker()
    player = make_player(7)
    tracker.on_connect(player)
    tracker.on_spawn(player, update_available=True)

    tracker.reset_for_new_map()
    assert 7 in tracker
    assert not tracker.is_notified(7)

    results = [tracker.on_spawn(player, update_available=True) for _ in range(3)]
    assert results == [True, False, False]


def test_spawn_tracks_unknown_slot():
    tracker = SessionTracker()
    assert tracker.on_spawn(make_player(9), update_available=True) is True
    assert 9 in tracker


def test_mark_notified_and_clear():
    tracker = SessionTracker()
    tracker.mark_notified(1)
    assert tracker.is_notified(1)
    assert [s.slot for s in tracker] == [1]

    tracker.clear()
    assert len(tracker) == 0
    assert tracker.sessions == []
