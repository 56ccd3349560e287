"""Tests for the two-tap selection protocol."""

import pytest

from volleyscout.config import ACTION_ATTACK, ACTION_BLOCK, ACTION_SERVE
from volleyscout.data.models import Player
from volleyscout.logic.errors import InvalidActionRecordError
from volleyscout.logic.selection import (
    IDLE, ActionPicked, PlayerPicked, Selection, SelectionProtocol,
)


@pytest.fixture
def anna():
    return Player("p1", "Anna", 3, "Außen")


@pytest.fixture
def berta():
    return Player("p2", "Berta", 5, "Mitte")


class TestPlayerFirst:
    """Player tap first, then action tap."""

    def test_player_then_action_commits(self, anna):
        protocol = SelectionProtocol()
        assert protocol.tap_player(anna) is None
        assert protocol.state == PlayerPicked(anna)

        selection = protocol.tap_action(ACTION_ATTACK, 3)
        assert selection == Selection(anna, ACTION_ATTACK, 3)
        assert protocol.state == IDLE

    def test_same_player_twice_cancels(self, anna):
        protocol = SelectionProtocol()
        protocol.tap_player(anna)
        assert protocol.tap_player(anna) is None
        assert protocol.is_idle

    def test_other_player_replaces(self, anna, berta):
        protocol = SelectionProtocol()
        protocol.tap_player(anna)
        assert protocol.tap_player(berta) is None
        assert protocol.state == PlayerPicked(berta)

        selection = protocol.tap_action(ACTION_BLOCK, 2)
        assert selection.player == berta


class TestActionFirst:
    """Action tap first, then player tap."""

    def test_action_then_player_commits(self, anna):
        protocol = SelectionProtocol()
        assert protocol.tap_action(ACTION_SERVE, 0) is None
        assert protocol.state == ActionPicked(ACTION_SERVE, 0)

        selection = protocol.tap_player(anna)
        assert selection == Selection(anna, ACTION_SERVE, 0)
        assert protocol.is_idle

    def test_same_action_and_quality_cancels(self):
        protocol = SelectionProtocol()
        protocol.tap_action(ACTION_ATTACK, 2)
        assert protocol.tap_action(ACTION_ATTACK, 2) is None
        assert protocol.is_idle

    def test_same_action_other_quality_replaces(self):
        protocol = SelectionProtocol()
        protocol.tap_action(ACTION_ATTACK, 2)
        protocol.tap_action(ACTION_ATTACK, 3)
        assert protocol.state == ActionPicked(ACTION_ATTACK, 3)

    def test_other_action_replaces(self):
        protocol = SelectionProtocol()
        protocol.tap_action(ACTION_ATTACK, 2)
        protocol.tap_action(ACTION_BLOCK, 2)
        assert protocol.state == ActionPicked(ACTION_BLOCK, 2)


class TestProtocolProperties:

    def test_orders_commute(self, anna):
        first = SelectionProtocol()
        first.tap_player(anna)
        player_first = first.tap_action(ACTION_ATTACK, 3)

        second = SelectionProtocol()
        second.tap_action(ACTION_ATTACK, 3)
        action_first = second.tap_player(anna)

        assert player_first == action_first

    def test_invalid_action_leaves_state_untouched(self, anna):
        protocol = SelectionProtocol()
        protocol.tap_player(anna)
        with pytest.raises(InvalidActionRecordError):
            protocol.tap_action(ACTION_ATTACK, 5)
        assert protocol.state == PlayerPicked(anna)

    def test_cancel(self, anna):
        protocol = SelectionProtocol()
        protocol.tap_player(anna)
        protocol.cancel()
        assert protocol.is_idle

    def test_each_commit_yields_exactly_one_selection(self, anna, berta):
        protocol = SelectionProtocol()
        taps = [
            lambda: protocol.tap_player(anna),
            lambda: protocol.tap_action(ACTION_ATTACK, 3),
            lambda: protocol.tap_action(ACTION_BLOCK, 1),
            lambda: protocol.tap_player(berta),
            lambda: protocol.tap_player(berta),
            lambda: protocol.tap_player(anna),
        ]
        results = [tap() for tap in taps]
        assert [r is not None for r in results] == [False, True, False, True, False, False]
