"""Shared pytest fixtures for the scouting engine tests."""

import pytest

from volleyscout.data.models import Player, Roster
from volleyscout.logic.action_log import ActionLog
from volleyscout.logic.game_controller import GameController


# =============================================================================
# Player Fixtures
# =============================================================================


@pytest.fixture
def starting_players() -> list:
    """Seven players on court (six plus libero), in fetch order."""
    return [
        Player("p1", "Schulz", 1, "Zuspieler"),
        Player("p2", "Meyer", 4, "Außen"),
        Player("p3", "Weber", 7, "Mitte"),
        Player("p4", "Wagner", 9, "Diagonal"),
        Player("p5", "Becker", 11, "Außen"),
        Player("p6", "Hoffmann", 12, "Mitte"),
        Player("p7", "Koch", 2, "Libero"),
    ]


@pytest.fixture
def bench_players() -> list:
    return [
        Player("b1", "Richter", 5, "Außen"),
        Player("b2", "Klein", 8, "Mitte"),
        Player("b3", "Wolf", 14, None),
    ]


@pytest.fixture
def roster(starting_players) -> Roster:
    return Roster.from_players(starting_players)


@pytest.fixture
def team_players(starting_players, bench_players) -> list:
    return starting_players + bench_players


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def action_log() -> ActionLog:
    return ActionLog()


@pytest.fixture
def controller(roster, team_players) -> GameController:
    return GameController(roster, team_players, match_name="Heimspiel", team_id="T1")
