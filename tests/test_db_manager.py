"""Tests for the sqlite persistence collaborator."""

import pytest

from volleyscout.config import ACTION_ATTACK, EVENT_OPPONENT_ERROR
from volleyscout.data.db_manager import DBManager
from volleyscout.data.models import ActionRecord, SetSnapshot
from volleyscout.logic.scoring import OWN


@pytest.fixture
def db(tmp_path):
    manager = DBManager(db_path=str(tmp_path / "db" / "scout.db"))
    assert manager.setup_database()
    return manager


def test_setup_is_idempotent(db):
    assert db.setup_database()


def test_round_trip_keeps_order_and_generic_fields(db):
    match_id = db.insert_match("Pokal", team_id="T1")
    actions = (
        ActionRecord(EVENT_OPPONENT_ERROR, point_for=OWN),
        ActionRecord(ACTION_ATTACK, 2, "p1", "Anna"),
    )
    set_id = db.save_set(SetSnapshot(3, actions, 1, 0), match_id)

    stored = db.get_set_actions(set_id)
    assert stored == list(actions)
    assert stored[0].player_id is None
    assert stored[0].quality is None
    assert db.get_sets_for_match(match_id) == [(set_id, 3, 1, 0)]


def test_unknown_match_is_rejected(db):
    snapshot = SetSnapshot(1, (ActionRecord(EVENT_OPPONENT_ERROR, point_for=OWN),), 1, 0)
    assert db.save_set(snapshot, match_id=999) is None
    # nothing half-written
    assert db.execute_query_fetch_all("SELECT COUNT(*) FROM actions") == [(0,)]


def test_failed_query_reports_false(db):
    assert db.execute_query("INSERT INTO nowhere VALUES (1)") is False
    assert db.execute_query("INSERT INTO nowhere VALUES (1)", fetch_id=True) is None


def test_resave_replaces_actions_and_score(db):
    match_id = db.insert_match("Liga")
    first = (ActionRecord(EVENT_OPPONENT_ERROR, point_for=OWN),)
    set_id = db.save_set(SetSnapshot(1, first, 1, 0), match_id)

    second = first + (ActionRecord(ACTION_ATTACK, 3, "p1", "Anna", point_for=OWN),)
    assert db.save_set(SetSnapshot(1, second, 2, 0), match_id, set_id=set_id) == set_id

    assert db.get_sets_for_match(match_id) == [(set_id, 1, 2, 0)]
    assert db.get_set_actions(set_id) == list(second)


def test_duplicate_set_number_is_rejected(db):
    match_id = db.insert_match("Liga")
    snapshot = SetSnapshot(1, (ActionRecord(EVENT_OPPONENT_ERROR, point_for=OWN),), 1, 0)
    set_id = db.save_set(snapshot, match_id)
    assert db.save_set(snapshot, match_id) is None
    assert db.get_sets_for_match(match_id) == [(set_id, 1, 1, 0)]


def test_resave_with_foreign_set_id_fails(db):
    match_id = db.insert_match("Liga")
    snapshot = SetSnapshot(1, (ActionRecord(EVENT_OPPONENT_ERROR, point_for=OWN),), 1, 0)
    set_id = db.save_set(snapshot, match_id)

    other = SetSnapshot(2, (), 0, 0)
    assert db.save_set(other, match_id, set_id=set_id) is None
    # the stored set is untouched
    assert len(db.get_set_actions(set_id)) == 1
