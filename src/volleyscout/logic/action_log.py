# src/volleyscout/logic/action_log.py

import dataclasses
import logging
from typing import Iterable, List, Optional, Tuple

from ..data.models import ActionRecord
from .errors import EmptyLogError, InvalidActionRecordError
from .scoring import ScoringPolicy, OWN, OPP

logger = logging.getLogger(__name__)


def fold_score(records: Iterable[ActionRecord]) -> Tuple[int, int]:
    """Berechnet den Spielstand (eigen, gegner) komplett aus den gespeicherten Punkten."""
    score_own, score_opponent = 0, 0
    for record in records:
        if record.point_for == OWN:
            score_own += 1
        elif record.point_for == OPP:
            score_opponent += 1
    return score_own, score_opponent


class ScoreTracker:
    """Spielstand eines Satzes, inkrementell zum Punkte-Log mitgeführt."""

    def __init__(self):
        self.score_own = 0
        self.score_opponent = 0

    def apply(self, point_for: Optional[str]):
        if point_for == OWN:
            self.score_own += 1
        elif point_for == OPP:
            self.score_opponent += 1

    def revert(self, point_for: Optional[str]):
        if point_for == OWN:
            self.score_own -= 1
        elif point_for == OPP:
            self.score_opponent -= 1

    def reset(self):
        self.score_own = 0
        self.score_opponent = 0

    def as_tuple(self) -> Tuple[int, int]:
        return self.score_own, self.score_opponent


class ActionLog:
    """
    Geordnetes Log der Aktionen des aktuellen Satzes mit mitgeführtem Spielstand.

    Invariante: current_score() == fold_score(snapshot()) nach jeder Operation.
    append() und undo_last() ändern Log und Spielstand in einem Schritt; tritt
    vorher ein Fehler auf, bleibt beides unverändert.
    """

    def __init__(self, policy: Optional[ScoringPolicy] = None):
        self.policy = policy or ScoringPolicy()
        self._records: List[ActionRecord] = []
        self._score = ScoreTracker()

    def __len__(self) -> int:
        return len(self._records)

    def append(self, record: ActionRecord) -> ActionRecord:
        """Bewertet die Aktion, speichert das Ergebnis im Datensatz und hängt ihn an."""
        if record.is_generic and record.player_id is not None:
            raise InvalidActionRecordError(
                f"Team-Ereignis {record.action_type!r} darf keinem Spieler zugeordnet sein"
            )
        if not record.is_generic and record.player_id is None:
            raise InvalidActionRecordError(f"Aktion {record.action_type!r} braucht einen Spieler")

        point_for = self.policy.classify_record(record)
        stored = dataclasses.replace(record, point_for=point_for)

        self._records.append(stored)
        self._score.apply(point_for)
        logger.debug("Aktion erfasst: %s %s -> %s (Stand %s:%s)",
                     stored.player_id, stored.action_type, point_for, *self._score.as_tuple())
        return stored

    def undo_last(self) -> ActionRecord:
        """Entfernt die letzte Aktion und nimmt ihren Punkt zurück."""
        if not self._records:
            raise EmptyLogError()
        record = self._records.pop()
        self._score.revert(record.point_for)
        logger.debug("Aktion rückgängig: %s %s (Stand %s:%s)",
                     record.player_id, record.action_type, *self._score.as_tuple())
        return record

    def current_score(self) -> Tuple[int, int]:
        return self._score.as_tuple()

    def snapshot(self) -> Tuple[ActionRecord, ...]:
        """Kopie des Logs; die Datensätze selbst sind unveränderlich."""
        return tuple(self._records)

    def clear(self):
        self._records = []
        self._score.reset()
