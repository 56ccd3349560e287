# src/volleyscout/logic/game_controller.py

import logging
from typing import Iterable, List, Optional, Tuple

from ..config import SET_POINTS, TIEBREAK_SET_POINTS, TIEBREAK_SET_NUMBER, MIN_LEAD
from ..data.models import ActionRecord, Player, Roster, SetResult, SetSnapshot
from .action_log import ActionLog
from .errors import EmptyLogError, MatchFinalizedError, PlayerNotFoundError, UnsavedSetError
from .scoring import ScoringPolicy
from .selection import Selection, SelectionProtocol, SelectionState
from .substitution import SubstitutionManager

logger = logging.getLogger(__name__)


class GameController:
    """
    Verwaltet den laufenden Satz einer Spielbeobachtung: Aufstellung,
    Zwei-Tipp-Auswahl, Punkte-Log mit Spielstand, Wechsel und Satzwechsel.

    Alle Eingaben laufen über die on_*-Methoden, alle Ausgaben über die
    current_*-Methoden. Speichern übernimmt ein externer DBManager.
    """

    def __init__(self, roster: Roster, team_players: Optional[Iterable[Player]] = None,
                 policy: Optional[ScoringPolicy] = None, match_name: Optional[str] = None,
                 team_id: Optional[str] = None):
        self._roster = roster
        # Ohne Teamliste gibt es keine Bank, aber die Aufstellung ist trotzdem bekannt
        self._substitutions = SubstitutionManager(list(roster) + list(team_players or []))
        self._selection = SelectionProtocol()
        self._log = ActionLog(policy)

        self.match_name = match_name
        self.team_id = team_id
        self._match_id: Optional[int] = None
        # Set-ID des aktuellen Satzes, sobald er einmal gespeichert wurde
        self._set_id: Optional[int] = None
        self._set_saved = False
        self._set_number = 1
        self._set_results: List[SetResult] = []
        self._has_unsaved_data = False
        self._finalized = False

    # --- EINGABEN ---

    def on_player_tap(self, player_id: str) -> Optional[ActionRecord]:
        """Spieler angetippt. Gibt die erfasste Aktion zurück, falls die Auswahl damit komplett ist."""
        self._ensure_active()
        try:
            player = self._roster.get(player_id)
        except PlayerNotFoundError:
            logger.warning("Spieler %s steht nicht in der Aufstellung", player_id)
            raise
        selection = self._selection.tap_player(player)
        return self._commit(selection) if selection else None

    def on_action_tap(self, action_type: str, quality: int) -> Optional[ActionRecord]:
        """Aktion mit Qualität angetippt."""
        self._ensure_active()
        selection = self._selection.tap_action(action_type, quality)
        return self._commit(selection) if selection else None

    def on_generic_score_tap(self, event: str) -> ActionRecord:
        """Team-Ereignis ('Punkt Gegner' / 'Fehler Gegner'); setzt die Auswahl zurück."""
        self._ensure_active()
        record = self._log.append(ActionRecord(action_type=event))
        self._selection.cancel()
        self._has_unsaved_data = True
        return record

    def on_undo(self) -> ActionRecord:
        """Nimmt die letzte Aktion zurück. EmptyLogError, wenn nichts da ist."""
        self._ensure_active()
        try:
            record = self._log.undo_last()
        except EmptyLogError:
            logger.warning("Nichts zum Rückgängigmachen in Satz %s", self._set_number)
            raise
        self._has_unsaved_data = True
        return record

    def on_substitute(self, outgoing_id: str, incoming_id: str) -> Roster:
        """Wechselt einen Spieler; eine halb fertige Auswahl wird verworfen."""
        self._ensure_active()
        try:
            self._roster = self._substitutions.substitute(self._roster, outgoing_id, incoming_id)
        except PlayerNotFoundError as e:
            logger.warning("Wechsel abgebrochen: %s", e)
            raise
        self._selection.cancel()
        return self._roster

    def _commit(self, selection: Selection) -> ActionRecord:
        record = ActionRecord(
            action_type=selection.action_type,
            quality=selection.quality,
            player_id=selection.player.player_id,
            player_name=selection.player.name,
        )
        stored = self._log.append(record)
        self._has_unsaved_data = True
        return stored

    # --- AUSGABEN ---

    def current_score(self) -> Tuple[int, int]:
        return self._log.current_score()

    def current_log(self) -> Tuple[ActionRecord, ...]:
        return self._log.snapshot()

    def current_roster(self) -> Roster:
        return self._roster

    def current_selection_state(self) -> SelectionState:
        return self._selection.state

    def eligible_incoming(self) -> List[Player]:
        return self._substitutions.list_eligible_incoming(self._roster)

    def team_players(self) -> List[Player]:
        return self._substitutions.team_players

    def load_team_players(self, players: Iterable[Player]) -> List[Player]:
        """Ergänzt nachgeladene Teamspieler und gibt die aktuelle Bank zurück."""
        self._ensure_active()
        self._substitutions.add_team_players(players)
        return self.eligible_incoming()

    @property
    def set_number(self) -> int:
        return self._set_number

    @property
    def match_id(self) -> Optional[int]:
        return self._match_id

    @property
    def has_unsaved_data(self) -> bool:
        # Ein leeres Log ist nur sauber, wenn von diesem Satz noch nichts gespeichert wurde
        return self._has_unsaved_data and (len(self._log) > 0 or self._set_saved)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def set_results(self) -> List[SetResult]:
        return list(self._set_results)

    def is_set_over(self) -> bool:
        """Prüft die Satzende-Regel (25 bzw. 15 im Entscheidungssatz, 2 Punkte Vorsprung)."""
        score_own, score_opponent = self.current_score()
        target = TIEBREAK_SET_POINTS if self._set_number >= TIEBREAK_SET_NUMBER else SET_POINTS

        if score_own >= target or score_opponent >= target:
            return abs(score_own - score_opponent) >= MIN_LEAD
        return False

    # --- SATZ- UND SPIELVERWALTUNG ---

    def set_snapshot(self) -> SetSnapshot:
        """Unveränderlicher Stand des aktuellen Satzes zum Speichern."""
        score_own, score_opponent = self.current_score()
        return SetSnapshot(
            set_number=self._set_number,
            actions=self._log.snapshot(),
            score_own=score_own,
            score_opponent=score_opponent,
            match_id=self._match_id,
        )

    def mark_set_saved(self, match_id: Optional[int] = None):
        """Der Aufrufer bestätigt, dass der aktuelle Satz dauerhaft gespeichert ist."""
        if match_id is not None:
            self._match_id = match_id
        self._set_saved = True
        self._has_unsaved_data = False

    def save_current_set(self, db_manager) -> Optional[int]:
        """
        Speichert den aktuellen Satz über den DBManager.
        Ein erneutes Speichern ersetzt den bereits gespeicherten Satz. Gibt die
        Set-ID zurück; bei leerem, nie gespeichertem Satz oder Fehler None. Log
        und Spielstand werden in keinem Fall verändert.
        """
        self._ensure_active()
        snapshot = self.set_snapshot()
        if not snapshot.actions and not self._set_saved:
            logger.info("%s ist leer, nichts zu speichern", snapshot.label)
            return None

        match_id = self._match_id
        if match_id is None:
            match_id = db_manager.insert_match(self.match_name, self.team_id)
            if match_id is None:
                logger.error("Spiel konnte nicht angelegt werden, %s bleibt ungespeichert", snapshot.label)
                return None
            self._match_id = match_id

        set_id = db_manager.save_set(snapshot, match_id, self._set_id)
        if set_id is None:
            logger.error("%s konnte nicht gespeichert werden", snapshot.label)
            return None

        self._set_id = set_id
        self.mark_set_saved()
        return set_id

    def start_next_set(self, discard: bool = False):
        """Schließt den aktuellen Satz ab und beginnt den nächsten mit 0:0."""
        self._ensure_active()
        if self.has_unsaved_data and not discard:
            raise UnsavedSetError(self._set_number)

        self._close_current_set()
        self._log.clear()
        self._selection.cancel()
        self._has_unsaved_data = False
        self._set_id = None
        self._set_saved = False
        self._set_number += 1
        logger.info("Satz %s gestartet", self._set_number)

    def finalize_match(self, discard: bool = False) -> List[SetResult]:
        """Beendet das Spiel endgültig und gibt die Satzergebnisse zurück."""
        self._ensure_active()
        if self.has_unsaved_data and not discard:
            raise UnsavedSetError(self._set_number)

        self._close_current_set()
        self._selection.cancel()
        self._finalized = True
        logger.info("Spiel beendet nach %s Sätzen", len(self._set_results))
        return self.set_results()

    def _close_current_set(self):
        # Leere, nie gespeicherte Sätze zählen nicht als gespielt
        if len(self._log) or self._set_saved:
            score_own, score_opponent = self.current_score()
            self._set_results.append(SetResult(self._set_number, score_own, score_opponent))

    def _ensure_active(self):
        if self._finalized:
            raise MatchFinalizedError()
