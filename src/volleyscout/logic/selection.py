# src/volleyscout/logic/selection.py

"""
Zwei-Tipp-Auswahl: Spieler und Aktion (mit Qualität) können in beliebiger
Reihenfolge angetippt werden. Der zweite passende Tipp schließt die Auswahl ab.

    Idle --Spieler--> PlayerPicked --Aktion--> Commit, Idle
    Idle --Aktion---> ActionPicked --Spieler-> Commit, Idle

Derselbe Spieler bzw. dieselbe Aktion+Qualität ein zweites Mal bricht ab
(zurück zu Idle). Ein anderer Spieler bzw. eine andere Aktion ersetzt die
bisherige Auswahl.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from ..data.models import Player
from .scoring import validate_skill

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class PlayerPicked:
    player: Player


@dataclass(frozen=True)
class ActionPicked:
    action_type: str
    quality: int


SelectionState = Union[Idle, PlayerPicked, ActionPicked]

IDLE = Idle()


@dataclass(frozen=True)
class Selection:
    """Vollständige Auswahl, die genau eine Aktion erzeugt."""
    player: Player
    action_type: str
    quality: int


class SelectionProtocol:

    def __init__(self):
        self._state: SelectionState = IDLE

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return isinstance(self._state, Idle)

    def tap_player(self, player: Player) -> Optional[Selection]:
        """Verarbeitet einen Spieler-Tipp. Gibt bei Abschluss die Auswahl zurück."""
        state = self._state

        if isinstance(state, ActionPicked):
            self._state = IDLE
            return Selection(player, state.action_type, state.quality)

        if isinstance(state, PlayerPicked) and state.player.player_id == player.player_id:
            logger.debug("Auswahl von Spieler %s abgebrochen", player.player_id)
            self._state = IDLE
        else:
            self._state = PlayerPicked(player)
        return None

    def tap_action(self, action_type: str, quality: int) -> Optional[Selection]:
        """Verarbeitet einen Aktions-Tipp. Gibt bei Abschluss die Auswahl zurück."""
        # Ungültige Werte dürfen nie in einen Zustand gelangen
        validate_skill(action_type, quality)
        state = self._state

        if isinstance(state, PlayerPicked):
            self._state = IDLE
            return Selection(state.player, action_type, quality)

        if isinstance(state, ActionPicked) and (state.action_type, state.quality) == (action_type, quality):
            logger.debug("Auswahl von %s (%s) abgebrochen", action_type, quality)
            self._state = IDLE
        else:
            self._state = ActionPicked(action_type, quality)
        return None

    def cancel(self):
        self._state = IDLE

