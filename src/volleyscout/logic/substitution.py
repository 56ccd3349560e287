# src/volleyscout/logic/substitution.py

import logging
from typing import Iterable, List

from ..data.models import Player, Roster
from .errors import PlayerNotFoundError

logger = logging.getLogger(__name__)


class SubstitutionManager:
    """
    Wechselt Spieler der Aufstellung gegen Spieler von der Bank.
    Das Punkte-Log bleibt unberührt: alte Aktionen behalten die ID des
    ausgewechselten Spielers.
    """

    def __init__(self, team_players: Iterable[Player]):
        # Ganzes Team, Reihenfolge wie geliefert; doppelte IDs werden ignoriert
        self._team_players: List[Player] = []
        seen = set()
        for player in team_players:
            if player.player_id not in seen:
                seen.add(player.player_id)
                self._team_players.append(player)

    @property
    def team_players(self) -> List[Player]:
        return list(self._team_players)

    def add_team_players(self, players: Iterable[Player]):
        """Ergänzt Spieler, die erst später geladen wurden."""
        known = {p.player_id for p in self._team_players}
        for player in players:
            if player.player_id not in known:
                known.add(player.player_id)
                self._team_players.append(player)

    def list_eligible_incoming(self, roster: Roster) -> List[Player]:
        """Alle Teamspieler, die nicht in der Aufstellung stehen."""
        on_court = set(roster.ids())
        return [p for p in self._team_players if p.player_id not in on_court]

    def substitute(self, roster: Roster, outgoing_id: str, incoming_id: str) -> Roster:
        """
        Gibt eine neue Aufstellung zurück, in der incoming_id den Platz von
        outgoing_id einnimmt. Die übergebene Aufstellung bleibt unverändert.
        """
        if outgoing_id not in roster:
            raise PlayerNotFoundError(outgoing_id, "Aufstellung")

        incoming = next(
            (p for p in self.list_eligible_incoming(roster) if p.player_id == incoming_id), None
        )
        if incoming is None:
            raise PlayerNotFoundError(incoming_id, "Bank")

        new_roster = roster.replace(outgoing_id, incoming)
        logger.info("Wechsel: %s raus, %s rein", outgoing_id, incoming_id)
        return new_roster
