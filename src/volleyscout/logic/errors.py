# src/volleyscout/logic/errors.py

from typing import Hashable


class ScoutError(Exception):
    """Basisklasse aller Fehler der Scouting-Engine."""


class EmptyLogError(ScoutError):
    """Rückgängig angefordert, aber das Punkte-Log ist leer."""

    def __init__(self, message: str = "Keine Aktionen zum Rückgängigmachen."):
        super().__init__(message)


class PlayerNotFoundError(ScoutError):
    """Eine Spieler-ID ist in der erwarteten Menge (Aufstellung oder Bank) nicht vorhanden."""

    def __init__(self, player_id: Hashable, where: str = "Aufstellung"):
        super().__init__(f"Spieler {player_id!r} nicht in {where} gefunden.")
        self.player_id = player_id
        self.where = where


class InvalidActionRecordError(ScoutError, ValueError):
    """
    Programmierfehler: unbekannte Aktion, Qualität außerhalb 0-3
    oder ein Team-Ereignis mit Spieler/Qualität.
    """


class DuplicatePlayerError(ScoutError, ValueError):
    def __init__(self, player_id: Hashable):
        super().__init__(f"Spieler {player_id!r} ist mehrfach in der Aufstellung.")
        self.player_id = player_id


class EmptyRosterError(ScoutError, ValueError):
    def __init__(self):
        super().__init__("Eine Aufstellung braucht mindestens einen Spieler.")


class UnsavedSetError(ScoutError):
    """Der aktuelle Satz enthält ungespeicherte Aktionen."""

    def __init__(self, set_number: int):
        super().__init__(
            f"Satz {set_number} ist nicht gespeichert. Erst speichern oder ausdrücklich verwerfen."
        )
        self.set_number = set_number


class MatchFinalizedError(ScoutError):
    """Das Spiel wurde beendet; die Engine nimmt keine Eingaben mehr an."""

    def __init__(self):
        super().__init__("Das Spiel ist bereits beendet.")
