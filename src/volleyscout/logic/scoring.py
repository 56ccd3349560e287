# src/volleyscout/logic/scoring.py

from typing import Dict, Optional, Tuple

from ..config import (
    SKILL_ACTIONS, QUALITY_LEVELS, POINT_MAPPING, GENERIC_EVENT_POINTS, POINT_FOR
)
from .errors import InvalidActionRecordError

OWN = POINT_FOR['Eigenes Team']
OPP = POINT_FOR['Gegner']


def validate_skill(action_type: str, quality: int):
    """Prüft eine Spieler-Aktion; ungültige Werte sind Programmierfehler."""
    if action_type not in SKILL_ACTIONS:
        raise InvalidActionRecordError(f"Unbekannte Aktion: {action_type!r}")
    # bool ist ein int, als Qualität aber sinnlos
    if isinstance(quality, bool) or quality not in QUALITY_LEVELS:
        raise InvalidActionRecordError(
            f"Qualität {quality!r} für {action_type} liegt nicht in {QUALITY_LEVELS}"
        )


class ScoringPolicy:
    """
    Ordnet eine Aktion der Seite zu, die den Punkt bekommt.

    Die Zuordnung steckt in zwei Tabellen, damit die Regeln ohne Codeänderung
    angepasst werden können. Standard (aus config):
      - Qualität 3 bei Angriff, Block, Aufschlag -> 'OWN'
      - Qualität 0 bei jeder Aktion -> 'OPP'
      - 'Fehler Gegner' -> 'OWN', 'Punkt Gegner' -> 'OPP'
      - alles andere -> None
    """

    def __init__(self,
                 point_mapping: Optional[Dict[Tuple[str, int], Optional[str]]] = None,
                 event_points: Optional[Dict[str, str]] = None):
        self._point_mapping = dict(POINT_MAPPING if point_mapping is None else point_mapping)
        self._event_points = dict(GENERIC_EVENT_POINTS if event_points is None else event_points)

        for side in list(self._point_mapping.values()) + list(self._event_points.values()):
            if side not in (OWN, OPP, None):
                raise ValueError(f"Ungültige Seite in der Punktetabelle: {side!r}")

    def classify(self, action_type: str, quality: Optional[int] = None, is_generic: bool = False) -> Optional[str]:
        """Gibt 'OWN', 'OPP' oder None zurück. Keine Seiteneffekte."""
        if is_generic:
            if quality is not None:
                raise InvalidActionRecordError(f"Team-Ereignis {action_type!r} hat keine Qualität")
            if action_type not in self._event_points:
                raise InvalidActionRecordError(f"Unbekanntes Team-Ereignis: {action_type!r}")
            return self._event_points[action_type]

        validate_skill(action_type, quality)
        return self._point_mapping.get((action_type, quality))

    def classify_record(self, record) -> Optional[str]:
        return self.classify(record.action_type, record.quality, record.is_generic)
