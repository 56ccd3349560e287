# src/volleyscout/logic/point_log.py

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..config import (
    ACTION_ABBREVIATIONS, QUALITY_COLORS, QUALITY_LABELS, EVENT_COLORS, DEFAULT_LOG_COLOR,
    UNKNOWN_PLAYER,
)
from ..data.models import ActionRecord, Player
from .scoring import OWN, OPP

FRAME_COLUMNS = [
    'sequence', 'player_id', 'player_name', 'action_type', 'quality',
    'quality_label', 'point_for', 'score_own', 'score_opponent',
]


@dataclass(frozen=True)
class LogEntry:
    """Eine Zeile der Log-Anzeige."""
    label: str
    color: str
    point_for: Optional[str] = None


def format_action(action_type: Optional[str]) -> str:
    if not action_type:
        return ''
    return ACTION_ABBREVIATIONS.get(action_type, action_type)


def entry_color(record: ActionRecord) -> str:
    if record.quality in QUALITY_COLORS:
        return QUALITY_COLORS[record.quality]
    return EVENT_COLORS.get(record.action_type, DEFAULT_LOG_COLOR)


class PointLogRenderer:
    """
    Bereitet das Punkte-Log für Anzeige und Auswertung auf. Namen werden über
    alle Teamspieler aufgelöst, damit auch ausgewechselte Spieler erscheinen.
    """

    def __init__(self, players: Iterable[Player] = ()):
        self._names: Dict[str, str] = {p.player_id: p.name for p in players}

    def player_name(self, record: ActionRecord) -> str:
        if record.player_id is None:
            return UNKNOWN_PLAYER
        return self._names.get(record.player_id) or record.player_name or UNKNOWN_PLAYER

    def entries(self, records: Sequence[ActionRecord]) -> List[LogEntry]:
        """Log-Zeilen, neueste zuerst."""
        result = []
        for record in reversed(records):
            name = self.player_name(record)
            action = format_action(record.action_type)
            label = action if name == UNKNOWN_PLAYER else f"{name} - {action}"
            result.append(LogEntry(label=label, color=entry_color(record), point_for=record.point_for))
        return result

    def to_frame(self, records: Sequence[ActionRecord]) -> pd.DataFrame:
        """
        Eine Zeile pro Aktion in Log-Reihenfolge, mit laufendem Spielstand.
        Die letzte Zeile entspricht immer dem aktuellen Spielstand.
        """
        if not records:
            return pd.DataFrame(columns=FRAME_COLUMNS)

        # object-Spalten behalten None statt NaN
        df = pd.DataFrame({
            'sequence': np.arange(1, len(records) + 1),
            'player_id': pd.Series([r.player_id for r in records], dtype=object),
            'player_name': pd.Series(
                [None if r.player_id is None else self.player_name(r) for r in records], dtype=object
            ),
            'action_type': pd.Series([r.action_type for r in records], dtype=object),
            'quality': pd.array([r.quality for r in records], dtype='Int64'),
            'quality_label': pd.Series([QUALITY_LABELS.get(r.quality) for r in records], dtype=object),
            'point_for': pd.Series([r.point_for for r in records], dtype=object),
        })

        df['score_own'] = np.cumsum(np.where(df['point_for'] == OWN, 1, 0))
        df['score_opponent'] = np.cumsum(np.where(df['point_for'] == OPP, 1, 0))
        return df[FRAME_COLUMNS]
