# src/volleyscout/data/models.py

from dataclasses import dataclass, field
from typing import Optional, List, Tuple, Iterable, Iterator
import datetime

from ..config import GENERIC_EVENT_POINTS, POSITION_ORDER, UNKNOWN_POSITION_RANK
from ..logic.errors import DuplicatePlayerError, EmptyRosterError, PlayerNotFoundError


@dataclass(frozen=True)
class Player:
    """Definiert einen einzelnen Spieler. Wird beim Spielstart gelesen und nie verändert."""
    player_id: str
    name: str
    jersey_number: Optional[int] = None
    position: Optional[str] = None

    @property
    def position_rank(self) -> int:
        return POSITION_ORDER.get(self.position, UNKNOWN_POSITION_RANK)


@dataclass(frozen=True)
class Roster:
    """
    Die Spieler auf dem Feld für das Scouting (nicht das ganze Team).
    Reihenfolge bleibt erhalten, IDs sind eindeutig.
    """
    players: Tuple[Player, ...]

    def __post_init__(self):
        players = tuple(self.players)
        if not players:
            raise EmptyRosterError()
        seen = set()
        for player in players:
            if player.player_id in seen:
                raise DuplicatePlayerError(player.player_id)
            seen.add(player.player_id)
        object.__setattr__(self, 'players', players)

    @classmethod
    def from_players(cls, players: Iterable[Player], order_by_position: bool = False) -> "Roster":
        """Baut die Startaufstellung; optional nach Position sortiert (stabil)."""
        players = list(players)
        if order_by_position:
            players.sort(key=lambda p: p.position_rank)
        return cls(tuple(players))

    def __len__(self) -> int:
        return len(self.players)

    def __iter__(self) -> Iterator[Player]:
        return iter(self.players)

    def __contains__(self, player_id) -> bool:
        return any(p.player_id == player_id for p in self.players)

    def ids(self) -> List[str]:
        return [p.player_id for p in self.players]

    def get(self, player_id: str) -> Player:
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise PlayerNotFoundError(player_id)

    def replace(self, outgoing_id: str, incoming: Player) -> "Roster":
        """Gibt eine neue Aufstellung zurück, in der der Platz von outgoing_id an incoming geht."""
        ids = self.ids()
        if outgoing_id not in ids:
            raise PlayerNotFoundError(outgoing_id)
        players = list(self.players)
        players[ids.index(outgoing_id)] = incoming
        return Roster(tuple(players))


@dataclass(frozen=True)
class ActionRecord:
    """
    Eine einzelne erfasste Aktion im Punkte-Log.

    player_id ist None bei Team-Ereignissen (Punkt/Fehler Gegner), ebenso quality.
    point_for wird beim Anhängen an das Log einmal berechnet ('OWN', 'OPP' oder None)
    und gespeichert, damit Rückgängig exakt ist.
    """
    action_type: str
    quality: Optional[int] = None
    player_id: Optional[str] = None
    # Name zum Zeitpunkt der Aktion, damit das Log auch nach einem Wechsel stimmt
    player_name: Optional[str] = None
    point_for: Optional[str] = None

    timestamp: datetime.datetime = field(default_factory=datetime.datetime.now, compare=False)

    @property
    def is_generic(self) -> bool:
        return self.action_type in GENERIC_EVENT_POINTS


@dataclass(frozen=True)
class SetResult:
    """Endstand eines abgeschlossenen Satzes."""
    set_number: int
    score_own: int
    score_opponent: int


@dataclass(frozen=True)
class SetSnapshot:
    """Unveränderlicher Stand eines Satzes, den der Aufrufer speichern kann."""
    set_number: int
    actions: Tuple[ActionRecord, ...]
    score_own: int = 0
    score_opponent: int = 0
    match_id: Optional[int] = None

    @property
    def label(self) -> str:
        return f"{self.set_number}. Satz"
