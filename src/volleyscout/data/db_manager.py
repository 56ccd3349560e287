# src/volleyscout/data/db_manager.py

import datetime
import logging
import os
import sqlite3
from typing import List, Optional, Tuple

from .models import ActionRecord, SetSnapshot
from ..config import DB_PATH

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class DBManager:
    """
    Verwaltet die Verbindung zur SQLite-Datenbank und speichert abgeschlossene
    Sätze samt Punkte-Log. Fehler werden geloggt und als None/False gemeldet.
    """

    def __init__(self, db_path: str = DB_PATH):
        self.db_path = db_path
        self._connection = None
        self._cursor = None

        # Stelle sicher, dass der Ordner existiert
        db_dir = os.path.dirname(self.db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    def connect(self):
        """Stellt die Verbindung zur Datenbank her."""
        try:
            self._connection = sqlite3.connect(self.db_path)
            self._connection.execute("PRAGMA foreign_keys = ON")
            self._cursor = self._connection.cursor()
        except sqlite3.Error as e:
            logger.error("Datenbankverbindungsfehler: %s", e)
            raise

    def close(self):
        """Schließt die Verbindung zur Datenbank."""
        if self._connection:
            self._connection.close()
            self._connection = None
            self._cursor = None

    def execute_query(self, query: str, params: tuple = (), fetch_id: bool = False):
        """
        Führt einen beliebigen SQL-Query aus.
        Gibt bei fetch_id=True die ID des zuletzt eingefügten Datensatzes zurück.
        """
        try:
            self.connect()
            self._cursor.execute(query, params)
            last_id = self._cursor.lastrowid
            self._connection.commit()
            return last_id if fetch_id else True
        except sqlite3.Error as e:
            logger.error("SQL-Fehler bei Query %r mit Params %s: %s", query, params, e)
            return None if fetch_id else False
        finally:
            self.close()

    def execute_query_fetch_all(self, query: str, params: tuple = ()) -> List[Tuple]:
        """Führt einen Query aus und holt alle Ergebnisse."""
        try:
            self.connect()
            self._cursor.execute(query, params)
            return self._cursor.fetchall()
        except sqlite3.Error as e:
            logger.error("SQL-Fehler beim Fetchen: %s", e)
            return []
        finally:
            self.close()

    def setup_database(self) -> bool:
        """Erstellt alle notwendigen Tabellen."""
        logger.info("Erstelle Datenbanktabellen in %s", self.db_path)

        queries = [
            """
            CREATE TABLE IF NOT EXISTS matches (
                match_id INTEGER PRIMARY KEY,
                name TEXT,
                date_time TEXT NOT NULL,
                team_id TEXT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS sets (
                set_id INTEGER PRIMARY KEY,
                match_id INTEGER NOT NULL,
                set_number INTEGER NOT NULL,
                label TEXT,
                score_own INTEGER DEFAULT 0,
                score_opponent INTEGER DEFAULT 0,
                UNIQUE (match_id, set_number),
                FOREIGN KEY (match_id) REFERENCES matches (match_id)
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS actions (
                action_id INTEGER PRIMARY KEY,
                set_id INTEGER NOT NULL,
                sequence INTEGER NOT NULL,
                action_type TEXT NOT NULL,
                player_id TEXT,
                player_name TEXT,
                quality INTEGER,
                point_for TEXT,
                timestamp TEXT NOT NULL,
                FOREIGN KEY (set_id) REFERENCES sets (set_id)
            );
            """
        ]

        return all(self.execute_query(query) for query in queries)

    def insert_match(self, name: Optional[str], team_id: Optional[str] = None,
                     date_time: Optional[datetime.datetime] = None) -> Optional[int]:
        """Legt ein Spiel an und gibt dessen ID zurück (None bei Fehler)."""
        date_time = date_time or datetime.datetime.now()
        query = "INSERT INTO matches (name, date_time, team_id) VALUES (?, ?, ?)"
        return self.execute_query(query, (name, date_time.strftime(TIMESTAMP_FORMAT), team_id), fetch_id=True)

    def save_set(self, snapshot: SetSnapshot, match_id: int, set_id: Optional[int] = None) -> Optional[int]:
        """
        Speichert Satz und alle Aktionen in einer Transaktion.
        Mit set_id wird ein bereits gespeicherter Satz ersetzt (Stand und Aktionen).
        Gibt die Set-ID zurück oder None, wenn nichts gespeichert wurde.
        """
        try:
            self.connect()
            with self._connection:
                if set_id is not None:
                    self._cursor.execute(
                        "UPDATE sets SET label = ?, score_own = ?, score_opponent = ? "
                        "WHERE set_id = ? AND match_id = ? AND set_number = ?",
                        (snapshot.label, snapshot.score_own, snapshot.score_opponent,
                         set_id, match_id, snapshot.set_number)
                    )
                    if self._cursor.rowcount != 1:
                        raise sqlite3.IntegrityError(
                            f"Satz {set_id} gehört nicht zu Spiel {match_id}/{snapshot.label}"
                        )
                    self._cursor.execute("DELETE FROM actions WHERE set_id = ?", (set_id,))
                else:
                    self._cursor.execute(
                        "INSERT INTO sets (match_id, set_number, label, score_own, score_opponent) "
                        "VALUES (?, ?, ?, ?, ?)",
                        (match_id, snapshot.set_number, snapshot.label, snapshot.score_own, snapshot.score_opponent)
                    )
                    set_id = self._cursor.lastrowid
                self._cursor.executemany(
                    """
                    INSERT INTO actions (set_id, sequence, action_type, player_id, player_name,
                                         quality, point_for, timestamp)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (set_id, seq, a.action_type, a.player_id, a.player_name,
                         a.quality, a.point_for, a.timestamp.strftime(TIMESTAMP_FORMAT))
                        for seq, a in enumerate(snapshot.actions)
                    ]
                )
            logger.info("%s gespeichert (Set ID %s, %s Aktionen)", snapshot.label, set_id, len(snapshot.actions))
            return set_id
        except sqlite3.Error as e:
            logger.error("Fehler beim Speichern von %s: %s", snapshot.label, e)
            return None
        finally:
            self.close()

    def get_set_actions(self, set_id: int) -> List[ActionRecord]:
        """Holt die Aktionen eines Satzes in Log-Reihenfolge."""
        query = """
            SELECT action_type, quality, player_id, player_name, point_for, timestamp
            FROM actions WHERE set_id = ? ORDER BY sequence ASC
        """
        rows = self.execute_query_fetch_all(query, (set_id,))
        return [
            ActionRecord(
                action_type=row[0],
                quality=row[1],
                player_id=row[2],
                player_name=row[3],
                point_for=row[4],
                timestamp=datetime.datetime.strptime(row[5], TIMESTAMP_FORMAT),
            )
            for row in rows
        ]

    def get_sets_for_match(self, match_id: int) -> List[Tuple[int, int, int, int]]:
        """Gibt (set_id, set_number, score_own, score_opponent) aller Sätze eines Spiels zurück."""
        query = """
            SELECT set_id, set_number, score_own, score_opponent
            FROM sets WHERE match_id = ? ORDER BY set_number ASC
        """
        return self.execute_query_fetch_all(query, (match_id,))
