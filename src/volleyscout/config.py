# src/volleyscout/config.py

import os
import sys

# Pfad zur SQLite-Datenbank
if getattr(sys, 'frozen', False):
    # App läuft als PyInstaller-Exe
    BASE_DIR = sys._MEIPASS
else:
    # App läuft im Entwicklungsmodus
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Datenbankpfad: 'resources/db' im Projektordner, per Umgebungsvariable überschreibbar
DB_FOLDER = os.path.join(os.path.dirname(os.path.dirname(BASE_DIR)), 'resources', 'db')
DB_PATH = os.environ.get('VOLLEYSCOUT_DB_PATH', os.path.join(DB_FOLDER, 'scout.db'))

# --- Aktionen ---

ACTION_SERVE = 'Aufschlag'
ACTION_PASS = 'Annahme'
ACTION_DIG = 'Abwehr'
ACTION_SET = 'Zuspiel'
ACTION_ATTACK = 'Angriff'
ACTION_BLOCK = 'Block'

# Reihenfolge entspricht den Aktionsknöpfen
SKILL_ACTIONS = [
    ACTION_DIG,
    ACTION_SET,
    ACTION_ATTACK,
    ACTION_BLOCK,
    ACTION_PASS,
    ACTION_SERVE,
]

# Team-Ereignisse ohne Spieler und ohne Qualität
EVENT_OPPONENT_POINT = 'Punkt Gegner'
EVENT_OPPONENT_ERROR = 'Fehler Gegner'

POINT_FOR = {
    'Eigenes Team': 'OWN',
    'Gegner': 'OPP'
}

# 3 = perfekte Ausführung, 0 = direkter Fehler
QUALITY_LEVELS = (0, 1, 2, 3)

QUALITY_LABELS = {
    0: 'Fehler',
    1: 'Schwach',
    2: 'Gut',
    3: 'Perfekt',
}

# Aktionen, die bei Qualität 3 direkt punkten
POINT_WINNING_ACTIONS = [ACTION_ATTACK, ACTION_BLOCK, ACTION_SERVE]

# --- Punktewertung: (Aktion, Qualität) -> Seite ---
# Nicht aufgeführte Kombinationen ändern den Spielstand nicht.
POINT_MAPPING = {}
for _action in SKILL_ACTIONS:
    POINT_MAPPING[(_action, 0)] = POINT_FOR['Gegner']
for _action in POINT_WINNING_ACTIONS:
    POINT_MAPPING[(_action, 3)] = POINT_FOR['Eigenes Team']
del _action

GENERIC_EVENT_POINTS = {
    EVENT_OPPONENT_POINT: POINT_FOR['Gegner'],
    EVENT_OPPONENT_ERROR: POINT_FOR['Eigenes Team'],
}

# --- Positionen ---

# Anzeige-Reihenfolge der Startaufstellung; unbekannte Positionen ans Ende
POSITION_ORDER = {
    "Außen": 1,
    "Mitte": 2,
    "Libero": 3,
    "Diagonal": 4,
    "Zuspieler": 5,
}
UNKNOWN_POSITION_RANK = 999

# --- Satzende ---

SET_POINTS = 25
TIEBREAK_SET_POINTS = 15
TIEBREAK_SET_NUMBER = 5
MIN_LEAD = 2

# --- Anzeige des Punkte-Logs ---

UNKNOWN_PLAYER = "Unbekannt"

ACTION_ABBREVIATIONS = {
    ACTION_SET: 'Zusp.',
    EVENT_OPPONENT_POINT: 'Pkt. Geg.',
    EVENT_OPPONENT_ERROR: 'Fehl. Geg.',
}

QUALITY_COLORS = {
    0: '#FF4D4D',
    1: '#FF9900',
    2: '#9ACD32',
    3: '#4CAF50',
}

EVENT_COLORS = {
    EVENT_OPPONENT_POINT: '#FF4D4D',
    EVENT_OPPONENT_ERROR: '#4CAF50',
}

DEFAULT_LOG_COLOR = 'black'
