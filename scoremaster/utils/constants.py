"""
Constants for the Kabaddi Score Master application.

This module contains configuration constants used throughout the application.
"""
import os

# Application metadata
APP_TITLE = "Kabaddi Score Master"

# Match timing defaults
DEFAULT_HALF_DURATION_MIN = 20
MIN_HALF_DURATION_MIN = 1
MAX_HALF_DURATION_MIN = 60
HALF_COUNT = 2
TIMEOUTS_PER_HALF = 2

# Squad configuration (fixed for a kabaddi match)
TEAM_IDS = (1, 2)
SQUAD_SIZE = 12
ACTIVE_PLAYERS = 7
PLAYER_ID_BASE = 100  # team 1 -> 101..112, team 2 -> 201..212

# Default labels used when a match is reset
DEFAULT_TEAM_NAME = "Team {team_id}"
DEFAULT_COACH = "Coach"
DEFAULT_CITY = "City"
DEFAULT_PLAYER_NAME = "Player {number}"

# Scoring rules
DO_OR_DIE_THRESHOLD = 2  # empty raids tolerated before a raid becomes do-or-die
DO_OR_DIE_PENALTY = 1
LONA_BONUS = 2
SUPER_RAID_MIN_POINTS = 3
SUPER_TACKLE_POINTS = 2
MIN_EVENT_POINTS = 1
MAX_EVENT_POINTS = 10

# Substitutions
MAX_SUBSTITUTIONS_PER_BREAK = 2

# Commentary
COMMENTARY_HISTORY_SIZE = 3
COMMENTARY_URL = os.environ.get("SCOREMASTER_COMMENTARY_URL", "http://127.0.0.1:8400/commentary")
COMMENTARY_TIMEOUT_SEC = float(os.environ.get("SCOREMASTER_COMMENTARY_TIMEOUT", "10"))
FOUL_PLAY_MIN_CHARS = 10
FOUL_PLAY_MAX_CHARS = 500

# Undo history
MAX_COMMAND_HISTORY = 50

# Web server
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7122
