"""
Utilities package for the Kabaddi Score Master.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import fmt_mmss, now_ts
from .constants import (
    APP_TITLE, DEFAULT_HALF_DURATION_MIN, TIMEOUTS_PER_HALF, TEAM_IDS,
    SQUAD_SIZE, ACTIVE_PLAYERS, MAX_SUBSTITUTIONS_PER_BREAK
)

__all__ = [
    "fmt_mmss", "now_ts", "APP_TITLE", "DEFAULT_HALF_DURATION_MIN",
    "TIMEOUTS_PER_HALF", "TEAM_IDS", "SQUAD_SIZE", "ACTIVE_PLAYERS",
    "MAX_SUBSTITUTIONS_PER_BREAK"
]
