"""
Kabaddi Score Master

A live scorekeeping application for Kabaddi matches: raid and tackle scoring,
do-or-die raids, the match clock with timeouts and half breaks,
substitutions, per-player statistics and live commentary.

This package provides a Flask web interface for the scoreboard operator.
"""
from .models import Player, Team, MatchState, MatchClock, ScoreEvent, PointType
from .services import MatchSession, ServiceFactory, apply_score_event, apply_empty_raid
from .ui import create_app, run_web_app
from .utils import fmt_mmss, now_ts, APP_TITLE

__version__ = "1.0.0"
__author__ = "Kabaddi Score Master Development Team"

__all__ = [
    "Player", "Team", "MatchState", "MatchClock", "ScoreEvent", "PointType",
    "MatchSession", "ServiceFactory", "apply_score_event", "apply_empty_raid",
    "create_app", "run_web_app", "fmt_mmss", "now_ts", "APP_TITLE"
]
