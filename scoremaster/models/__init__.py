"""
Models package for the Kabaddi Score Master.

This package contains the core data models used throughout the application.
"""
from .player import Player, PlayerStats
from .team import Team
from .match_state import MatchState, RaidCycleState, SubstitutionBudget, opponent_of
from .match_clock import MatchClock
from .score_event import PointType, ScoreEvent, EventType, EventSummary, RAID_TYPES
from .match_report import MatchReport, PlayerStatLine, TeamSummary

__all__ = [
    "Player", "PlayerStats", "Team", "MatchState", "RaidCycleState",
    "SubstitutionBudget", "opponent_of", "MatchClock", "PointType",
    "ScoreEvent", "EventType", "EventSummary", "RAID_TYPES",
    "MatchReport", "PlayerStatLine", "TeamSummary"
]
