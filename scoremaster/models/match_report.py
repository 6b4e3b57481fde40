"""Dataclasses representing the post-match export report."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class PlayerStatLine:
    """Final statistics for a single player."""

    team_id: int
    team_name: str
    player_id: int
    name: str
    is_active: bool
    raid_points: int
    tackle_points: int
    bonus_points: int
    total_points: int
    total_raids: int
    successful_raids: int
    super_raids: int
    super_tackle_points: int
    raid_success_rate: float


@dataclass
class TeamSummary:
    """Team header information for the report."""

    team_id: int
    name: str
    coach: str
    city: str
    score: int


@dataclass
class MatchReport:
    """Snapshot of the match used by both export artifacts."""

    generated_ts: float
    teams: List[TeamSummary]
    players: List[PlayerStatLine] = field(default_factory=list)
    commentary: List[str] = field(default_factory=list)  # oldest first
    half: int = 1
    clock_display: str = "00:00"
    is_match_over: bool = False
    winner: Optional[str] = None
