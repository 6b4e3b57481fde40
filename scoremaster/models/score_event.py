"""
Score event models for the Kabaddi Score Master application.

A :class:`ScoreEvent` is the raw operator input; an :class:`EventSummary` is
the structured record the scoring engine derives from it for commentary and
export.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class PointType(Enum):
    """Closed set of scoring event kinds."""
    RAID = "raid"
    RAID_BONUS = "raid-bonus"
    BONUS = "bonus"
    LONA_POINTS = "lona-points"
    LONA_BONUS_POINTS = "lona-bonus-points"
    TACKLE = "tackle"
    TACKLE_LONA = "tackle-lona"
    LINE_OUT = "line-out"

    @property
    def is_raid(self) -> bool:
        return self in RAID_TYPES

    @property
    def is_tackle(self) -> bool:
        return self in (PointType.TACKLE, PointType.TACKLE_LONA)

    @property
    def has_bonus(self) -> bool:
        return self in (PointType.RAID_BONUS, PointType.BONUS, PointType.LONA_BONUS_POINTS)

    @property
    def has_lona(self) -> bool:
        return self in (PointType.LONA_POINTS, PointType.LONA_BONUS_POINTS, PointType.TACKLE_LONA)


RAID_TYPES = frozenset({
    PointType.RAID,
    PointType.RAID_BONUS,
    PointType.BONUS,
    PointType.LONA_POINTS,
    PointType.LONA_BONUS_POINTS,
})


class EventType(Enum):
    """Event tags understood by the commentary generator."""
    RAID_SCORE = "raid_score"
    TACKLE_SCORE = "tackle_score"
    SUPER_TACKLE_SCORE = "super_tackle_score"
    LINE_OUT = "line_out"
    EMPTY_RAID = "empty_raid"
    DO_OR_DIE_FAIL = "do_or_die_fail"


@dataclass(frozen=True)
class ScoreEvent:
    """
    A scoring event as entered by the operator.

    Attributes:
        team_id: Scoring team for raids; committing team for line-outs
        point_type: Kind of event
        raw_points: Points entered by the operator (meaning depends on type)
        player_id: Raider for raid types, defender for tackles, optional for line-outs
        raider_id: Tackled raider, only used to name the raider in commentary
    """
    team_id: int
    point_type: PointType
    raw_points: int
    player_id: Optional[int] = None
    raider_id: Optional[int] = None


@dataclass(frozen=True)
class EventSummary:
    """Structured description of one applied event."""
    event_type: EventType
    raiding_team: str
    defending_team: str
    raider_name: Optional[str]
    defender_name: Optional[str]
    points: int
    is_super_raid: bool
    is_do_or_die: bool
    is_bonus: bool
    is_lona: bool
    raid_count: int
    team1_score: int
    team2_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "eventType": self.event_type.value,
            "raidingTeam": self.raiding_team,
            "defendingTeam": self.defending_team,
            "raiderName": self.raider_name,
            "defenderName": self.defender_name,
            "points": self.points,
            "isSuperRaid": self.is_super_raid,
            "isDoOrDie": self.is_do_or_die,
            "isBonus": self.is_bonus,
            "isLona": self.is_lona,
            "raidCount": self.raid_count,
            "team1Score": self.team1_score,
            "team2Score": self.team2_score,
        }
