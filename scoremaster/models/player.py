"""
Player model for the Kabaddi Score Master application.

This module contains the Player dataclass which represents an individual
squad member and the cumulative statistics credited to them during a match.
"""
from dataclasses import dataclass, field, fields, replace
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class PlayerStats:
    """Per-match player statistics. Counters never decrease within a match."""
    raid_points: int = 0
    tackle_points: int = 0
    bonus_points: int = 0
    total_points: int = 0
    total_raids: int = 0
    successful_raids: int = 0
    super_raids: int = 0
    super_tackle_points: int = 0  # count of super tackles, not points

    def combined(self, delta: "PlayerStats") -> "PlayerStats":
        """Return a new stats record with ``delta`` added field by field."""
        return PlayerStats(**{
            f.name: getattr(self, f.name) + getattr(delta, f.name) for f in fields(self)
        })

    def raid_success_rate(self) -> float:
        """
        Percentage of raids that scored.

        Returns:
            Success rate rounded to two decimals, 0.0 when no raids were made
        """
        if self.total_raids <= 0:
            return 0.0
        return round(self.successful_raids / self.total_raids * 100, 2)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "raid_points": self.raid_points,
            "tackle_points": self.tackle_points,
            "bonus_points": self.bonus_points,
            "total_points": self.total_points,
            "total_raids": self.total_raids,
            "successful_raids": self.successful_raids,
            "super_raids": self.super_raids,
            "super_tackle_points": self.super_tackle_points,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PlayerStats':
        """Create from dictionary for JSON deserialization."""
        if not data:
            return cls()
        return cls(
            raid_points=int(data.get("raid_points", 0)),
            tackle_points=int(data.get("tackle_points", 0)),
            bonus_points=int(data.get("bonus_points", 0)),
            total_points=int(data.get("total_points", 0)),
            total_raids=int(data.get("total_raids", 0)),
            successful_raids=int(data.get("successful_raids", 0)),
            super_raids=int(data.get("super_raids", 0)),
            super_tackle_points=int(data.get("super_tackle_points", 0)),
        )


@dataclass(frozen=True)
class Player:
    """
    Represents a kabaddi player in one of the two squads.

    Attributes:
        id: Player identifier, unique within its team (e.g. 101..112)
        name: Display name shown on the scoreboard
        is_active: True when the player is on court, False when benched
        statistics: Cumulative statistics for the current match
    """
    id: int
    name: str
    is_active: bool = False
    statistics: PlayerStats = field(default_factory=PlayerStats)

    def with_stats(self, delta: PlayerStats) -> "Player":
        """Return a copy of this player with ``delta`` credited."""
        return replace(self, statistics=self.statistics.combined(delta))

    def with_active(self, is_active: bool) -> "Player":
        return replace(self, is_active=is_active)

    def renamed(self, name: str) -> "Player":
        return replace(self, name=name)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the player
        """
        data = {
            "id": self.id,
            "name": self.name,
            "is_active": self.is_active,
            "statistics": self.statistics.to_dict(),
        }
        data["statistics"]["raid_success_rate"] = self.statistics.raid_success_rate()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from dictionary for JSON deserialization.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance
        """
        return cls(
            id=int(data["id"]),
            name=data.get("name", ""),
            is_active=bool(data.get("is_active", False)),
            statistics=PlayerStats.from_dict(data.get("statistics")),
        )
