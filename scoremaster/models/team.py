"""Team model for the Kabaddi Score Master application."""
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from .player import Player
from ..utils.constants import (
    ACTIVE_PLAYERS, DEFAULT_CITY, DEFAULT_COACH, DEFAULT_PLAYER_NAME,
    DEFAULT_TEAM_NAME, PLAYER_ID_BASE, SQUAD_SIZE, TIMEOUTS_PER_HALF,
)


@dataclass(frozen=True)
class Team:
    """
    One of the two sides in a match.

    Attributes:
        id: Team identifier (1 or 2)
        name: Display name
        coach: Coach name
        city: Home city
        score: Team score, never decreases during a match
        players: Fixed, ordered squad of 12 players
        remaining_timeouts: Timeouts left in the current half
    """
    id: int
    name: str
    coach: str = DEFAULT_COACH
    city: str = DEFAULT_CITY
    score: int = 0
    players: Tuple[Player, ...] = ()
    remaining_timeouts: int = TIMEOUTS_PER_HALF

    def find_player(self, player_id: Optional[int]) -> Optional[Player]:
        """Return the player with ``player_id`` or None when not in this squad."""
        if player_id is None:
            return None
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def with_player(self, updated: Player) -> "Team":
        """Return a copy with ``updated`` replacing the player of the same id."""
        return replace(self, players=tuple(
            updated if player.id == updated.id else player for player in self.players
        ))

    def with_score(self, increment: int) -> "Team":
        return replace(self, score=self.score + increment)

    def active_players(self) -> Tuple[Player, ...]:
        return tuple(p for p in self.players if p.is_active)

    def bench_players(self) -> Tuple[Player, ...]:
        return tuple(p for p in self.players if not p.is_active)

    def to_dict(self) -> Dict[str, Any]:
        """Convert team to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "coach": self.coach,
            "city": self.city,
            "score": self.score,
            "remaining_timeouts": self.remaining_timeouts,
            "players": [player.to_dict() for player in self.players],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Team':
        """Create team from dictionary for JSON deserialization."""
        return cls(
            id=int(data["id"]),
            name=data.get("name", DEFAULT_TEAM_NAME.format(team_id=data["id"])),
            coach=data.get("coach", DEFAULT_COACH),
            city=data.get("city", DEFAULT_CITY),
            score=int(data.get("score", 0)),
            players=tuple(Player.from_dict(p) for p in data.get("players", [])),
            remaining_timeouts=int(data.get("remaining_timeouts", TIMEOUTS_PER_HALF)),
        )

    @classmethod
    def initial(cls, team_id: int) -> 'Team':
        """
        Build the default squad for ``team_id``.

        Player ids are ``team_id * 100 + n`` for n in 1..12 and the first
        seven players start on court.
        """
        players = tuple(
            Player(
                id=team_id * PLAYER_ID_BASE + number,
                name=DEFAULT_PLAYER_NAME.format(number=number),
                is_active=number <= ACTIVE_PLAYERS,
            )
            for number in range(1, SQUAD_SIZE + 1)
        )
        return cls(id=team_id, name=DEFAULT_TEAM_NAME.format(team_id=team_id), players=players)
