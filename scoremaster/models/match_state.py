"""
MatchState model for the Kabaddi Score Master application.

This module contains the MatchState dataclass which aggregates everything a
scoring decision reads or writes: both squads, the raid cycle counters, the
raid turn and the substitution budget. Every transition returns a new value.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple

from .team import Team
from ..utils.constants import TEAM_IDS


def opponent_of(team_id: int) -> int:
    """Return the id of the other team."""
    return TEAM_IDS[1] if team_id == TEAM_IDS[0] else TEAM_IDS[0]


def team_index(team_id: int) -> int:
    """Map a team id onto its slot in the two-slot team tuple."""
    return TEAM_IDS.index(team_id)


@dataclass(frozen=True)
class RaidCycleState:
    """
    Consecutive empty raids per team since that team last scored on a raid.

    Attributes:
        counts: Two-slot tuple indexed by team slot, each value in {0, 1, 2}
    """
    counts: Tuple[int, int] = (0, 0)

    def count_for(self, team_id: int) -> int:
        return self.counts[team_index(team_id)]

    def with_count(self, team_id: int, value: int) -> "RaidCycleState":
        counts = list(self.counts)
        counts[team_index(team_id)] = value
        return RaidCycleState(counts=(counts[0], counts[1]))

    def to_dict(self) -> Dict[str, int]:
        return {f"team{team_id}": self.count_for(team_id) for team_id in TEAM_IDS}


@dataclass(frozen=True)
class SubstitutionBudget:
    """Substitutions used by each team during the current break."""
    used: Tuple[int, int] = (0, 0)

    def used_by(self, team_id: int) -> int:
        return self.used[team_index(team_id)]

    def spend(self, team_id: int) -> "SubstitutionBudget":
        used = list(self.used)
        used[team_index(team_id)] += 1
        return SubstitutionBudget(used=(used[0], used[1]))

    def reset(self) -> "SubstitutionBudget":
        return SubstitutionBudget()

    def to_dict(self) -> Dict[str, int]:
        return {f"team{team_id}": self.used_by(team_id) for team_id in TEAM_IDS}


def _initial_teams() -> Tuple[Team, Team]:
    return (Team.initial(TEAM_IDS[0]), Team.initial(TEAM_IDS[1]))


@dataclass(frozen=True)
class MatchState:
    """
    Represents the complete scoring state of a kabaddi match.

    Attributes:
        teams: Both teams, slot 0 holds team 1 and slot 1 holds team 2
        raid_cycle: Consecutive empty raid counters per team
        raiding_team_id: Team currently raiding
        substitutions: Substitutions used in the current break
        version: Incremented by every applied transition
    """
    teams: Tuple[Team, Team] = field(default_factory=_initial_teams)
    raid_cycle: RaidCycleState = field(default_factory=RaidCycleState)
    raiding_team_id: int = TEAM_IDS[0]
    substitutions: SubstitutionBudget = field(default_factory=SubstitutionBudget)
    version: int = 0

    def has_team(self, team_id: Any) -> bool:
        return team_id in TEAM_IDS

    def team(self, team_id: int) -> Team:
        """Return the team with ``team_id``. Callers validate the id first."""
        return self.teams[team_index(team_id)]

    def with_team(self, updated: Team) -> "MatchState":
        """Return a copy with ``updated`` placed in its slot."""
        teams = list(self.teams)
        teams[team_index(updated.id)] = updated
        return replace(self, teams=(teams[0], teams[1]))

    def bumped(self, **changes: Any) -> "MatchState":
        """Apply ``changes`` and advance the version counter."""
        return replace(self, version=self.version + 1, **changes)

    def scores(self) -> Tuple[int, int]:
        return (self.teams[0].score, self.teams[1].score)

    def to_json(self) -> dict:
        """
        Convert MatchState to JSON-serializable dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "teams": [team.to_dict() for team in self.teams],
            "raid_cycle": self.raid_cycle.to_dict(),
            "raiding_team_id": self.raiding_team_id,
            "substitutions": self.substitutions.to_dict(),
            "version": self.version,
        }
