"""
Raid cycle tracking for the Kabaddi Score Master.

Each team has its own counter of consecutive empty raids. Two empty raids are
tolerated; the third raid is a do-or-die raid and, if it is also empty, the
opponent is awarded a point and the counter starts again from zero.
"""
from typing import Tuple

from ..models import RaidCycleState
from ..utils.constants import DO_OR_DIE_THRESHOLD


def is_do_or_die(cycle: RaidCycleState, team_id: int) -> bool:
    """Return True when the next raid by ``team_id`` is a do-or-die raid."""
    return cycle.count_for(team_id) >= DO_OR_DIE_THRESHOLD


def record_successful_raid(cycle: RaidCycleState, team_id: int) -> RaidCycleState:
    """A scoring raid clears the team's counter."""
    return cycle.with_count(team_id, 0)


def record_empty_raid(cycle: RaidCycleState, team_id: int) -> Tuple[RaidCycleState, bool]:
    """
    Register an empty raid by ``team_id``.

    Args:
        cycle: Counters before the raid
        team_id: Raiding team

    Returns:
        Tuple of (new counters, do_or_die_failed). When the raid was a failed
        do-or-die raid the counter is reset to 0 instead of incremented.
    """
    if is_do_or_die(cycle, team_id):
        return cycle.with_count(team_id, 0), True
    return cycle.with_count(team_id, cycle.count_for(team_id) + 1), False
