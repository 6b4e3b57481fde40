"""
Substitution handling for the Kabaddi Score Master.

Substitutions are only allowed during a break (team timeout or half break)
and each team may make at most two per break. The budget itself is reset by
the match session whenever a new break opens.
"""
import logging

from ..models import MatchState
from ..utils.constants import MAX_SUBSTITUTIONS_PER_BREAK
from .errors import (
    InvalidSubstitution, SubstitutionQuotaExceeded, SubstitutionWindowClosed,
    UnknownEntity,
)

logger = logging.getLogger(__name__)


def substitute(
    state: MatchState,
    team_id: int,
    player_in_id: int,
    player_out_id: int,
    is_break_active: bool,
) -> MatchState:
    """
    Swap a benched player onto the court in place of an active player.

    Args:
        state: Current match state
        team_id: Team making the substitution
        player_in_id: Benched player coming on
        player_out_id: Active player going off
        is_break_active: Whether a timeout or half break is in progress

    Returns:
        New match state with both players swapped and the budget spent

    Raises:
        SubstitutionWindowClosed: If no break is in progress
        SubstitutionQuotaExceeded: If the team already used its substitutions
        UnknownEntity: If the team or either player is not in the roster
        InvalidSubstitution: If the pair is not bench-in / active-out
    """
    if not is_break_active:
        raise SubstitutionWindowClosed("Substitutions are only allowed during a timeout or half break")
    if isinstance(team_id, bool) or not state.has_team(team_id):
        raise UnknownEntity(f"Unknown team: {team_id!r}")
    if state.substitutions.used_by(team_id) >= MAX_SUBSTITUTIONS_PER_BREAK:
        raise SubstitutionQuotaExceeded(
            f"Team {team_id} has already made {MAX_SUBSTITUTIONS_PER_BREAK} substitutions this break"
        )

    team = state.team(team_id)
    player_in = team.find_player(player_in_id)
    player_out = team.find_player(player_out_id)
    if player_in is None:
        raise UnknownEntity(f"Player {player_in_id!r} is not in {team.name}")
    if player_out is None:
        raise UnknownEntity(f"Player {player_out_id!r} is not in {team.name}")
    if player_in.id == player_out.id:
        raise InvalidSubstitution("A player cannot be substituted for themselves")
    if player_in.is_active:
        raise InvalidSubstitution(f"{player_in.name} is already on court")
    if not player_out.is_active:
        raise InvalidSubstitution(f"{player_out.name} is already on the bench")

    new_team = team.with_player(player_in.with_active(True)).with_player(player_out.with_active(False))
    logger.info("%s: %s on for %s", team.name, player_in.name, player_out.name)
    return state.with_team(new_team).bumped(substitutions=state.substitutions.spend(team_id))
