"""
Scoring engine for the Kabaddi Score Master.

The engine turns one operator event into a new :class:`MatchState` plus an
:class:`EventSummary`. It never mutates its input: every lookup and rule is
resolved first and the new state is assembled only once nothing can fail, so
a rejected event leaves the caller's state exactly as it was.

Rule precedence for a single event:
    1. resolve the point type, teams and players (reject on failure)
    2. compute the team score increment and the player stat delta
    3. update the raid cycle counters
    4. update the raid turn
    5. derive the summary from the pre-event state and the computed deltas
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from ..models import (
    EventSummary, EventType, MatchState, Player, PlayerStats, PointType,
    ScoreEvent, Team, opponent_of,
)
from ..utils.constants import (
    DO_OR_DIE_PENALTY, LONA_BONUS, MIN_EVENT_POINTS, SUPER_RAID_MIN_POINTS,
    SUPER_TACKLE_POINTS,
)
from . import raid_cycle
from .errors import InvalidEventKind, InvalidPointValue, MissingPlayer, UnknownEntity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreOutcome:
    """Result of :func:`apply_score_event`."""
    state: MatchState
    summary: EventSummary


@dataclass(frozen=True)
class EmptyRaidOutcome:
    """Result of :func:`apply_empty_raid`."""
    state: MatchState
    summary: EventSummary
    do_or_die_fail: bool


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------
def apply_score_event(state: MatchState, event: ScoreEvent) -> ScoreOutcome:
    """
    Apply a scoring event.

    Args:
        state: Match state before the event
        event: Operator input

    Returns:
        ScoreOutcome holding the new state and the event summary

    Raises:
        InvalidEventKind: If the point type is not recognised
        UnknownEntity: If the team or a referenced player is not in the roster
        InvalidPointValue: If the raw points are not a positive integer
    """
    point_type = coerce_point_type(event.point_type)
    _require_team(state, event.team_id)
    raw_points = 1 if point_type is PointType.BONUS else event.raw_points
    if isinstance(raw_points, bool) or not isinstance(raw_points, int) or raw_points < MIN_EVENT_POINTS:
        raise InvalidPointValue(f"Points must be a positive integer, got {raw_points!r}")

    if point_type.is_raid:
        outcome = _apply_raid(state, event, point_type, raw_points)
    elif point_type.is_tackle:
        outcome = _apply_tackle(state, event, point_type, raw_points)
    else:
        outcome = _apply_line_out(state, event, raw_points)

    logger.info(
        "Applied %s (%s) worth %d: score %d-%d",
        point_type.value, outcome.summary.event_type.value, outcome.summary.points,
        outcome.summary.team1_score, outcome.summary.team2_score,
    )
    return outcome


def apply_empty_raid(state: MatchState, raiding_team_id: int, raider_id: Optional[int]) -> EmptyRaidOutcome:
    """
    Register a raid that scored nothing.

    The raider's raid count goes up without a successful raid. On the third
    consecutive empty raid the defending team receives one point and the
    raiding team's counter is reset. The raid turn passes to the other team
    either way.

    Raises:
        UnknownEntity: If the team or raider is not in the roster
        MissingPlayer: If no raider is named
    """
    _require_team(state, raiding_team_id)
    if raider_id is None:
        raise MissingPlayer("An empty raid must name the raider")
    defending_team_id = opponent_of(raiding_team_id)
    raiding = state.team(raiding_team_id)
    defending = state.team(defending_team_id)
    raider = _require_player(raiding, raider_id)

    new_cycle, failed = raid_cycle.record_empty_raid(state.raid_cycle, raiding_team_id)
    penalty = DO_OR_DIE_PENALTY if failed else 0

    new_raiding = raiding.with_player(raider.with_stats(PlayerStats(total_raids=1)))
    new_defending = defending.with_score(penalty)
    new_state = (
        state.with_team(new_raiding)
        .with_team(new_defending)
        .bumped(raid_cycle=new_cycle, raiding_team_id=defending_team_id)
    )

    summary = EventSummary(
        event_type=EventType.DO_OR_DIE_FAIL if failed else EventType.EMPTY_RAID,
        raiding_team=raiding.name,
        defending_team=defending.name,
        raider_name=raider.name,
        defender_name=None,
        points=penalty,
        is_super_raid=False,
        is_do_or_die=raid_cycle.is_do_or_die(state.raid_cycle, raiding_team_id),
        is_bonus=False,
        is_lona=False,
        raid_count=new_cycle.count_for(raiding_team_id),
        team1_score=new_state.teams[0].score,
        team2_score=new_state.teams[1].score,
    )
    if failed:
        logger.info("Do-or-die raid failed for %s; %s awarded %d", raiding.name, defending.name, penalty)
    else:
        logger.info("Empty raid by %s (%d consecutive)", raiding.name, summary.raid_count)
    return EmptyRaidOutcome(state=new_state, summary=summary, do_or_die_fail=failed)


def coerce_point_type(value: Union[PointType, str]) -> PointType:
    """Return ``value`` as a :class:`PointType` or raise :class:`InvalidEventKind`."""
    if isinstance(value, PointType):
        return value
    try:
        return PointType(value)
    except ValueError:
        raise InvalidEventKind(f"Unknown point type: {value!r}") from None


# ------------------------------------------------------------------
# Per-category rules
# ------------------------------------------------------------------
def _apply_raid(state: MatchState, event: ScoreEvent, point_type: PointType, raw_points: int) -> ScoreOutcome:
    raiding_team_id = event.team_id
    defending_team_id = opponent_of(raiding_team_id)
    raiding = state.team(raiding_team_id)
    defending = state.team(defending_team_id)
    raider = _optional_player(raiding, event.player_id)

    # A bonus-only raid carries no touch points.
    touch_points = 0 if point_type is PointType.BONUS else raw_points
    bonus = 1 if point_type.has_bonus else 0
    lona = LONA_BONUS if point_type.has_lona else 0
    points_in_raid = touch_points + bonus
    team_increment = points_in_raid + lona
    is_super_raid = points_in_raid >= SUPER_RAID_MIN_POINTS

    new_raiding = raiding.with_score(team_increment)
    if raider is not None:
        new_raiding = new_raiding.with_player(raider.with_stats(PlayerStats(
            raid_points=touch_points,
            bonus_points=bonus,
            total_points=points_in_raid,
            total_raids=1,
            successful_raids=1,
            super_raids=1 if is_super_raid else 0,
        )))

    new_state = state.with_team(new_raiding).bumped(
        raid_cycle=raid_cycle.record_successful_raid(state.raid_cycle, raiding_team_id),
        raiding_team_id=defending_team_id,
    )
    summary = EventSummary(
        event_type=EventType.RAID_SCORE,
        raiding_team=raiding.name,
        defending_team=defending.name,
        raider_name=raider.name if raider else None,
        defender_name=None,
        points=team_increment,
        is_super_raid=is_super_raid,
        is_do_or_die=raid_cycle.is_do_or_die(state.raid_cycle, raiding_team_id),
        is_bonus=bool(bonus),
        is_lona=bool(lona),
        raid_count=0,
        team1_score=new_state.teams[0].score,
        team2_score=new_state.teams[1].score,
    )
    return ScoreOutcome(state=new_state, summary=summary)


def _apply_tackle(state: MatchState, event: ScoreEvent, point_type: PointType, raw_points: int) -> ScoreOutcome:
    # The raid that produced the tackle still belongs to the raiding team, so
    # the credited side is always the one not currently raiding.
    raiding_team_id = state.raiding_team_id
    defending_team_id = opponent_of(raiding_team_id)
    raiding = state.team(raiding_team_id)
    defending = state.team(defending_team_id)
    defender = _optional_player(defending, event.player_id)
    raider = _optional_player(raiding, event.raider_id)

    lona = LONA_BONUS if point_type.has_lona else 0
    team_increment = raw_points + lona
    is_super_tackle = point_type is PointType.TACKLE_LONA and raw_points == SUPER_TACKLE_POINTS

    new_defending = defending.with_score(team_increment)
    if defender is not None:
        new_defending = new_defending.with_player(defender.with_stats(PlayerStats(
            tackle_points=raw_points,
            total_points=raw_points,
            super_tackle_points=1 if is_super_tackle else 0,
        )))

    new_state = state.with_team(new_defending).bumped()
    pre_count = state.raid_cycle.count_for(raiding_team_id)
    summary = EventSummary(
        event_type=EventType.SUPER_TACKLE_SCORE if is_super_tackle else EventType.TACKLE_SCORE,
        raiding_team=raiding.name,
        defending_team=defending.name,
        raider_name=raider.name if raider else None,
        defender_name=defender.name if defender else None,
        points=team_increment,
        is_super_raid=False,
        is_do_or_die=raid_cycle.is_do_or_die(state.raid_cycle, raiding_team_id),
        is_bonus=False,
        is_lona=bool(lona),
        raid_count=pre_count,
        team1_score=new_state.teams[0].score,
        team2_score=new_state.teams[1].score,
    )
    return ScoreOutcome(state=new_state, summary=summary)


def _apply_line_out(state: MatchState, event: ScoreEvent, raw_points: int) -> ScoreOutcome:
    committing = state.team(event.team_id)
    credited = state.team(opponent_of(event.team_id))
    offender = _optional_player(committing, event.player_id)

    new_state = state.with_team(credited.with_score(raw_points)).bumped()

    raiding_team_id = state.raiding_team_id
    committed_by_raider = committing.id == raiding_team_id
    pre_count = state.raid_cycle.count_for(raiding_team_id)
    offender_name = offender.name if offender else None
    summary = EventSummary(
        event_type=EventType.LINE_OUT,
        raiding_team=state.team(raiding_team_id).name,
        defending_team=state.team(opponent_of(raiding_team_id)).name,
        raider_name=offender_name if committed_by_raider else None,
        defender_name=None if committed_by_raider else offender_name,
        points=raw_points,
        is_super_raid=False,
        is_do_or_die=raid_cycle.is_do_or_die(state.raid_cycle, raiding_team_id),
        is_bonus=False,
        is_lona=False,
        raid_count=pre_count,
        team1_score=new_state.teams[0].score,
        team2_score=new_state.teams[1].score,
    )
    return ScoreOutcome(state=new_state, summary=summary)


# ------------------------------------------------------------------
# Lookups
# ------------------------------------------------------------------
def _require_team(state: MatchState, team_id: int) -> None:
    if isinstance(team_id, bool) or not state.has_team(team_id):
        raise UnknownEntity(f"Unknown team: {team_id!r}")


def _require_player(team: Team, player_id: int) -> Player:
    player = team.find_player(player_id)
    if player is None:
        raise UnknownEntity(f"Player {player_id!r} is not in {team.name}")
    return player


def _optional_player(team: Team, player_id: Optional[int]) -> Optional[Player]:
    if player_id is None:
        return None
    return _require_player(team, player_id)
