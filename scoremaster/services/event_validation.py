"""
Input validation for operator submissions.

This module converts raw request payloads into engine inputs. The business
range for points (1 to 10) and the "player required" rule live here, at the
boundary, so the scoring engine itself only enforces structural validity.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models import PointType, ScoreEvent
from ..utils.constants import MAX_EVENT_POINTS, MIN_EVENT_POINTS
from .errors import InvalidPointValue, MissingPlayer, UnknownEntity
from .scoring_engine import coerce_point_type


@dataclass(frozen=True)
class EmptyRaidRequest:
    team_id: int
    raider_id: int


@dataclass(frozen=True)
class SubstitutionRequest:
    team_id: int
    player_in_id: int
    player_out_id: int


def _optional_id(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise UnknownEntity(f"Invalid {key}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise UnknownEntity(f"Invalid {key}: {value!r}") from None


def _required_id(data: Dict[str, Any], key: str, missing_error: type = UnknownEntity) -> int:
    value = _optional_id(data, key)
    if value is None:
        raise missing_error(f"{key} is required")
    return value


def parse_score_event(data: Dict[str, Any]) -> ScoreEvent:
    """
    Build a :class:`ScoreEvent` from a request payload.

    Args:
        data: Mapping with ``teamId``, ``pointType``, ``points`` and the
              optional ``playerId`` / ``raiderId``

    Returns:
        Validated ScoreEvent

    Raises:
        InvalidEventKind: If ``pointType`` is not recognised
        InvalidPointValue: If ``points`` is not an integer from 1 to 10
        MissingPlayer: If a player is required and missing
        UnknownEntity: If an id is not numeric
    """
    point_type = coerce_point_type(data.get("pointType"))
    team_id = _required_id(data, "teamId")

    if point_type is PointType.BONUS:
        points = 1
    else:
        raw = data.get("points")
        try:
            points = int(raw)
        except (TypeError, ValueError):
            raise InvalidPointValue(f"Points must be a number, got {raw!r}") from None
        if isinstance(raw, float) and raw != points:
            raise InvalidPointValue(f"Points must be a whole number, got {raw!r}")
        if points < MIN_EVENT_POINTS:
            raise InvalidPointValue(f"Points must be at least {MIN_EVENT_POINTS}.")
        if points > MAX_EVENT_POINTS:
            raise InvalidPointValue(f"Points cannot exceed {MAX_EVENT_POINTS}.")

    player_id = _optional_id(data, "playerId")
    if player_id is None and point_type is not PointType.LINE_OUT:
        raise MissingPlayer("Player selection is required for this point type.")

    return ScoreEvent(
        team_id=team_id,
        point_type=point_type,
        raw_points=points,
        player_id=player_id,
        raider_id=_optional_id(data, "raiderId"),
    )


def parse_empty_raid(data: Dict[str, Any]) -> EmptyRaidRequest:
    return EmptyRaidRequest(
        team_id=_required_id(data, "teamId"),
        raider_id=_required_id(data, "raiderId", MissingPlayer),
    )


def parse_substitution(data: Dict[str, Any]) -> SubstitutionRequest:
    return SubstitutionRequest(
        team_id=_required_id(data, "teamId"),
        player_in_id=_required_id(data, "playerInId", MissingPlayer),
        player_out_id=_required_id(data, "playerOutId", MissingPlayer),
    )
