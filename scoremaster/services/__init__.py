"""
Services package for the Kabaddi Score Master.

This package contains the scoring rules, clock, substitution, commentary and
export services, plus the match session that coordinates them.
"""
from .errors import (
    MatchError, ScoringError, InvalidEventKind, UnknownEntity, InvalidPointValue,
    MissingPlayer, SubstitutionError, SubstitutionWindowClosed, SubstitutionQuotaExceeded,
    InvalidSubstitution, ClockError, TimeoutUnavailable, ClockConfigurationError,
    InvalidPlayDescription, CommentaryGenerationFailure,
)
from .scoring_engine import apply_score_event, apply_empty_raid, ScoreOutcome, EmptyRaidOutcome
from .substitution_service import substitute
from .clock_service import ClockTick, ClockTicker
from .commentary_service import (
    CommentaryRequest, CommentaryClient, HttpCommentaryClient, CommentaryService, FoulPlayAnalysis
)
from .export_service import MatchReportExporter, build_match_report
from .match_commands import MatchCommandManager
from .match_session import MatchSession
from .service_factory import ServiceFactory

__all__ = [
    "MatchError", "ScoringError", "InvalidEventKind", "UnknownEntity", "InvalidPointValue",
    "MissingPlayer", "SubstitutionError", "SubstitutionWindowClosed", "SubstitutionQuotaExceeded",
    "InvalidSubstitution", "ClockError", "TimeoutUnavailable", "ClockConfigurationError",
    "InvalidPlayDescription", "CommentaryGenerationFailure",
    "apply_score_event", "apply_empty_raid", "ScoreOutcome", "EmptyRaidOutcome",
    "substitute", "ClockTick", "ClockTicker",
    "CommentaryRequest", "CommentaryClient", "HttpCommentaryClient", "CommentaryService",
    "FoulPlayAnalysis", "MatchReportExporter", "build_match_report",
    "MatchCommandManager", "MatchSession", "ServiceFactory",
]
