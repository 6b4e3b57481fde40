"""
Exception hierarchy for the Kabaddi Score Master services.

Every engine-level error is raised before any state is replaced, so catching
one of these always means the match state is unchanged.
"""


class MatchError(Exception):
    """Base class for errors the operator can correct and resubmit."""
    pass


class ScoringError(MatchError):
    """Base class for rejected scoring events."""
    pass


class InvalidEventKind(ScoringError):
    """Raised for an unrecognised point type."""
    pass


class UnknownEntity(ScoringError):
    """Raised when a team or player id is not part of the roster."""
    pass


class InvalidPointValue(ScoringError):
    """Raised when the raw points of an event are not usable."""
    pass


class MissingPlayer(ScoringError):
    """Raised when a point type needs a player and none was given."""
    pass


class SubstitutionError(MatchError):
    """Base class for rejected substitutions."""
    pass


class SubstitutionWindowClosed(SubstitutionError):
    pass


class SubstitutionQuotaExceeded(SubstitutionError):
    pass


class InvalidSubstitution(SubstitutionError):
    """Raised when the pair is not one benched player in and one active player out."""
    pass


class ClockError(MatchError):
    """Base class for rejected clock actions."""
    pass


class TimeoutUnavailable(ClockError):
    pass


class ClockConfigurationError(ClockError):
    pass


class CommentaryGenerationFailure(Exception):
    """Raised by commentary clients; never propagates into scoring."""
    pass


class InvalidPlayDescription(MatchError):
    pass
