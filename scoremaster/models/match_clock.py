"""MatchClock model: the countdown state of the current half."""
from dataclasses import dataclass
from typing import Any, Dict

from ..utils import fmt_mmss
from ..utils.constants import DEFAULT_HALF_DURATION_MIN, HALF_COUNT


@dataclass(frozen=True)
class MatchClock:
    """
    Countdown clock for a two-half match.

    Attributes:
        minutes: Minutes remaining in the current half
        seconds: Seconds remaining in the current minute
        half: Current half (1 or 2)
        is_running: True while the countdown is ticking
        is_timeout: True while a team timeout is in progress
        half_duration_minutes: Configured length of each half
        started: True once the clock has been started for the first time
    """
    minutes: int = DEFAULT_HALF_DURATION_MIN
    seconds: int = 0
    half: int = 1
    is_running: bool = False
    is_timeout: bool = False
    half_duration_minutes: int = DEFAULT_HALF_DURATION_MIN
    started: bool = False

    @property
    def remaining_seconds(self) -> int:
        return self.minutes * 60 + self.seconds

    @property
    def is_expired(self) -> bool:
        return self.remaining_seconds == 0

    @property
    def is_half_break(self) -> bool:
        return self.half == 1 and self.is_expired and not self.is_running

    @property
    def is_match_over(self) -> bool:
        return self.half == HALF_COUNT and self.is_expired

    def display(self) -> str:
        """Remaining time in the current half as ``MM:SS``."""
        return fmt_mmss(self.remaining_seconds)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minutes": self.minutes,
            "seconds": self.seconds,
            "half": self.half,
            "is_running": self.is_running,
            "is_timeout": self.is_timeout,
            "half_duration_minutes": self.half_duration_minutes,
            "started": self.started,
            "display": self.display(),
            "is_half_break": self.is_half_break,
            "is_match_over": self.is_match_over,
        }
