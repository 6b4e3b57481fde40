"""Clock service for the Kabaddi Score Master application."""

import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable, Optional

from ..models import MatchClock
from ..utils.constants import (
    HALF_COUNT, MAX_HALF_DURATION_MIN, MIN_HALF_DURATION_MIN,
)
from .errors import ClockConfigurationError, TimeoutUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockTick:
    """Result of a single one-second tick."""
    clock: MatchClock
    half_ended: bool = False
    match_ended: bool = False


# ------------------------------------------------------------------
# Configuration helpers
# ------------------------------------------------------------------
def set_half_duration(clock: MatchClock, minutes: int) -> MatchClock:
    """Configure the length of each half.

    Raises:
        ClockConfigurationError: If the match has already started or the
                                 duration is out of range.
    """

    if clock.started:
        raise ClockConfigurationError("Cannot change the half duration after the match has started")
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise ClockConfigurationError("Half duration must be a whole number of minutes")
    if not MIN_HALF_DURATION_MIN <= minutes <= MAX_HALF_DURATION_MIN:
        raise ClockConfigurationError(
            f"Half duration must be between {MIN_HALF_DURATION_MIN} and {MAX_HALF_DURATION_MIN} minutes"
        )
    return replace(clock, minutes=minutes, seconds=0, half_duration_minutes=minutes)


# ------------------------------------------------------------------
# Core clock controls
# ------------------------------------------------------------------
def tick(clock: MatchClock) -> ClockTick:
    """Advance the countdown by one second.

    A stopped clock is returned unchanged. Reaching 00:00 stops the clock: in
    the first half this opens the half break, in the second it ends the match.
    """

    if not clock.is_running:
        return ClockTick(clock)

    remaining = clock.remaining_seconds - 1
    if remaining <= 0:
        stopped = replace(clock, minutes=0, seconds=0, is_running=False)
        if clock.half < HALF_COUNT:
            logger.info("Half %d over", clock.half)
            return ClockTick(stopped, half_ended=True)
        logger.info("Match over")
        return ClockTick(stopped, match_ended=True)

    minutes, seconds = divmod(remaining, 60)
    return ClockTick(replace(clock, minutes=minutes, seconds=seconds))


def toggle(clock: MatchClock) -> MatchClock:
    """Start, pause or resume the clock depending on where the match is."""

    if clock.is_match_over:
        return clock
    if clock.is_timeout:
        return replace(clock, is_timeout=False, is_running=True)
    if clock.is_half_break:
        return replace(
            clock,
            half=clock.half + 1,
            minutes=clock.half_duration_minutes,
            seconds=0,
            is_running=True,
        )
    return replace(clock, is_running=not clock.is_running, started=True)


def start_timeout(clock: MatchClock) -> MatchClock:
    """Pause the countdown for a team timeout.

    Raises:
        TimeoutUnavailable: If the clock is not running or a timeout is already active.
    """

    if clock.is_timeout:
        raise TimeoutUnavailable("A timeout is already in progress")
    if not clock.is_running:
        raise TimeoutUnavailable("Timeouts can only be taken while the clock is running")
    return replace(clock, is_running=False, is_timeout=True)


def reset(clock: MatchClock) -> MatchClock:
    """Return a fresh clock keeping the configured half duration."""

    return MatchClock(
        minutes=clock.half_duration_minutes,
        half_duration_minutes=clock.half_duration_minutes,
    )


# ------------------------------------------------------------------
# Query helpers
# ------------------------------------------------------------------
def is_break_active(clock: MatchClock) -> bool:
    """Return True during a timeout or the half break."""

    return clock.is_timeout or clock.is_half_break


def is_match_over(clock: MatchClock) -> bool:
    return clock.is_match_over


class ClockTicker:
    """
    Calls ``on_tick`` once per interval on a background thread while started.

    ``stop()`` waits for the thread to finish, so no callback runs after it
    returns (unless it is called from inside the callback itself).
    """

    def __init__(self, on_tick: Callable[[], None], interval: float = 1.0):
        self.on_tick = on_tick
        self.interval = interval
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), name="match-clock", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            try:
                self.on_tick()
            except Exception:
                logger.exception("Clock tick failed")
