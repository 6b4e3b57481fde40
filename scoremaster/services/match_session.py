"""
Match session for the Kabaddi Score Master.

A :class:`MatchSession` owns the only mutable references in the application:
the current :class:`MatchState`, the :class:`MatchClock`, the command history
and the commentary log. Every operator action and every clock tick goes
through the session lock, so exactly one transition is applied at a time.
"""
import logging
import threading
from dataclasses import replace
from typing import Any, Dict, Optional

from ..models import MatchClock, MatchReport, MatchState, ScoreEvent, opponent_of
from ..utils.constants import TIMEOUTS_PER_HALF
from . import clock_service, raid_cycle
from .clock_service import ClockTicker
from .commentary_service import CommentaryService, FoulPlayAnalysis
from .errors import TimeoutUnavailable, UnknownEntity
from .export_service import ExportServiceInterface, MatchReportExporter, build_match_report
from .match_commands import (
    EmptyRaidCommand, MatchCommandManager, RenamePlayerCommand, ScoreEventCommand,
    SubstitutionCommand, UpdateTeamCommand,
)
from .scoring_engine import EmptyRaidOutcome, ScoreOutcome

logger = logging.getLogger(__name__)


class MatchSession:
    """
    Single in-memory match.

    Responsibilities:
    - Serialise scoring, substitution and clock transitions
    - Open substitution windows when a break starts
    - Forward event summaries to the commentary service
    - Produce scoreboard snapshots and exports
    """

    def __init__(
        self,
        commentary_service: CommentaryService,
        exporter: Optional[ExportServiceInterface] = None,
        tick_interval: float = 1.0,
    ) -> None:
        self._lock = threading.RLock()
        self.state = MatchState()
        self.clock = MatchClock()
        self.commentary = commentary_service
        self.exporter = exporter or MatchReportExporter()
        self.commands = MatchCommandManager()
        self.ticker = ClockTicker(self.tick, interval=tick_interval)

    # ---------------------------------------------------------
    # Scoring
    # ---------------------------------------------------------

    def add_score(self, event: ScoreEvent) -> ScoreOutcome:
        """Apply a scoring event and queue commentary for it."""
        with self._lock:
            command = ScoreEventCommand(self, event)
            self.commands.execute_command(command)
            # Queued under the lock so commentary follows the order events were applied
            self.commentary.submit(command.outcome.summary, self.clock.display())
        return command.outcome

    def declare_empty_raid(self, team_id: int, raider_id: int) -> EmptyRaidOutcome:
        """Register an empty raid and queue commentary for it."""
        with self._lock:
            command = EmptyRaidCommand(self, team_id, raider_id)
            self.commands.execute_command(command)
            # Queued under the lock so commentary follows the order events were applied
            self.commentary.submit(command.outcome.summary, self.clock.display())
        return command.outcome

    def substitute(self, team_id: int, player_in_id: int, player_out_id: int) -> MatchState:
        with self._lock:
            command = SubstitutionCommand(
                self, team_id, player_in_id, player_out_id,
                is_break_active=lambda: clock_service.is_break_active(self.clock),
            )
            self.commands.execute_command(command)
            return self.state

    # ---------------------------------------------------------
    # Team and player details
    # ---------------------------------------------------------

    def update_team(self, team_id: int, name: Optional[str] = None,
                    coach: Optional[str] = None, city: Optional[str] = None) -> MatchState:
        with self._lock:
            self.commands.execute_command(UpdateTeamCommand(self, team_id, name=name, coach=coach, city=city))
            return self.state

    def rename_player(self, team_id: int, player_id: int, name: str) -> MatchState:
        with self._lock:
            self.commands.execute_command(RenamePlayerCommand(self, team_id, player_id, name))
            return self.state

    def undo(self) -> bool:
        with self._lock:
            return self.commands.undo()

    def redo(self) -> bool:
        with self._lock:
            return self.commands.redo()

    # ---------------------------------------------------------
    # Clock
    # ---------------------------------------------------------

    @property
    def is_break_active(self) -> bool:
        with self._lock:
            return clock_service.is_break_active(self.clock)

    def toggle_clock(self) -> MatchClock:
        """Start, pause, resume after a timeout, or start the second half."""
        with self._lock:
            previous = self.clock
            self.clock = clock_service.toggle(previous)
            if self.clock.half != previous.half:
                self._start_new_half()
            clock = self.clock
        self._sync_ticker()
        return clock

    def take_timeout(self, team_id: int) -> MatchClock:
        """
        Call a team timeout.

        Raises:
            UnknownEntity: If the team does not exist
            TimeoutUnavailable: If the team has none left or the clock is not running
        """
        with self._lock:
            if isinstance(team_id, bool) or not self.state.has_team(team_id):
                raise UnknownEntity(f"Unknown team: {team_id!r}")
            team = self.state.team(team_id)
            if team.remaining_timeouts <= 0:
                raise TimeoutUnavailable(f"{team.name} has no timeouts left this half")
            self.clock = clock_service.start_timeout(self.clock)
            self.state = self.state.with_team(
                replace(team, remaining_timeouts=team.remaining_timeouts - 1)
            ).bumped(substitutions=self.state.substitutions.reset())
            self.commands.clear_history()
            logger.info("Timeout called by %s", team.name)
            clock = self.clock
        self._sync_ticker()
        return clock

    def tick(self) -> MatchClock:
        """Advance the clock by one second; called by the ticker thread."""
        with self._lock:
            result = clock_service.tick(self.clock)
            self.clock = result.clock
            if result.half_ended:
                # The half break is a new substitution window.
                self.state = self.state.bumped(substitutions=self.state.substitutions.reset())
                self.commands.clear_history()
            clock = self.clock
        if result.half_ended or result.match_ended:
            self._sync_ticker()
        return clock

    def set_half_duration(self, minutes: int) -> MatchClock:
        with self._lock:
            self.clock = clock_service.set_half_duration(self.clock, minutes)
            return self.clock

    def reset(self) -> None:
        """Start over with fresh squads, clock and commentary log."""
        self.ticker.stop()
        with self._lock:
            self.state = MatchState()
            self.clock = clock_service.reset(self.clock)
            self.commands.clear_history()
            self.commentary.reset()
        logger.info("Match reset")

    def shutdown(self) -> None:
        self.ticker.stop()
        self.commentary.shutdown(wait=False)

    def _start_new_half(self) -> None:
        teams = tuple(replace(team, remaining_timeouts=TIMEOUTS_PER_HALF) for team in self.state.teams)
        self.state = self.state.bumped(teams=teams, substitutions=self.state.substitutions.reset())
        self.commands.clear_history()
        logger.info("Half %d started", self.clock.half)

    def _sync_ticker(self) -> None:
        with self._lock:
            should_run = self.clock.is_running
        if should_run:
            self.ticker.start()
        else:
            self.ticker.stop()

    # ---------------------------------------------------------
    # Commentary, snapshots and exports
    # ---------------------------------------------------------

    def analyze_foul_play(self, description: str) -> FoulPlayAnalysis:
        return self.commentary.analyze_foul_play(description)

    def snapshot(self) -> Dict[str, Any]:
        """Return a JSON-ready view of the scoreboard."""
        with self._lock:
            state = self.state
            clock = self.clock
            snapshot = state.to_json()
            for team, data in zip(state.teams, snapshot["teams"]):
                empty_raids = state.raid_cycle.count_for(team.id)
                data["empty_raid_count"] = empty_raids
                data["is_do_or_die"] = raid_cycle.is_do_or_die(state.raid_cycle, team.id)
                data["is_raiding"] = state.raiding_team_id == team.id
                data["substitutions_used"] = state.substitutions.used_by(team.id)
            snapshot.update({
                "defending_team_id": opponent_of(state.raiding_team_id),
                "clock": clock.to_dict(),
                "is_break_active": clock_service.is_break_active(clock),
                "is_match_pristine": not clock.started and state.version == 0,
                "can_undo": self.commands.can_undo(),
                "can_redo": self.commands.can_redo(),
                "commentary": self.commentary.log,
                "commentary_busy": self.commentary.is_busy,
            })
            return snapshot

    def report(self) -> MatchReport:
        with self._lock:
            return build_match_report(self.state, self.commentary.log, self.clock)

    def export_stats_csv(self) -> str:
        return self.exporter.export_stats_csv(self.report())

    def export_commentary_document(self) -> str:
        return self.exporter.export_commentary_document(self.report())
