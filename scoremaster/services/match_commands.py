"""
Command pattern implementation for match actions.

This module provides undoable commands for every operator action that changes
the scoring state. Because :class:`MatchState` is immutable, a command only
needs to remember the state it replaced to be able to undo itself.
"""
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable, List, Optional, Protocol

from ..models import MatchState, ScoreEvent
from ..utils.constants import MAX_COMMAND_HISTORY
from . import scoring_engine, substitution_service
from .errors import UnknownEntity
from .scoring_engine import EmptyRaidOutcome, ScoreOutcome


class StateHolder(Protocol):
    """Anything that owns the current match state."""
    state: MatchState


class Command(ABC):
    """Abstract base class for all match commands - Command pattern."""

    @abstractmethod
    def execute(self) -> bool:
        """
        Execute the command.

        Returns:
            True if command executed successfully

        Raises:
            MatchError: If the action is rejected; the state is unchanged
        """
        pass

    @abstractmethod
    def undo(self) -> bool:
        """
        Undo the command.

        Returns:
            True if command undone successfully, False otherwise
        """
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Get human-readable description of the command."""
        pass


class StateTransitionCommand(Command):
    """Base for commands that replace the holder's state with a computed one."""

    def __init__(self, holder: StateHolder):
        self.holder = holder
        self._previous_state: Optional[MatchState] = None
        self._produced_version: Optional[int] = None

    @abstractmethod
    def transition(self, state: MatchState) -> MatchState:
        """Compute the new state from ``state``."""
        pass

    def execute(self) -> bool:
        previous = self.holder.state
        new_state = self.transition(previous)
        self._previous_state = previous
        self._produced_version = new_state.version
        self.holder.state = new_state
        return True

    def undo(self) -> bool:
        if self._previous_state is None:
            return False
        # Only undo if nothing else has changed the state since this command ran
        if self.holder.state.version != self._produced_version:
            return False
        self.holder.state = self._previous_state
        return True


class ScoreEventCommand(StateTransitionCommand):
    """Command to apply a scoring event."""

    def __init__(self, holder: StateHolder, event: ScoreEvent):
        super().__init__(holder)
        self.event = event
        self.outcome: Optional[ScoreOutcome] = None

    def transition(self, state: MatchState) -> MatchState:
        self.outcome = scoring_engine.apply_score_event(state, self.event)
        return self.outcome.state

    @property
    def description(self) -> str:
        point_type = getattr(self.event.point_type, "value", self.event.point_type)
        return f"{point_type} for team {self.event.team_id} ({self.event.raw_points})"


class EmptyRaidCommand(StateTransitionCommand):
    """Command to register an empty raid."""

    def __init__(self, holder: StateHolder, team_id: int, raider_id: int):
        super().__init__(holder)
        self.team_id = team_id
        self.raider_id = raider_id
        self.outcome: Optional[EmptyRaidOutcome] = None

    def transition(self, state: MatchState) -> MatchState:
        self.outcome = scoring_engine.apply_empty_raid(state, self.team_id, self.raider_id)
        return self.outcome.state

    @property
    def description(self) -> str:
        return f"Empty raid by team {self.team_id}"


class SubstitutionCommand(StateTransitionCommand):
    """Command to substitute players."""

    def __init__(
        self,
        holder: StateHolder,
        team_id: int,
        player_in_id: int,
        player_out_id: int,
        is_break_active: Callable[[], bool],
    ):
        super().__init__(holder)
        self.team_id = team_id
        self.player_in_id = player_in_id
        self.player_out_id = player_out_id
        self.is_break_active = is_break_active

    def transition(self, state: MatchState) -> MatchState:
        return substitution_service.substitute(
            state, self.team_id, self.player_in_id, self.player_out_id, self.is_break_active()
        )

    def undo(self) -> bool:
        # Reversing a swap is itself a substitution and needs an open window
        if not self.is_break_active():
            return False
        return super().undo()

    @property
    def description(self) -> str:
        return f"Substitute {self.player_out_id} → {self.player_in_id}"


class UpdateTeamCommand(StateTransitionCommand):
    """Command to edit a team's name, coach or city. Blank values are ignored."""

    def __init__(self, holder: StateHolder, team_id: int, name: Optional[str] = None,
                 coach: Optional[str] = None, city: Optional[str] = None):
        super().__init__(holder)
        self.team_id = team_id
        self.changes = {
            key: value.strip()
            for key, value in (("name", name), ("coach", coach), ("city", city))
            if isinstance(value, str) and value.strip()
        }

    def transition(self, state: MatchState) -> MatchState:
        if isinstance(self.team_id, bool) or not state.has_team(self.team_id):
            raise UnknownEntity(f"Unknown team: {self.team_id!r}")
        return state.with_team(replace(state.team(self.team_id), **self.changes)).bumped()

    @property
    def description(self) -> str:
        return f"Edit team {self.team_id}"


class RenamePlayerCommand(StateTransitionCommand):
    """Command to change a player's display name."""

    def __init__(self, holder: StateHolder, team_id: int, player_id: int, name: str):
        super().__init__(holder)
        self.team_id = team_id
        self.player_id = player_id
        self.name = (name or "").strip()

    def transition(self, state: MatchState) -> MatchState:
        if isinstance(self.team_id, bool) or not state.has_team(self.team_id):
            raise UnknownEntity(f"Unknown team: {self.team_id!r}")
        team = state.team(self.team_id)
        player = team.find_player(self.player_id)
        if player is None:
            raise UnknownEntity(f"Player {self.player_id!r} is not in {team.name}")
        if not self.name:
            return state
        return state.with_team(team.with_player(player.renamed(self.name))).bumped()

    @property
    def description(self) -> str:
        return f"Rename player {self.player_id}"


class MatchCommandManager:
    """
    Manager for executing and tracking match commands with undo/redo support.

    Follows Command pattern and provides clean interface for match actions.
    """

    def __init__(self, max_history: int = MAX_COMMAND_HISTORY):
        """
        Initialize command manager.

        Args:
            max_history: Maximum number of commands to keep in history
        """
        self.max_history = max_history
        self._command_history: List[Command] = []
        self._current_index = -1

    def execute_command(self, command: Command) -> bool:
        """
        Execute a command and add it to history.

        Args:
            command: Command to execute

        Returns:
            True if command executed successfully
        """
        success = command.execute()

        if success:
            # Remove any commands after current index (for redo functionality)
            self._command_history = self._command_history[:self._current_index + 1]

            self._command_history.append(command)
            self._current_index += 1

            if len(self._command_history) > self.max_history:
                self._command_history.pop(0)
                self._current_index -= 1

        return success

    def undo(self) -> bool:
        """
        Undo the last command.

        Returns:
            True if undo was successful
        """
        if not self.can_undo():
            return False

        command = self._command_history[self._current_index]
        success = command.undo()

        if success:
            self._current_index -= 1

        return success

    def redo(self) -> bool:
        """
        Redo the next command.

        Returns:
            True if redo was successful

        Raises:
            MatchError: If the command is no longer valid against the current state
        """
        if not self.can_redo():
            return False

        command = self._command_history[self._current_index + 1]
        success = command.execute()

        if success:
            self._current_index += 1

        return success

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self._current_index >= 0

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self._current_index < len(self._command_history) - 1

    def get_command_history(self) -> List[str]:
        """Get history of command descriptions."""
        return [cmd.description for cmd in self._command_history]

    def clear_history(self) -> None:
        """Clear command history."""
        self._command_history.clear()
        self._current_index = -1
