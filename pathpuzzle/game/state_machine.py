"""State machine for the puzzle game flow.

Uses python-statemachine with the model pattern: GameContext holds all
mutable game state and the machine only decides which events are allowed.

States:
    IDLE: Player builds a path from the source (initial)
    RUNNING: Player path and optimal path are being compared/animated
    FINISHED: Result is shown, waiting for retry or next level

Transitions:
    IDLE -> RUNNING: run_comparison (guard: player path ends at the target)
    RUNNING -> FINISHED: finish_comparison
    IDLE -> IDLE, FINISHED -> IDLE: load_level (new or restored board)
    FINISHED -> IDLE: next_level

Node clicks and selection resets are context updates, not transitions;
GameSession only applies them while the machine is IDLE.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from pathpuzzle.constants import LevelConfig

if TYPE_CHECKING:
    from pathpuzzle.game.session import ComparisonResult
    from pathpuzzle.model.level import Level

logger = logging.getLogger(__name__)


@dataclass
class GameContext:
    """Shared model for the state machine.

    Attributes:
        state: Managed by python-statemachine (current state value)
        level_number: Level being played
        level: Current board, None until the first load
        path: Player path, always starting at the source once a level is loaded
        result: Outcome of the last comparison, None while building
    """

    state: str | None = None
    level_number: int = LevelConfig.FIRST_LEVEL
    level: Level | None = None
    path: list[int] = field(default_factory=list)
    result: ComparisonResult | None = None

    @property
    def last_node(self) -> int | None:
        return self.path[-1] if self.path else None

    def reset_path(self) -> None:
        """Put the player back on the source node."""
        self.path = [self.level.source_id] if self.level is not None else []

    def __repr__(self) -> str:
        return f"GameContext(state={self.state}, level={self.level_number}, path={self.path})"


class TransitionLogListener:
    """Listener that logs every state transition."""

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.info(f"[STATE] {source.name} --({event})--> {target.name}")


class GameStateMachine(StateMachine):
    """State machine for the puzzle game workflow.

    See module docstring for the transition table.
    """

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    idle = State("Idle", initial=True)
    running = State("Running")
    finished = State("Finished")

    # ==========================================================================
    # Transitions
    # ==========================================================================

    run_comparison = idle.to(running, cond="path_reaches_target")
    finish_comparison = running.to(finished)
    load_level = idle.to(idle) | finished.to(idle)
    next_level = finished.to(idle)

    # ==========================================================================
    # Guards (Conditions)
    # ==========================================================================

    def path_reaches_target(self) -> bool:
        """Guard: player path ends on the target node."""
        level = self.context.level
        return level is not None and self.context.last_node == level.target_id

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_idle(self) -> bool:
        return self.idle.is_active

    @property
    def is_running(self) -> bool:
        return self.running.is_active

    @property
    def is_finished(self) -> bool:
        return self.finished.is_active

    # ==========================================================================
    # Transition Actions (before_* hooks)
    # ==========================================================================

    def before_load_level(self, level: Level) -> None:
        """Install a board and put the player on its source."""
        self._install_level(level=level)

    def before_next_level(self, level: Level) -> None:
        self._install_level(level=level)

    def before_run_comparison(self, result: ComparisonResult) -> None:
        self.context.result = result

    def _install_level(self, level: Level) -> None:
        self.context.level = level
        self.context.level_number = level.number
        self.context.result = None
        self.context.reset_path()

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: GameContext | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        model = context or GameContext()
        super().__init__(model=model, start_value=start_value)

    # ==========================================================================
    # Utility Methods
    # ==========================================================================

    @property
    def context(self) -> GameContext:
        """Alias for model."""
        return self.model

    def get_state_name(self) -> str:
        return self.states_map[self.current_state_value].name

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure.

        Args:
            event: Transition event name
            **kwargs: Arguments for transition hooks

        Returns:
            True if transition succeeded, False otherwise.
        """
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False

    def __repr__(self) -> str:
        return f"GameStateMachine(state={self.get_state_name()}, model={self.context!r})"

    @staticmethod
    def create(add_log_listener: bool = True) -> tuple["GameStateMachine", GameContext]:
        """Factory method to create state machine with context.

        Args:
            add_log_listener: If True, transitions are logged via TransitionLogListener.

        Returns:
            Tuple of (GameStateMachine, GameContext)
        """
        context = GameContext()
        sm = GameStateMachine(context=context)
        if add_log_listener:
            sm.add_listener(TransitionLogListener())
        return sm, context
