"""Game flow on top of the puzzle engine.

- GameStateMachine: IDLE / RUNNING / FINISHED workflow (python-statemachine)
- GameContext: Mutable game state used as the state machine model
- GameSession: Level navigation, path building and comparison
- LevelStore: JSON save file for level number and current board
"""

from pathpuzzle.game.level_store import LevelStore
from pathpuzzle.game.session import ComparisonResult, GameSession
from pathpuzzle.game.state_machine import GameContext, GameStateMachine, TransitionLogListener

__all__ = [
    "GameStateMachine",
    "GameContext",
    "TransitionLogListener",
    "GameSession",
    "ComparisonResult",
    "LevelStore",
]
