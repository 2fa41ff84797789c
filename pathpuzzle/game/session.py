"""GameSession - Presentation-free game controller.

Ties together the level store, the level generator and the game state
machine. A front end (web page, terminal, notebook) calls these methods in
response to clicks and draws whatever the context holds:

- load_level(): restore the saved board for the current level or generate one
- select_node(): extend or backtrack the player path
- run_comparison() / finish_comparison(): compare against the cached optimum
- retry(), next_level(), full_reset(): level navigation

The optimal path always comes from the Level's cached solution; the session
only sums edge weights along the player's path.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pathpuzzle.constants import LevelConfig
from pathpuzzle.game.level_store import LevelStore
from pathpuzzle.game.state_machine import GameContext, GameStateMachine
from pathpuzzle.generators.level_generator import LevelGenerator
from pathpuzzle.model.level import Level

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonResult:
    """Player path versus optimal path.

    Attributes:
        user_distance: Sum of edge weights along the player path
        optimal_distance: Cached shortest distance of the level
        user_path: Player path (source to target)
        optimal_path: Cached shortest path of the level
    """

    user_distance: int
    optimal_distance: float
    user_path: tuple[int, ...]
    optimal_path: tuple[int, ...]

    @property
    def is_optimal(self) -> bool:
        """True if the player matched the shortest distance (the path itself may differ)."""
        return self.user_distance == self.optimal_distance

    @property
    def excess_distance(self) -> float:
        """How much longer the player path is than the optimum."""
        return self.user_distance - self.optimal_distance


class GameSession:
    """One player's game.

    Example:
        session = GameSession(store=LevelStore(path=save_file), generator=LevelGenerator.seeded(seed=1))
        session.load_level()
        session.select_node(node_id=3)
        if session.can_run():
            result = session.run_comparison()
            session.finish_comparison()
    """

    def __init__(
        self,
        store: Optional[LevelStore] = None,
        generator: Optional[LevelGenerator] = None,
        state_machine: Optional[GameStateMachine] = None,
    ) -> None:
        """Initialize session; the level number is read from the store.

        Args:
            store: Progress store (defaults to the file under output/)
            generator: Level generator (defaults to unseeded randomness)
            state_machine: Game state machine (defaults to a fresh one with logging)
        """
        self.store = store or LevelStore()
        self.generator = generator or LevelGenerator()
        if state_machine is None:
            state_machine, _ = GameStateMachine.create()
        self.sm = state_machine
        self.context.level_number = self.store.load_level_number()

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def context(self) -> GameContext:
        return self.sm.context

    @property
    def level(self) -> Level:
        """Current level.

        Raises:
            RuntimeError: If no level has been loaded yet.
        """
        if self.context.level is None:
            raise RuntimeError("No level loaded, call load_level() first")
        return self.context.level

    @property
    def path(self) -> list[int]:
        return list(self.context.path)

    @property
    def level_number(self) -> int:
        return self.context.level_number

    # =========================================================================
    # Level Navigation
    # =========================================================================

    def load_level(self) -> Level:
        """Show the board for the current level number.

        A saved board for the same level is restored as is; otherwise a new
        one is generated and saved.
        """
        level = self._restore_or_generate(number=self.context.level_number)
        self.sm.send("load_level", level=level)
        self.store.save_level_number(level=level.number)
        return level

    def retry(self) -> Level:
        """Replay the current level on the same board."""
        return self.load_level()

    def next_level(self) -> Level:
        """Advance to the next level with a freshly generated board.

        Raises:
            RuntimeError: If the current comparison has not finished.
        """
        if not self.sm.is_finished:
            raise RuntimeError(f"next_level called in state {self.sm.get_state_name()}, expected Finished")

        self.store.clear_saved_level()
        level = self._restore_or_generate(number=self.context.level_number + 1)
        self.sm.send("next_level", level=level)
        self.store.save_level_number(level=level.number)
        return level

    def full_reset(self) -> Level:
        """Forget all progress and start over at the first level with a new board.

        Raises:
            RuntimeError: If a comparison is running.
        """
        if self.sm.is_running:
            raise RuntimeError("full_reset called while a comparison is running")

        self.store.reset()
        self.context.level_number = LevelConfig.FIRST_LEVEL
        return self.load_level()

    def _restore_or_generate(self, number: int) -> Level:
        saved = self.store.load_saved_level()
        if saved is not None and saved.number == number:
            logger.info(f"Restored saved board for level {number}")
            return saved

        level = self.generator.generate(level=number)
        self.store.save_level(level=level)
        return level

    # =========================================================================
    # Path Building
    # =========================================================================

    def select_node(self, node_id: int) -> bool:
        """Handle a click on a node.

        Clicking the last node of the path removes it (the source always
        stays). Clicking a neighbour of the last node that is not yet on the
        path appends it. Anything else is ignored, as are clicks outside IDLE.

        Returns:
            True if the player path changed.
        """
        if not self.sm.is_idle or self.context.level is None:
            return False

        path = self.context.path
        last = path[-1]

        if node_id == last and len(path) > 1:
            path.pop()
            return True

        if node_id not in path and self.level.graph.has_edge(a=last, b=node_id):
            path.append(node_id)
            return True

        return False

    def reset_selection(self) -> bool:
        """Put the player back on the source (not while a comparison runs)."""
        if self.sm.is_running or self.context.level is None:
            return False
        self.context.reset_path()
        return True

    def user_distance(self) -> int:
        """Cost of the player path so far."""
        return self.level.graph.path_cost(path=self.context.path)

    def can_run(self) -> bool:
        """True if the comparison may start (idle and the path reached the target)."""
        return self.sm.is_idle and self.sm.path_reaches_target()

    # =========================================================================
    # Comparison
    # =========================================================================

    def run_comparison(self) -> ComparisonResult:
        """Start comparing the player path with the cached optimum.

        Raises:
            TransitionNotAllowed: If not idle or the path does not end at the target.
        """
        level = self.level
        result = ComparisonResult(
            user_distance=self.user_distance(),
            optimal_distance=level.optimal_distance,
            user_path=tuple(self.context.path),
            optimal_path=level.optimal_path,
        )
        self.sm.send("run_comparison", result=result)
        logger.info(
            f"Level {level.number}: player {result.user_distance} vs optimal {result.optimal_distance} "
            f"({'optimal' if result.is_optimal else 'suboptimal'})"
        )
        return result

    def finish_comparison(self) -> ComparisonResult:
        """Mark the comparison as done (after the front end finished animating)."""
        self.sm.send("finish_comparison")
        return self.context.result
