"""Shared pytest fixtures for pathpuzzle workflow tests.

Provides a small hand-built level with a known optimum and a session wired
to a temporary save file, so workflows never depend on random boards.

BOARD (5 nodes, source A=0, target E=4):
    A -2- B -2- E        optimal: A B E = 4
    A -1- C -1- D -5- E  detour:  A C D E = 7
"""

from pathlib import Path

import pytest

from pathpuzzle.game.level_store import LevelStore
from pathpuzzle.game.session import GameSession
from pathpuzzle.game.state_machine import GameContext, GameStateMachine
from pathpuzzle.generators.level_generator import LevelGenerator
from pathpuzzle.model.level import Level
from pathpuzzle.model.puzzle_graph import PuzzleGraph

BOARD_EDGES = [(0, 1, 2), (1, 4, 2), (0, 2, 1), (2, 3, 1), (3, 4, 5)]


def build_board(number: int = 1) -> Level:
    """Hand-built level; the solution is computed once like the generator does."""
    graph = PuzzleGraph()
    positions = [(150.0, 300.0), (400.0, 200.0), (250.0, 450.0), (450.0, 450.0), (650.0, 300.0)]
    for node_id, (x, y) in enumerate(positions):
        graph.add_node(node_id=node_id, x=x, y=y, label=chr(ord("A") + node_id))
    for from_id, to_id, weight in BOARD_EDGES:
        graph.add_edge(from_id=from_id, to_id=to_id, weight=weight)
    return Level(
        number=number,
        graph=graph,
        source_id=0,
        target_id=4,
        solution=graph.dijkstra(start_id=0, end_id=4),
    )


@pytest.fixture
def board() -> Level:
    return build_board()


@pytest.fixture
def save_path(tmp_path: Path) -> Path:
    return tmp_path / "save" / "save.json"


@pytest.fixture
def store(save_path: Path, board: Level) -> LevelStore:
    """Store that already holds the hand-built board as the level 1 save."""
    level_store = LevelStore(path=save_path)
    level_store.save_level_number(level=board.number)
    level_store.save_level(level=board)
    return level_store


@pytest.fixture
def session(store: LevelStore) -> GameSession:
    """Session on the hand-built board, in IDLE with the player on the source."""
    sm, _ = GameStateMachine.create(add_log_listener=False)
    game = GameSession(store=store, generator=LevelGenerator.seeded(seed=11), state_machine=sm)
    game.load_level()
    return game


@pytest.fixture
def sm_and_ctx() -> tuple[GameStateMachine, GameContext]:
    """Fresh state machine without a level."""
    return GameStateMachine.create(add_log_listener=False)


@pytest.fixture
def board_factory():
    """Factory fixture exposing build_board to tests."""
    return build_board
