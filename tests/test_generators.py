"""Unit tests for level generation.

Tests difficulty parameters, grid layout, and the invariants every generated
level must satisfy (cached solution, nearest-neighbour wiring, weights).
"""

import math
import random

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from pathpuzzle.constants import LayoutConfig, LevelConfig, WeightConfig
from pathpuzzle.core.geometry import PlaneCalculator
from pathpuzzle.generators.layout import GridLayout, GridShape
from pathpuzzle.generators.level_generator import GenerationError, LevelGenerator, LevelParameters


class TestLevelParameters:
    """Tests for difficulty scaling."""

    @pytest.mark.parametrize(
        "level,node_count,min_path_nodes,allow_direct_edge",
        [
            (1, 4, 2, True),
            (2, 6, 2, False),
            (3, 7, 2, False),
            (4, 9, 3, False),
            (8, 15, 4, False),
            (15, 25, 5, False),
            (16, 26, 6, False),
            (20, 26, 7, False),
            (100, 26, 25, False),
        ],
    )
    def test_for_level(self, level: int, node_count: int, min_path_nodes: int, allow_direct_edge: bool) -> None:
        params = LevelParameters.for_level(level=level)

        assert params.node_count == node_count
        assert params.min_path_nodes == min_path_nodes
        assert params.allow_direct_edge is allow_direct_edge
        assert params.source_id == 0
        assert params.target_id == node_count - 1

    @pytest.mark.parametrize("level", [0, -3])
    def test_invalid_level_raises(self, level: int) -> None:
        with pytest.raises(ValueError, match="Level must be"):
            LevelParameters.for_level(level=level)


class TestGridLayout:
    """Tests for jittered grid placement."""

    @pytest.mark.parametrize(
        "node_count,cols,rows",
        [(1, 2, 1), (4, 3, 2), (9, 4, 3), (26, 6, 5)],
    )
    def test_grid_shape(self, node_count: int, cols: int, rows: int) -> None:
        shape = GridShape.for_node_count(node_count=node_count)

        assert (shape.cols, shape.rows) == (cols, rows)
        assert shape.cols * shape.rows >= node_count
        assert shape.cell_width == (LayoutConfig.WIDTH - 2 * LayoutConfig.PADDING) / cols

    def test_grid_shape_rejects_empty(self) -> None:
        with pytest.raises(ValueError):
            GridShape.for_node_count(node_count=0)

    @given(node_count=st.integers(min_value=1, max_value=LevelConfig.MAX_NODES), seed=st.integers(0, 10_000))
    @settings(max_examples=60, deadline=None)
    def test_positions_inside_padded_board(self, node_count: int, seed: int) -> None:
        positions = GridLayout(random_source=random.Random(seed).random).place(node_count=node_count)

        assert positions.shape == (node_count, 2)
        assert np.all(positions[:, 0] > LayoutConfig.PADDING)
        assert np.all(positions[:, 0] < LayoutConfig.WIDTH - LayoutConfig.PADDING)
        assert np.all(positions[:, 1] > LayoutConfig.PADDING)
        assert np.all(positions[:, 1] < LayoutConfig.HEIGHT - LayoutConfig.PADDING)

    def test_each_position_stays_in_its_own_cell(self) -> None:
        """Jitter is at most a quarter cell, so no two nodes share a cell."""
        node_count = 12
        shape = GridShape.for_node_count(node_count=node_count)
        positions = GridLayout(random_source=random.Random(3).random).place(node_count=node_count)

        cells = {
            (
                int((x - LayoutConfig.PADDING) // shape.cell_width),
                int((y - LayoutConfig.PADDING) // shape.cell_height),
            )
            for x, y in positions
        }
        assert len(cells) == node_count

    def test_centre_source_gives_cell_centres(self) -> None:
        """A constant 0.5 source means zero jitter: every node sits on a cell centre."""
        positions = GridLayout(random_source=lambda: 0.5).place(node_count=4)
        shape = GridShape.for_node_count(node_count=4)

        expected = {
            (
                LayoutConfig.PADDING + col * shape.cell_width + shape.cell_width / 2,
                LayoutConfig.PADDING + row * shape.cell_height + shape.cell_height / 2,
            )
            for row, col in [(0, 0), (0, 1), (0, 2), (1, 0)]
        }
        assert {(float(x), float(y)) for x, y in positions} == expected


class TestLevelGenerator:
    """Tests for generated level invariants."""

    def test_seeded_generator_is_reproducible(self) -> None:
        first = LevelGenerator.seeded(seed=99).generate(level=5)
        second = LevelGenerator.seeded(seed=99).generate(level=5)

        assert first.to_dict() == second.to_dict()

    def test_different_seeds_give_different_boards(self) -> None:
        first = LevelGenerator.seeded(seed=1).generate(level=6)
        second = LevelGenerator.seeded(seed=2).generate(level=6)

        assert first.to_dict()["nodes"] != second.to_dict()["nodes"]

    @pytest.mark.parametrize("level", range(1, 9))
    def test_generated_level_invariants(self, level: int) -> None:
        generated = LevelGenerator.seeded(seed=1000 + level).generate(level=level)
        params = LevelParameters.for_level(level=level)
        graph = generated.graph

        assert generated.number == level
        assert graph.node_count == params.node_count
        assert [node.id for node in graph.nodes] == list(range(params.node_count))
        assert [node.label for node in graph.nodes] == [chr(ord("A") + i) for i in range(params.node_count)]
        assert generated.source_id == 0
        assert generated.target_id == params.node_count - 1

        # Cached solution is the true optimum and satisfies the acceptance rule
        assert generated.solution == graph.dijkstra(start_id=generated.source_id, end_id=generated.target_id)
        assert math.isfinite(generated.optimal_distance)
        assert len(generated.optimal_path) >= params.min_path_nodes
        assert graph.path_cost(path=generated.optimal_path) == generated.optimal_distance

        if level > LevelConfig.DIRECT_EDGE_MAX_LEVEL:
            assert not graph.has_edge(a=generated.source_id, b=generated.target_id)

        for node in graph.nodes:
            assert len(graph.neighbors(node_id=node.id)) >= 1, f"Node {node.label} is isolated"

    @pytest.mark.parametrize("level", [1, 3, 7])
    def test_edge_weights_follow_distance(self, level: int) -> None:
        """weight - round(distance / 20) is the random bonus in [1, 5]."""
        graph = LevelGenerator.seeded(seed=level).generate(level=level).graph

        for edge in graph.edges:
            base = PlaneCalculator.round_half_up(
                graph.nodes[edge.from_id].distance_to(graph.nodes[edge.to_id]) / WeightConfig.DISTANCE_SCALE
            )
            bonus = edge.weight - base
            assert WeightConfig.MIN_JITTER <= bonus < WeightConfig.MIN_JITTER + WeightConfig.JITTER_RANGE

    @pytest.mark.parametrize("level", [2, 5, 9])
    def test_nearest_neighbours_are_connected(self, level: int) -> None:
        """Every node is joined to its two nearest nodes (except the forbidden source-target pair)."""
        generated = LevelGenerator.seeded(seed=77).generate(level=level)
        graph = generated.graph
        forbidden = {generated.source_id, generated.target_id}

        for node in graph.nodes:
            others = sorted((n for n in graph.nodes if n.id != node.id), key=node.distance_to)
            for nearest in others[: LevelConfig.NEAREST_NEIGHBORS]:
                if {node.id, nearest.id} == forbidden:
                    continue
                assert graph.has_edge(a=node.id, b=nearest.id), f"{node.label} not joined to {nearest.label}"

    def test_level_one_may_link_source_and_target(self) -> None:
        """Level 1 boards keep a direct source-target edge when the two are nearest neighbours."""
        linked = False
        for seed in range(50):
            generated = LevelGenerator.seeded(seed=seed).generate(level=1)
            linked = linked or generated.graph.has_edge(a=generated.source_id, b=generated.target_id)
        assert linked

    def test_equally_close_neighbours_taken_in_id_order(self) -> None:
        """Node A has four nodes at the same distance; the two lowest IDs win."""
        positions = np.array(
            [[400.0, 300.0], [500.0, 300.0], [400.0, 400.0], [300.0, 300.0], [400.0, 200.0]]
        )
        generator = LevelGenerator.seeded(seed=0)
        generator.layout.place = lambda node_count: positions.copy()
        params = LevelParameters(level=1, node_count=5, min_path_nodes=2, allow_direct_edge=True)

        graph = generator.build_candidate(params=params)

        assert {frozenset((e.from_id, e.to_id)) for e in graph.edges} == {
            frozenset((0, 1)),
            frozenset((0, 2)),
            frozenset((1, 2)),
            frozenset((2, 3)),
            frozenset((1, 4)),
        }

    def test_exhausted_attempts_raise(self, monkeypatch) -> None:
        monkeypatch.setattr(LevelParameters, "accepts", lambda self, solution: False)
        generator = LevelGenerator.seeded(seed=0, max_attempts=5)

        with pytest.raises(GenerationError, match="after 5 attempts"):
            generator.generate(level=3)

    def test_invalid_max_attempts(self) -> None:
        with pytest.raises(ValueError):
            LevelGenerator(max_attempts=0)

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError):
            LevelGenerator.seeded(seed=0).generate(level=0)

    def test_default_random_source(self) -> None:
        generated = LevelGenerator().generate(level=2)
        assert generated.solution.is_reachable
