"""Preview generated levels without a front end.

Developer utility: prints node count, edge count and the optimal route for a
range of levels so difficulty scaling can be checked at a glance.

Run: python scripts/preview_levels.py
"""

import logging

from pathpuzzle.generators import LevelGenerator

# Seed and level range - change to inspect other boards
SEED = 2024
FIRST_LEVEL = 1
LAST_LEVEL = 20


def preview_levels() -> None:
    """Generate each level with a fixed seed and print a summary line."""
    generator = LevelGenerator.seeded(seed=SEED)

    for number in range(FIRST_LEVEL, LAST_LEVEL + 1):
        level = generator.generate(level=number)
        labels = [level.graph.nodes[node_id].label for node_id in level.optimal_path]
        print(
            f"Level {number:>2}: {level.graph.node_count:>2} nodes, {level.graph.edge_count:>2} edges, "
            f"optimal {level.optimal_distance:>3} via {' '.join(labels)}"
        )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    preview_levels()
