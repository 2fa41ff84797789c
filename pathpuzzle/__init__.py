"""Path Puzzle - Beat Dijkstra on a weighted graph.

The player picks a route from S to G through a randomly generated weighted
graph and is scored against the shortest path found by Dijkstra's algorithm.

Modules:
    core: Priority queue and board geometry helpers
    model: Data structures (Node, Edge, Solution, PuzzleGraph, Level)
    generators: Solvable level generation (jittered grid, nearest-neighbour wiring)
    game: Game flow (state machine, session, save file)

Example:
    from pathpuzzle.generators import LevelGenerator
    from pathpuzzle.game import GameSession, LevelStore
"""
