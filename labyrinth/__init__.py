"""Grid pathfinding and maze generation.

This package provides:
- A grid model of nodes with start/finish endpoints and walls
- Dijkstra and A* searches that report the order nodes were settled in
- Shortest-path reconstruction from previous_node links
- A randomized Kruskal maze generator
- A headless metrics simulator comparing the searches over many mazes
"""
from .algorithms import A_STAR, ALGORITHMS, DIJKSTRA, a_star, dijkstra, get_path_from_finish, path_found, run_algorithm
from .grid import Grid, Node, make_grid, reset_traversal_state
from .maze import generate_maze

__all__ = [
    "A_STAR",
    "ALGORITHMS",
    "DIJKSTRA",
    "Grid",
    "Node",
    "a_star",
    "dijkstra",
    "generate_maze",
    "get_path_from_finish",
    "make_grid",
    "path_found",
    "reset_traversal_state",
    "run_algorithm",
]
