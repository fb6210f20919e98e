import collections
import math

import pytest

from labyrinth.grid import make_grid, set_wall


@pytest.fixture
def open_grid():
    """5x5, start top-left, finish bottom-right, no walls."""
    return make_grid(5, 5, (0, 0), (4, 4))


@pytest.fixture
def column_grid(open_grid):
    """open_grid with column 2 walled off except for (2, 2)."""
    for row in range(5):
        if row != 2:
            set_wall(open_grid, row, 2)
    return open_grid


@pytest.fixture
def bfs_distance():
    """Brute-force shortest path length in edges, math.inf if unreachable."""
    def distance(grid, start, finish):
        seen = {start.position: 0}
        queue = collections.deque([start])
        while queue:
            node = queue.popleft()
            if node is finish:
                return seen[node.position]
            for neighbor in grid.neighbors(node):
                if neighbor.is_wall or neighbor.position in seen:
                    continue
                seen[neighbor.position] = seen[node.position] + 1
                queue.append(neighbor)
        return math.inf
    return distance


@pytest.fixture
def open_component():
    """Positions of open cells reachable from a node through open cells."""
    def component(grid, node):
        seen = {node.position}
        queue = collections.deque([node])
        while queue:
            current = queue.popleft()
            for neighbor in grid.neighbors(current):
                if not neighbor.is_wall and neighbor.position not in seen:
                    seen.add(neighbor.position)
                    queue.append(neighbor)
        return seen
    return component
