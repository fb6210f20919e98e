import heapq
import math
import time

from .grid import reset_traversal_state

DIJKSTRA = "Dijkstra"
A_STAR = "A*"


# --- Helpers ---
def manhattan_distance(node, other):
    """
    |row - row'| + |col - col'|.

    Admissible and consistent on a 4-connected unit-cost grid, so A* with it
    never settles a node twice and returns a shortest path.
    """
    return abs(node.row - other.row) + abs(node.col - other.col)


def get_unvisited_neighbors(node, grid):
    """Up, down, left, right neighbours that have not been settled yet."""
    return [neighbor for neighbor in grid.neighbors(node) if not neighbor.is_visited]


def _update_unvisited_neighbors(node, grid):
    """Relaxes every unvisited neighbour of node and returns the ones that improved."""
    improved = []
    for neighbor in get_unvisited_neighbors(node, grid):
        tentative_distance = node.distance + 1
        if tentative_distance < neighbor.distance:
            neighbor.distance = tentative_distance
            neighbor.previous_node = node
            improved.append(neighbor)
    return improved


# --- Search Engine ---
def dijkstra(grid, start_node, finish_node):
    """Dijkstra's algorithm with unit edge weights.

    Settles nodes in non-decreasing distance order and returns them in the
    order they were settled, stopping as soon as finish_node is settled or
    nothing reachable is left. Each node's distance and previous_node are
    written in place, so the grid must be reset between runs.

    The frontier is a binary heap keyed by (distance, row-major index), so
    equal distances settle in row-major order. Walls may be relaxed and
    queued like any other cell, but a wall taken off the heap is dropped
    without being settled and never relaxes its own neighbours.
    """
    visited_nodes_in_order = []
    start_node.distance = 0
    pq = [(0, grid.index(start_node), start_node)]

    while pq:
        _, _, closest_node = heapq.heappop(pq)

        # Stale entry: a shorter one already settled this node
        if closest_node.is_visited:
            continue
        if closest_node.is_wall:
            continue

        closest_node.is_visited = True
        visited_nodes_in_order.append(closest_node)

        if closest_node is finish_node:
            return visited_nodes_in_order

        for neighbor in _update_unvisited_neighbors(closest_node, grid):
            heapq.heappush(pq, (neighbor.distance, grid.index(neighbor), neighbor))

    # Everything left is unreachable (distance is still infinite)
    return visited_nodes_in_order


def a_star(grid, start_node, finish_node):
    """A* search, same loop as dijkstra() but ranked by f = g + h.

    g is node.distance, h the Manhattan distance to finish_node. Neighbours
    only change when the tentative g is strictly better, and then get their
    heuristic_distance, total_distance and previous_node refreshed.
    """
    visited_nodes_in_order = []
    start_node.distance = 0            # g
    start_node.heuristic_distance = 0  # h
    start_node.total_distance = 0      # f
    pq = [(0, grid.index(start_node), start_node)]

    while pq:
        _, _, closest_node = heapq.heappop(pq)

        if closest_node.is_visited or closest_node.is_wall:
            continue

        closest_node.is_visited = True
        visited_nodes_in_order.append(closest_node)

        if closest_node is finish_node:
            return visited_nodes_in_order

        for neighbor in get_unvisited_neighbors(closest_node, grid):
            tentative_distance = closest_node.distance + 1
            if tentative_distance < neighbor.distance:
                neighbor.distance = tentative_distance
                neighbor.heuristic_distance = manhattan_distance(neighbor, finish_node)
                neighbor.total_distance = neighbor.distance + neighbor.heuristic_distance
                neighbor.previous_node = closest_node
                heapq.heappush(pq, (neighbor.total_distance, grid.index(neighbor), neighbor))

    return visited_nodes_in_order


ALGORITHMS = {
    DIJKSTRA: dijkstra,
    A_STAR: a_star,
}


# --- Path Reconstructor ---
def get_path_from_finish(finish_node):
    """
    Walks previous_node links back from finish_node and returns start -> finish.

    When the finish was never reached the result is just [finish_node];
    use path_found() to tell that apart from start == finish.
    """
    nodes_in_shortest_path_order = []
    current_node = finish_node
    while current_node is not None:
        nodes_in_shortest_path_order.append(current_node)
        current_node = current_node.previous_node
    nodes_in_shortest_path_order.reverse()
    return nodes_in_shortest_path_order


def path_found(start_node, finish_node):
    return finish_node.is_visited and (finish_node is start_node or finish_node.previous_node is not None)


def run_algorithm(grid, algorithm=DIJKSTRA):
    """Resets grid, searches between its endpoints and reconstructs the path.

    Returns (visited, path, stats). stats holds visited_count, path_length
    (0 when the finish is unreachable), execution_time in milliseconds and
    found.
    """
    try:
        search = ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(f"unknown algorithm {algorithm!r}, expected one of {sorted(ALGORITHMS)}") from None

    reset_traversal_state(grid)
    start_node, finish_node = grid.start_node, grid.finish_node

    t0 = time.perf_counter()
    visited = search(grid, start_node, finish_node)
    path = get_path_from_finish(finish_node)
    elapsed = time.perf_counter() - t0

    found = path_found(start_node, finish_node)
    if not found:
        path = []
    stats = {
        "visited_count": len(visited),
        "path_length": len(path),
        "execution_time": elapsed * 1000,
        "found": found,
        "distance": finish_node.distance if found else math.inf,
    }
    return visited, path, stats
