import random

from .grid import DIRECTIONS


# --- Union-Find Helpers ---
def _find_set(parent, u):
    """
    Find with path compression.

    Follows parent pointers to the root of u's set and points every node on
    the way directly at that root.
    """
    if parent[u] != u:
        parent[u] = _find_set(parent, parent[u])
    return parent[u]


def _union_sets(parent, rank, u, v):
    """
    Merges the sets holding u and v, union by rank.

    Returns False when they were already joined, i.e. the edge would close a
    cycle and must stay a wall.
    """
    u_root, v_root = _find_set(parent, u), _find_set(parent, v)
    if u_root == v_root:
        return False
    if rank[u_root] < rank[v_root]:
        parent[u_root] = v_root
    elif rank[v_root] < rank[u_root]:
        parent[v_root] = u_root
    else:
        parent[v_root] = u_root
        rank[u_root] += 1
    return True


def rooms(height, width):
    """Cells with odd row and odd column, one cell clear of the border."""
    return [(r, c) for r in range(1, height - 1, 2) for c in range(1, width - 1, 2)]


def room_edges(height, width):
    """
    Candidate passages between rooms two cells apart.

    Each edge is (room, other_room, wall) where wall is the cell between the
    two rooms. Only right and down neighbours are listed so every pair shows
    up once.
    """
    edges = []
    for r, c in rooms(height, width):
        if c + 2 < width - 1:
            edges.append(((r, c), (r, c + 2), (r, c + 1)))
        if r + 2 < height - 1:
            edges.append(((r, c), (r + 2, c), (r + 1, c)))
    return edges


def generate_maze(grid, start_node, finish_node, rng=random):
    """
    Carves a perfect maze with randomized Kruskal's algorithm.

    Algorithm:
      1. Copy the grid and turn every cell into a wall.
      2. Open the rooms (odd, odd cells).
      3. Shuffle the candidate edges between neighbouring rooms.
      4. For each edge whose rooms are still in different sets, union the
         sets and knock down the wall between them. Edges inside one set are
         skipped, so the carved rooms form a spanning tree: exactly one path
         between any two open cells.
      5. Force start and finish open and, if either is cut off, open one
         adjacent cell so it joins the maze body.

    Grids narrower or shorter than 3 cells have no rooms and come back with
    no walls at all. The input grid is left untouched; the returned grid has
    fresh traversal state.

    Parameters:
      grid (Grid): Source of dimensions and endpoint roles.
      start_node, finish_node (Node): Endpoints, must be distinct cells.
      rng: Anything with shuffle() and choice(); the random module by default.
    """
    new_grid = grid.copy()
    height, width = new_grid.rows, new_grid.cols

    if height < 3 or width < 3:
        for node in new_grid.all_nodes():
            node.is_wall = False
        return new_grid

    for node in new_grid.all_nodes():
        node.is_wall = True

    # Rooms are always open; Kruskal only decides which walls between them fall
    parent = {}
    rank = {}
    for r, c in rooms(height, width):
        new_grid[r][c].is_wall = False
        parent[(r, c)] = (r, c)
        rank[(r, c)] = 0

    edges = room_edges(height, width)
    rng.shuffle(edges)

    for u, v, (wr, wc) in edges:
        if _union_sets(parent, rank, u, v):
            new_grid[wr][wc].is_wall = False

    _ensure_open(new_grid, start_node.row, start_node.col, rng)
    _ensure_open(new_grid, finish_node.row, finish_node.col, rng)
    return new_grid


def _ensure_open(grid, row, col, rng):
    """Opens (row, col) and, if it has no open neighbour, one random neighbour.

    Neighbours that already touch an open cell other than (row, col) are
    preferred. On odd-sized grids one always exists and the endpoint joins
    the carved body. On even-sized grids the last row and column lie outside
    the room lattice, so an endpoint there can end up connected only to the
    one cell opened next to it.
    """
    node = grid[row][col]
    node.is_wall = False

    neighbors = grid.neighbors(node)
    if not neighbors or any(not n.is_wall for n in neighbors):
        return

    bridges = [
        n for n in neighbors
        if any(not m.is_wall and m is not node for m in grid.neighbors(n))
    ]
    rng.choice(bridges or neighbors).is_wall = False


def open_cell_count(grid):
    return sum(1 for node in grid.all_nodes() if not node.is_wall)


def count_passages(grid):
    """Number of adjacent open/open cell pairs, each pair counted once."""
    count = 0
    for node in grid.all_nodes():
        if node.is_wall:
            continue
        for dr, dc in DIRECTIONS[1::2]:  # down, right
            nr, nc = node.row + dr, node.col + dc
            if grid.in_bounds(nr, nc) and not grid[nr][nc].is_wall:
                count += 1
    return count
