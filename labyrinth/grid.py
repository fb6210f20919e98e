import math

# --- Configuration ---
INITIAL_ROWS = 15
INITIAL_COLS = 31

# Neighbour order used everywhere: up, down, left, right
DIRECTIONS = [(-1, 0), (1, 0), (0, -1), (0, 1)]


class Node:
    """
    One cell of the grid.

    Attributes:
        row, col (int): Position in the grid, fixed for the node's lifetime.
        is_start, is_finish (bool): Endpoint roles, never both on one node.
        is_wall (bool): Blocks traversal. Never set on an endpoint.
        is_visited (bool): Settled by the last search.
        distance (float): Best known cost from the start (math.inf if unreached).
        previous_node (Node | None): Node this one was reached from.
        total_distance (float): A* f = g + h.
        heuristic_distance (float): A* h, Manhattan distance to the finish.
    """
    def __init__(self, row, col, is_start=False, is_finish=False, is_wall=False):
        self.row = row
        self.col = col
        self.is_start = is_start
        self.is_finish = is_finish
        self.is_wall = is_wall
        self.reset()

    def reset(self):
        """Clears traversal state. Role and wall flags are left alone."""
        self.is_visited = False
        self.distance = math.inf
        self.previous_node = None
        self.total_distance = math.inf
        self.heuristic_distance = math.inf

    @property
    def position(self):
        return (self.row, self.col)

    def __repr__(self):
        flags = ''.join(flag for flag, on in (('S', self.is_start), ('F', self.is_finish), ('#', self.is_wall)) if on)
        suffix = f", {flags}" if flags else ""
        return f"Node({self.row}, {self.col}{suffix})"


class Grid:
    """
    Rectangular rows x cols collection of Nodes, indexed as grid[row][col].

    Exactly one node carries is_start and exactly one carries is_finish.
    Dimensions are fixed; build a new grid (resize_grid) to change them.
    """
    def __init__(self, nodes):
        self.nodes = nodes
        self.rows = len(nodes)
        self.cols = len(nodes[0]) if nodes else 0

    def __getitem__(self, row):
        return self.nodes[row]

    def __iter__(self):
        return iter(self.nodes)

    def __len__(self):
        return self.rows

    def all_nodes(self):
        """Every node in row-major order."""
        return [node for row in self.nodes for node in row]

    def in_bounds(self, row, col):
        return 0 <= row < self.rows and 0 <= col < self.cols

    def node(self, row, col):
        if not self.in_bounds(row, col):
            raise IndexError(f"cell ({row}, {col}) is outside a {self.rows}x{self.cols} grid")
        return self.nodes[row][col]

    def index(self, node):
        """Row-major position of node, used as a deterministic tie-break."""
        return node.row * self.cols + node.col

    def neighbors(self, node):
        result = []
        for dr, dc in DIRECTIONS:
            nr, nc = node.row + dr, node.col + dc
            if self.in_bounds(nr, nc):
                result.append(self.nodes[nr][nc])
        return result

    @property
    def start_node(self):
        return self._find(lambda node: node.is_start)

    @property
    def finish_node(self):
        return self._find(lambda node: node.is_finish)

    def _find(self, predicate):
        for row in self.nodes:
            for node in row:
                if predicate(node):
                    return node
        return None

    def copy(self):
        """Copies roles and walls into a new grid with fresh traversal state."""
        return Grid([
            [Node(n.row, n.col, n.is_start, n.is_finish, n.is_wall) for n in row]
            for row in self.nodes
        ])

    def __repr__(self):
        return f"Grid(rows={self.rows}, cols={self.cols})"


def clamp_position(position, rows, cols):
    row, col = position
    return (min(max(row, 0), rows - 1), min(max(col, 0), cols - 1))


def default_endpoints(rows, cols):
    """Start a quarter of the way in, finish three quarters, both on the middle row."""
    return (rows // 2, cols // 4), (rows // 2, int(cols * 0.75))


def make_grid(rows=INITIAL_ROWS, cols=INITIAL_COLS, start=None, finish=None):
    """
    Builds a fresh grid with no walls.

    Endpoints outside the grid are clamped onto its border. Raises ValueError
    for empty dimensions or when both endpoints end up on the same cell.
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"grid dimensions must be positive, got {rows}x{cols}")
    default_start, default_finish = default_endpoints(rows, cols)
    start = clamp_position(start if start is not None else default_start, rows, cols)
    finish = clamp_position(finish if finish is not None else default_finish, rows, cols)
    if start == finish:
        raise ValueError(f"start and finish must be distinct cells, both are {start}")

    nodes = []
    for row in range(rows):
        current_row = []
        for col in range(cols):
            current_row.append(Node(row, col, is_start=(row, col) == start, is_finish=(row, col) == finish))
        nodes.append(current_row)
    return Grid(nodes)


def resize_grid(grid, rows, cols):
    """New empty grid of the given size, keeping the endpoints clamped into it.

    When both endpoints clamp onto the same cell the finish moves one column
    right, wrapping to column 0 (one row down on a single-column grid). Only
    a 1x1 target still raises ValueError.
    """
    start = clamp_position(grid.start_node.position, rows, cols)
    finish = clamp_position(grid.finish_node.position, rows, cols)
    if start == finish:
        if cols > 1:
            finish = (finish[0], (finish[1] + 1) % cols)
        else:
            finish = ((finish[0] + 1) % rows, finish[1])
    return make_grid(rows, cols, start, finish)


def reset_traversal_state(grid):
    for node in grid.all_nodes():
        node.reset()
    return grid


def clear_walls(grid):
    for node in grid.all_nodes():
        node.is_wall = False
        node.reset()
    return grid


# --- Edits ---
def set_wall(grid, row, col, is_wall=True):
    """Sets the wall flag on a cell. Endpoints can't become walls; returns False then."""
    node = grid.node(row, col)
    if node.is_start or node.is_finish:
        return False
    node.is_wall = is_wall
    return True


def toggle_wall(grid, row, col):
    return set_wall(grid, row, col, not grid.node(row, col).is_wall)


def move_start(grid, row, col):
    return _move_endpoint(grid, row, col, 'is_start', 'is_finish')


def move_finish(grid, row, col):
    return _move_endpoint(grid, row, col, 'is_finish', 'is_start')


def _move_endpoint(grid, row, col, role, other_role):
    target = grid.node(row, col)
    if getattr(target, other_role):
        return False  # endpoints never overlap
    current = grid._find(lambda node: getattr(node, role))
    if current is target:
        return True
    setattr(current, role, False)
    setattr(target, role, True)
    target.is_wall = False
    return True
