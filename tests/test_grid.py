import math

import pytest

from labyrinth.grid import (
    clamp_position,
    clear_walls,
    default_endpoints,
    make_grid,
    move_finish,
    move_start,
    reset_traversal_state,
    resize_grid,
    set_wall,
    toggle_wall,
)


def test_make_grid_positions_and_roles():
    grid = make_grid(4, 6, (1, 2), (3, 5))
    assert grid.rows == 4 and grid.cols == 6
    for r in range(4):
        for c in range(6):
            assert grid[r][c].row == r
            assert grid[r][c].col == c
    nodes = grid.all_nodes()
    assert sum(n.is_start for n in nodes) == 1
    assert sum(n.is_finish for n in nodes) == 1
    assert grid.start_node.position == (1, 2)
    assert grid.finish_node.position == (3, 5)
    assert not any(n.is_wall for n in nodes)


def test_default_endpoints_match_initial_layout():
    assert default_endpoints(15, 31) == ((7, 7), (7, 23))
    grid = make_grid()
    assert grid.start_node.position == (7, 7)
    assert grid.finish_node.position == (7, 23)


def test_out_of_bounds_endpoints_are_clamped():
    grid = make_grid(5, 5, (-3, 10), (9, 0))
    assert grid.start_node.position == (0, 4)
    assert grid.finish_node.position == (4, 0)
    assert clamp_position((7, -1), 3, 3) == (2, 0)


def test_make_grid_rejects_bad_input():
    with pytest.raises(ValueError):
        make_grid(0, 5)
    with pytest.raises(ValueError):
        make_grid(3, 3, (5, 5), (2, 2))


def test_new_nodes_start_unreached(open_grid):
    for node in open_grid.all_nodes():
        assert node.distance == math.inf
        assert node.previous_node is None
        assert not node.is_visited


def test_reset_is_idempotent_and_keeps_roles(open_grid):
    set_wall(open_grid, 1, 1)
    node = open_grid[2][3]
    node.is_visited = True
    node.distance = 4
    node.previous_node = open_grid[2][2]
    node.total_distance = 7
    node.heuristic_distance = 3

    reset_traversal_state(open_grid)
    once = [(n.distance, n.is_visited, n.previous_node, n.total_distance, n.heuristic_distance)
            for n in open_grid.all_nodes()]
    assert reset_traversal_state(open_grid) is open_grid
    twice = [(n.distance, n.is_visited, n.previous_node, n.total_distance, n.heuristic_distance)
             for n in open_grid.all_nodes()]

    assert once == twice
    assert all(values == (math.inf, False, None, math.inf, math.inf) for values in twice)
    assert open_grid[1][1].is_wall
    assert open_grid[0][0].is_start and open_grid[4][4].is_finish


def test_endpoints_cannot_become_walls(open_grid):
    assert set_wall(open_grid, 0, 0) is False
    assert toggle_wall(open_grid, 4, 4) is False
    assert not open_grid[0][0].is_wall
    assert toggle_wall(open_grid, 2, 2) is True
    assert open_grid[2][2].is_wall
    toggle_wall(open_grid, 2, 2)
    assert not open_grid[2][2].is_wall


def test_set_wall_out_of_bounds(open_grid):
    with pytest.raises(IndexError):
        set_wall(open_grid, 5, 0)


def test_move_endpoints(open_grid):
    set_wall(open_grid, 1, 1)
    assert move_start(open_grid, 1, 1)
    assert open_grid.start_node.position == (1, 1)
    assert not open_grid[1][1].is_wall
    assert not open_grid[0][0].is_start

    # Endpoints never share a cell
    assert move_finish(open_grid, 1, 1) is False
    assert move_start(open_grid, 4, 4) is False
    assert open_grid.finish_node.position == (4, 4)


def test_clear_walls(column_grid):
    column_grid[3][3].distance = 2
    clear_walls(column_grid)
    assert not any(n.is_wall for n in column_grid.all_nodes())
    assert column_grid[3][3].distance == math.inf


def test_resize_keeps_clamped_endpoints():
    grid = make_grid(15, 31)
    resized = resize_grid(grid, 10, 10)
    assert (resized.rows, resized.cols) == (10, 10)
    assert resized.start_node.position == (7, 7)
    assert resized.finish_node.position == (7, 9)


def test_shrinking_onto_one_cell_nudges_the_finish():
    resized = resize_grid(make_grid(15, 31), 5, 5)
    assert resized.start_node.position == (4, 4)
    # Column 4 + 1 wraps around to column 0
    assert resized.finish_node.position == (4, 0)


def test_resize_to_single_column():
    resized = resize_grid(make_grid(15, 31), 6, 1)
    assert resized.start_node.position == (5, 0)
    # Nowhere to go sideways, so the finish wraps down to row 0
    assert resized.finish_node.position == (0, 0)


def test_resize_to_single_cell_is_rejected():
    with pytest.raises(ValueError):
        resize_grid(make_grid(15, 31), 1, 1)


def test_copy_is_independent(column_grid):
    copy = column_grid.copy()
    assert copy[0][2].is_wall and copy[0][0].is_start
    copy[0][2].is_wall = False
    assert column_grid[0][2].is_wall


def test_neighbors_order(open_grid):
    positions = [n.position for n in open_grid.neighbors(open_grid[2][2])]
    assert positions == [(1, 2), (3, 2), (2, 1), (2, 3)]
    assert [n.position for n in open_grid.neighbors(open_grid[0][0])] == [(1, 0), (0, 1)]
