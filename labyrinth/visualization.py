from graphviz import Digraph

WALL_CHAR = "#"
START_CHAR = "S"
FINISH_CHAR = "F"
PATH_CHAR = "*"
VISITED_CHAR = "."
OPEN_CHAR = " "

PATH_EDGE_COLOR = "#f39c12"
TREE_EDGE_COLOR = "#95a5a6"


def _label(node):
    return str(node.position)


def format_grid(grid, visited=(), path=()):
    """Plain-text dump of grid with an optional visited/path overlay, one line per row."""
    visited_cells = {node.position for node in visited}
    path_cells = {node.position for node in path}
    lines = []
    for row in grid:
        chars = []
        for node in row:
            if node.is_start:
                chars.append(START_CHAR)
            elif node.is_finish:
                chars.append(FINISH_CHAR)
            elif node.is_wall:
                chars.append(WALL_CHAR)
            elif node.position in path_cells:
                chars.append(PATH_CHAR)
            elif node.position in visited_cells:
                chars.append(VISITED_CHAR)
            else:
                chars.append(OPEN_CHAR)
        lines.append("".join(chars))
    return "\n".join(lines)


def search_tree(visited, path=()):
    """
    Digraph of the search tree left behind by a search.

    One node per settled cell and one edge previous_node -> node for each of
    them; edges that lie on path are drawn bold in the path colour.
    """
    dot = Digraph()
    path_edges = {(_label(a), _label(b)) for a, b in zip(path, path[1:])}
    for node in visited:
        dot.node(_label(node))
    for node in visited:
        parent = node.previous_node
        if parent is None:
            continue
        edge = (_label(parent), _label(node))
        if edge in path_edges:
            dot.edge(*edge, color=PATH_EDGE_COLOR, penwidth="2")
        else:
            dot.edge(*edge, color=TREE_EDGE_COLOR)
    return dot


def render_search_tree(visited, path, filename, view=False):
    """Writes the search tree to filename (plus the rendered .pdf) via the graphviz binary."""
    return search_tree(visited, path).render(filename, view=view)
