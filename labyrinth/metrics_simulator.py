import argparse
import csv
import os
import random
import statistics
import time

# Optional plotting
try:
    import matplotlib.pyplot as plt
    HAS_MPL = True
except ImportError:
    HAS_MPL = False

from .algorithms import A_STAR, DIJKSTRA, run_algorithm
from .grid import INITIAL_COLS, INITIAL_ROWS, make_grid
from .maze import count_passages, generate_maze, open_cell_count
from .visualization import format_grid, render_search_tree

KRUSKAL = "Kruskal's MST"
EMPTY = "Empty"

DEFAULT_ALGOS = [DIJKSTRA, A_STAR]
DEFAULT_GENS = [KRUSKAL, EMPTY]

METRICS = [
    "elapsed_ms",
    "visited_count",
    "path_length",
    "open_cells",
]


def build_grid(rows, cols, gen_method, start=None, finish=None):
    """Fresh grid with default (or given) endpoints, carved when gen_method asks for it."""
    grid = make_grid(rows, cols, start, finish)
    if gen_method == KRUSKAL:
        grid = generate_maze(grid, grid.start_node, grid.finish_node)
    elif gen_method != EMPTY:
        raise ValueError(f"unknown generator {gen_method!r}, expected one of {DEFAULT_GENS}")
    return grid


def run_single(rows, cols, gen_method, algorithm, seed=None):
    """One generation + search. Seeding makes every algorithm see the same maze."""
    if seed is not None:
        random.seed(seed)

    grid = build_grid(rows, cols, gen_method)
    visited, path, stats = run_algorithm(grid, algorithm)

    return {
        "gen_method": gen_method,
        "algorithm": algorithm,
        "rows": rows,
        "cols": cols,
        "seed": seed,
        "elapsed_ms": stats["execution_time"],
        "visited_count": stats["visited_count"],
        "path_length": stats["path_length"],
        "open_cells": open_cell_count(grid),
        "passages": count_passages(grid),
        "found": stats["found"],
    }


def summarize_metric(name, values):
    """avg/min/max/stdev of one metric, keyed as '<name>_<stat>'."""
    if not values:
        return {f"{name}_{stat}": 0 for stat in ("avg", "min", "max", "stdev")}
    return {
        f"{name}_avg": statistics.mean(values),
        f"{name}_min": min(values),
        f"{name}_max": max(values),
        f"{name}_stdev": statistics.pstdev(values),
    }


def aggregate_results(rows, group_by=("gen_method", "algorithm")):
    """One summary entry per group_by key, in first-seen order."""
    grouped = {}
    for row in rows:
        grouped.setdefault(tuple(row[k] for k in group_by), []).append(row)

    summary = []
    for key, items in grouped.items():
        entry = {"group": key, "count": len(items)}
        for metric in METRICS:
            entry.update(summarize_metric(metric, [item[metric] for item in items]))
        entry["found_rate"] = sum(1 for item in items if item["found"]) / len(items)
        summary.append(entry)
    return summary


def expand_groups(summary):
    """Replaces each entry's 'group' tuple with gen_method/algorithm columns."""
    expanded = []
    for entry in summary:
        gen, algo = entry["group"]
        row = {k: v for k, v in entry.items() if k != "group"}
        row["gen_method"] = gen
        row["algorithm"] = algo
        expanded.append(row)
    return expanded


def write_csv(path, rows):
    if not rows:
        return
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0]))
        writer.writeheader()
        writer.writerows(rows)


def _bar_label(entry):
    # Raw aggregate_results entries carry a group tuple, expanded ones carry columns
    if "group" in entry:
        gen, algo = entry["group"]
    else:
        gen, algo = entry.get("gen_method", ""), entry.get("algorithm", "")
    return f"{algo}\n({gen})"


def plot_metric(summary, metric_key, out_path):
    """Bar chart of metric_key per (generator, algorithm); no-op without matplotlib."""
    if not HAS_MPL:
        return
    labels = [_bar_label(entry) for entry in summary]
    values = [entry.get(metric_key, 0) for entry in summary]
    fig, ax = plt.subplots(figsize=(max(8, len(labels) * 0.6), 5))
    positions = range(len(values))
    ax.bar(positions, values)
    ax.set_xticks(list(positions))
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_ylabel(metric_key)
    fig.tight_layout()
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    fig.savefig(out_path)
    plt.close(fig)


def show_single(rows, cols, gen_method, algorithms, seed=None, tree_path=None):
    """Prints one maze solved by each algorithm; optionally renders the last search tree."""
    if seed is not None:
        random.seed(seed)
    grid = build_grid(rows, cols, gen_method)
    for algorithm in algorithms:
        visited, path, stats = run_algorithm(grid, algorithm)
        print(f"{algorithm}: visited {stats['visited_count']}, path {stats['path_length']}, "
              f"{stats['execution_time']:.3f} ms")
        print(format_grid(grid, visited, path))
        print()
    if tree_path:
        out = render_search_tree(visited, path, tree_path)
        print(f"Wrote search tree to {out}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run repeated maze searches and plot metrics.")
    parser.add_argument("--runs", type=int, default=10, help="Runs per (generator, algorithm) pair")
    parser.add_argument("--rows", type=int, default=INITIAL_ROWS)
    parser.add_argument("--cols", type=int, default=INITIAL_COLS)
    parser.add_argument("--generators", nargs="*", default=DEFAULT_GENS, choices=DEFAULT_GENS)
    parser.add_argument("--algorithms", nargs="*", default=DEFAULT_ALGOS, choices=DEFAULT_ALGOS)
    parser.add_argument("--seed", type=int, default=None, help="Base seed (defaults to the current time)")
    parser.add_argument("--out_dir", default="metrics_output")
    parser.add_argument("--show", action="store_true", help="Print a single solved maze instead of a batch run")
    parser.add_argument("--tree", default=None, help="With --show, render the search tree to this file")
    args = parser.parse_args(argv)

    if args.runs < 1:
        parser.error("--runs must be at least 1")
    if not args.generators or not args.algorithms:
        parser.error("select at least one generator and one algorithm")

    if args.show:
        try:
            show_single(args.rows, args.cols, args.generators[0], args.algorithms, args.seed, args.tree)
        except ValueError as e:
            parser.error(str(e))
        return

    all_rows = []
    seed_base = args.seed if args.seed is not None else int(time.time())

    for gen in args.generators:
        for algo in args.algorithms:
            print(f"Running {algo} on {gen} ({args.runs} runs, {args.rows}x{args.cols})")
            for i in range(args.runs):
                try:
                    res = run_single(args.rows, args.cols, gen, algo, seed=seed_base + i)
                except ValueError as e:
                    parser.error(str(e))
                all_rows.append(res)

    os.makedirs(args.out_dir, exist_ok=True)
    write_csv(os.path.join(args.out_dir, "raw_results.csv"), all_rows)

    summary = aggregate_results(all_rows)
    expanded = expand_groups(summary)
    write_csv(os.path.join(args.out_dir, "summary.csv"), expanded)

    if HAS_MPL:
        for metric in ["elapsed_ms_avg", "visited_count_avg", "path_length_avg"]:
            plot_metric(expanded, metric, os.path.join(args.out_dir, f"{metric}.png"))

    print(f"Wrote results to {args.out_dir}")


if __name__ == "__main__":
    main()
