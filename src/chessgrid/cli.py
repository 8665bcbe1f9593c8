#!/usr/bin/env python3
"""
chessgrid CLI - turn square graphs into chessboard grids.

Usage:
    chessgrid assemble GRAPH.toml [-o GRIDS.toml] [-c CONFIG.toml] [-v]
    chessgrid demo ROWS COLUMNS [-o GRAPH.toml] [-v]
    chessgrid --help
"""

import logging
import sys
from pathlib import Path


def format_grid(grid) -> str:
    """Render a grid as text, one line per row, '.' for empty cells."""
    width = max([len(str(n)) for n in grid.nodes if n is not None] + [1])
    lines = []
    for row in range(grid.rows):
        cells = []
        for col in range(grid.columns):
            n = grid.get(row, col)
            cells.append(("." if n is None else str(n)).rjust(width))
        lines.append(" ".join(cells))
    return "\n".join(lines)


def _pop_option(args: list[str], flag: str) -> str | None:
    if flag not in args:
        return None
    i = args.index(flag)
    if i + 1 >= len(args):
        raise ValueError(f"{flag} needs a value")
    value = args[i + 1]
    del args[i:i + 2]
    return value


def _pop_flag(args: list[str], flag: str) -> bool:
    if flag not in args:
        return False
    args.remove(flag)
    return True


def _print_grids(grids) -> None:
    print(f"Found {len(grids)} grid(s)")
    for i, grid in enumerate(grids):
        print(f"\nGrid {i}: {grid.rows} rows x {grid.columns} columns")
        print(format_grid(grid))


def assemble_main(args: list[str]) -> int:
    from chessgrid.assembly import CrossClustersIntoGrids
    from chessgrid.config import load_graph, load_grid_config, save_grids
    from chessgrid.types import GridConfig

    output = _pop_option(args, "-o")
    config_path = _pop_option(args, "-c")
    verbose = _pop_flag(args, "-v")

    if len(args) != 1:
        print("Usage: chessgrid assemble GRAPH.toml [-o GRIDS.toml] [-c CONFIG.toml] [-v]")
        return 1

    config = load_grid_config(Path(config_path)) if config_path else GridConfig()
    if verbose or config.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    graph, clusters = load_graph(Path(args[0]))
    print(f"Loaded {len(graph.nodes)} squares in {len(clusters)} cluster(s)")

    alg = CrossClustersIntoGrids(config)
    alg.set_verbose(verbose or config.verbose)
    grids = alg.process(graph, clusters)
    _print_grids(grids)

    if output:
        save_grids(grids, Path(output))
        print(f"\nSaved to {output}")
    return 0


def demo_main(args: list[str]) -> int:
    from chessgrid.assembly import CrossClustersIntoGrids, create_chessboard_graph
    from chessgrid.config import save_graph

    output = _pop_option(args, "-o")
    verbose = _pop_flag(args, "-v")

    if len(args) != 2:
        print("Usage: chessgrid demo ROWS COLUMNS [-o GRAPH.toml] [-v]")
        return 1

    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    rows, columns = int(args[0]), int(args[1])
    graph, positions = create_chessboard_graph(rows, columns)
    clusters = [list(range(len(positions)))]
    print(f"Chessboard {rows}x{columns}: {len(positions)} black squares")

    alg = CrossClustersIntoGrids()
    alg.set_verbose(verbose)
    _print_grids(alg.process(graph, clusters))

    if output:
        save_graph(graph, clusters, Path(output))
        print(f"\nSaved graph to {output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    if not args or args[0] in ("-h", "--help"):
        print(__doc__)
        print("Commands:")
        print("  assemble  Reconstruct grids from a square graph file")
        print("  demo      Build a synthetic chessboard graph and reconstruct it")
        print()
        return 0

    command = args.pop(0)

    try:
        if command == "assemble":
            return assemble_main(args)
        elif command == "demo":
            return demo_main(args)
        else:
            print(f"Unknown command: {command}")
            print("Run 'chessgrid --help' for usage")
            return 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
