"""
Topology checks on assembled grids.

Pure functions - the graph and grid are only read.
"""

from __future__ import annotations

from ..types import SquareGraph, SquareGrid


def first_column(grid: SquareGrid, row: int) -> int:
    """
    Column of the first square in a row.

    Rows alternate between starting at column 0 and column 1. Which one row 0
    uses is read off cell (0, 0).
    """
    if grid.rows == 0 or grid.columns == 0:
        return 0
    offset = 0 if grid.get(0, 0) is not None else 1
    return (offset + row) % 2


def expected_connections(grid: SquareGrid, row: int, col: int) -> int:
    """
    Number of neighbors a square must have at a grid position.

    Corners touch 1 square, the rest of the border 2 and the interior 4.
    """
    horizontal_edge = col == 0 or col == grid.columns - 1
    vertical_edge = row == 0 or row == grid.rows - 1

    if horizontal_edge and vertical_edge:
        return 1
    if horizontal_edge or vertical_edge:
        return 2
    return 4


def check_edge_count(graph: SquareGraph, grid: SquareGrid) -> bool:
    """
    Looks at the edge count in each node and sees if it has the expected number.

    A row whose first slot is empty is excluded and must be entirely empty.
    In every other row the squares must sit on alternating columns with no
    holes between them.

    Args:
        graph: Graph the grid's node handles refer to
        grid: Grid to check

    Returns:
        True if the grid is a consistent chessboard
    """
    for row in range(grid.rows):
        start = first_column(grid, row)
        skip = start >= grid.columns or grid.get(row, start) is None

        for col in range(grid.columns):
            n = grid.get(row, col)
            if skip or (col - start) % 2 != 0:
                if n is not None:
                    return False
                continue

            if n is None:
                return False
            if graph.number_of_connections(n) != expected_connections(grid, row, col):
                return False
    return True
