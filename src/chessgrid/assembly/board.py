"""
Synthetic chessboard square graphs.

Builds the graph a square detector would produce when looking straight at a
chessboard: one node per black square, with diagonal neighbors connected at
the corners where they touch. Handy for testing and for the demo command.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..types import NUM_CORNERS, SquareGraph

# (row, column) step to the diagonal neighbor touching each physical corner,
# listed in counter-clockwise order as seen in an image (y axis down):
# top-left, bottom-left, bottom-right, top-right
CORNER_STEPS = ((-1, -1), (1, -1), (1, 1), (-1, 1))


def get_board_positions(
    rows: int,
    columns: int,
    first_black: bool = True,
) -> list[tuple[int, int]]:
    """
    Positions of the black squares on a chessboard, row-major.

    Args:
        rows: Number of square rows, both colors
        columns: Number of square columns, both colors
        first_black: True if the top-left square is black

    Returns:
        List of (row, column) tuples
    """
    parity = 0 if first_black else 1
    return [
        (r, c)
        for r in range(rows)
        for c in range(columns)
        if (r + c) % 2 == parity
    ]


def create_chessboard_graph(
    rows: int,
    columns: int,
    rotations: int | Sequence[int] | np.ndarray | None = None,
    first_black: bool = True,
    mirrored: bool = False,
    square_size: float = 1.0,
) -> tuple[SquareGraph, list[tuple[int, int]]]:
    """
    Create the square graph of a chessboard.

    Each detected square labels its corners starting from an arbitrary
    corner. rotations[i] is how many corners node i's labels are shifted from
    the physical top-left corner.

    Args:
        rows: Number of square rows, both colors
        columns: Number of square columns, both colors
        rotations: Label shift per node, a single shift for all or None for 0
        first_black: True if the top-left square is black
        mirrored: Label corners clockwise instead of counter-clockwise
        square_size: Side length of a square, used for the node centers

    Returns:
        (graph, positions) where positions[i] is the board (row, column)
        of node i
    """
    if rows < 1 or columns < 1:
        raise ValueError(f"Board must be at least 1x1, got {rows}x{columns}")

    positions = get_board_positions(rows, columns, first_black)

    if rotations is None:
        shifts = np.zeros(len(positions), dtype=np.int64)
    elif np.isscalar(rotations):
        shifts = np.full(len(positions), int(rotations), dtype=np.int64)
    else:
        shifts = np.asarray(rotations, dtype=np.int64)
        if shifts.shape != (len(positions),):
            raise ValueError(
                f"Expected {len(positions)} rotations, got shape {shifts.shape}"
            )

    graph = SquareGraph()
    lookup = {}
    for r, c in positions:
        center = np.array([(c + 0.5) * square_size, (r + 0.5) * square_size])
        lookup[(r, c)] = graph.add_node(center=center)

    def label(node: int, physical: int) -> int:
        if mirrored:
            physical = (NUM_CORNERS - physical) % NUM_CORNERS
        return int((physical - shifts[node]) % NUM_CORNERS)

    # Connect each square to the neighbors below it, every edge once
    for (r, c), node in lookup.items():
        for physical in (1, 2):
            dr, dc = CORNER_STEPS[physical]
            other = lookup.get((r + dr, c + dc))
            if other is None:
                continue
            opposite = (physical + 2) % NUM_CORNERS
            graph.connect(node, label(node, physical), other, label(other, opposite))

    return graph, positions
