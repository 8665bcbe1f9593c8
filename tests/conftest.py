"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import numpy as np
import pytest


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after test."""
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


@pytest.fixture
def board_3x5():
    """3x5 chessboard with black corners: 8 squares, 2 of them interior."""
    from chessgrid.assembly import create_chessboard_graph
    graph, positions = create_chessboard_graph(3, 5)
    return graph, positions


@pytest.fixture
def board_4x4():
    """4x4 chessboard, two of the corners are white."""
    from chessgrid.assembly import create_chessboard_graph
    graph, positions = create_chessboard_graph(4, 4)
    return graph, positions


@pytest.fixture
def strip_graph():
    """
    Five squares wired as a zig-zag strip.

    a-c-e form one line of squares, b-d the line next to it.
    """
    from chessgrid.types import SquareGraph
    graph = SquareGraph()
    a, b, c, d, e = (graph.add_node() for _ in range(5))
    graph.connect(a, 2, b, 0)
    graph.connect(b, 3, c, 1)
    graph.connect(c, 2, d, 0)
    graph.connect(d, 3, e, 1)
    return graph


@pytest.fixture
def k4_graph():
    """Four squares all connected to each other, every node has 3 edges."""
    from chessgrid.types import SquareGraph
    graph = SquareGraph()
    for _ in range(4):
        graph.add_node()
    graph.connect(0, 0, 1, 0)
    graph.connect(0, 1, 2, 0)
    graph.connect(0, 2, 3, 0)
    graph.connect(1, 1, 2, 1)
    graph.connect(1, 2, 3, 1)
    graph.connect(2, 2, 3, 2)
    return graph


@pytest.fixture
def matches_board():
    """
    Check that a grid is the board the graph was built from.

    The grid may come out rotated or transposed depending on the seed, so
    every symmetry of the rectangle is tried.
    """
    def check(grid, positions) -> bool:
        rows, columns = grid.rows, grid.columns
        transforms = [
            lambda r, c: (r, c),
            lambda r, c: (rows - 1 - r, c),
            lambda r, c: (r, columns - 1 - c),
            lambda r, c: (rows - 1 - r, columns - 1 - c),
            lambda r, c: (c, r),
            lambda r, c: (columns - 1 - c, r),
            lambda r, c: (c, rows - 1 - r),
            lambda r, c: (columns - 1 - c, rows - 1 - r),
        ]
        if grid.occupied() != len(positions):
            return False

        for transform in transforms:
            ok = True
            for r in range(rows):
                for c in range(columns):
                    n = grid.get(r, c)
                    if n is not None and tuple(positions[n]) != transform(r, c):
                        ok = False
                        break
                if not ok:
                    break
            if ok:
                return True
        return False

    return check


@pytest.fixture
def rng():
    """Seeded random generator so failures are reproducible."""
    return np.random.default_rng(1234)
