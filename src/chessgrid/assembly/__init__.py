"""
Grid assembly module for chessgrid.

Turns clusters of connected squares into ordered chessboard grids.
No threading, no shared state between clusters. Caller handles concurrency.
"""

from .board import (
    CORNER_STEPS,
    create_chessboard_graph,
    get_board_positions,
)

from .circular import add_offset

from .clusters_to_grids import (
    CrossClustersIntoGrids,
    GridInvariantError,
    assemble_grid,
    find_seed_node,
    flip_add,
)

from .validation import (
    check_edge_count,
    expected_connections,
    first_column,
)

__all__ = [
    # Board
    "CORNER_STEPS",
    "create_chessboard_graph",
    "get_board_positions",
    # Corners
    "add_offset",
    # Clusters
    "CrossClustersIntoGrids",
    "GridInvariantError",
    "assemble_grid",
    "find_seed_node",
    "flip_add",
    # Validation
    "check_edge_count",
    "expected_connections",
    "first_column",
]
