# chessgrid - chessboard grid reconstruction from square graphs

__version__ = "0.1.0"

# Core types
from chessgrid.types import (
    NUM_CORNERS,
    SquareNode,
    SquareEdge,
    SquareGraph,
    SquareGrid,
    GridConfig,
)

# Grid assembly
from chessgrid.assembly import (
    CrossClustersIntoGrids,
    GridInvariantError,
    check_edge_count,
    create_chessboard_graph,
)

# Configuration
from chessgrid.config import (
    load_grid_config,
    save_grid_config,
    load_graph,
    save_graph,
    load_grids,
    save_grids,
)

__all__ = [
    # Core types
    "NUM_CORNERS",
    "SquareNode",
    "SquareEdge",
    "SquareGraph",
    "SquareGrid",
    "GridConfig",
    # Grid assembly
    "CrossClustersIntoGrids",
    "GridInvariantError",
    "check_edge_count",
    "create_chessboard_graph",
    # Configuration
    "load_grid_config",
    "save_grid_config",
    "load_graph",
    "save_graph",
    "load_grids",
    "save_grids",
]
