"""
Core data structures for chessgrid.

The square graph is an arena: nodes and edges live in flat lists and refer to
each other by integer handles (their position in those lists). Clusters and
grids hold node handles, never node objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

# Number of corners (and sides) on a square
NUM_CORNERS = 4


# ============================================================================
# Square Graph
# ============================================================================


@dataclass(slots=True)
class SquareNode:
    """
    A detected square.

    edges[i] is the handle of the edge attached at corner i, or None.
    """

    index: int
    edges: list[int | None] = field(default_factory=lambda: [None] * NUM_CORNERS)
    center: np.ndarray | None = None  # (2,) image coordinates, if known

    def __post_init__(self):
        if len(self.edges) != NUM_CORNERS:
            raise ValueError(
                f"Node {self.index} has {len(self.edges)} edge slots, expected {NUM_CORNERS}"
            )

    def number_of_connections(self) -> int:
        return sum(1 for e in self.edges if e is not None)


@dataclass(frozen=True, slots=True)
class SquareEdge:
    """
    Undirected connection between two squares.

    side_a / side_b are the corners of a / b at which the edge attaches.
    """

    a: int
    side_a: int
    b: int
    side_b: int
    distance: float = 0.0  # Pixel distance between the touching corners

    def destination(self, node: int) -> int:
        """Endpoint on the other side of the edge from node."""
        if node == self.a:
            return self.b
        if node == self.b:
            return self.a
        raise ValueError(f"Node {node} is not an endpoint of this edge")

    def destination_side(self, node: int) -> int:
        """Corner at which the endpoint opposite node attaches."""
        if node == self.a:
            return self.side_b
        if node == self.b:
            return self.side_a
        raise ValueError(f"Node {node} is not an endpoint of this edge")


@dataclass(slots=True)
class SquareGraph:
    """
    Arena owning every node and edge produced by square detection.

    Detached edges leave a None behind so existing handles stay valid.
    """

    nodes: list[SquareNode] = field(default_factory=list)
    edges: list[SquareEdge | None] = field(default_factory=list)

    def add_node(self, center: np.ndarray | None = None) -> int:
        index = len(self.nodes)
        if center is not None:
            center = np.asarray(center, dtype=np.float64)
        self.nodes.append(SquareNode(index=index, center=center))
        return index

    def node(self, index: int) -> SquareNode:
        return self.nodes[index]

    def edge(self, index: int) -> SquareEdge:
        e = self.edges[index]
        if e is None:
            raise KeyError(f"Edge {index} has been detached")
        return e

    def connect(
        self,
        a: int,
        side_a: int,
        b: int,
        side_b: int,
        distance: float = 0.0,
    ) -> int:
        """
        Create an edge and wire it into both endpoints.

        Args:
            a: Handle of the first node
            side_a: Corner of a the edge attaches to
            b: Handle of the second node
            side_b: Corner of b the edge attaches to
            distance: Optional distance between the touching corners

        Returns:
            Handle of the new edge
        """
        if a == b:
            raise ValueError(f"Cannot connect node {a} to itself")
        for side in (side_a, side_b):
            if not 0 <= side < NUM_CORNERS:
                raise ValueError(f"Side {side} out of range [0,{NUM_CORNERS})")

        node_a = self.nodes[a]
        node_b = self.nodes[b]
        if node_a.edges[side_a] is not None:
            raise ValueError(f"Node {a} already has an edge at side {side_a}")
        if node_b.edges[side_b] is not None:
            raise ValueError(f"Node {b} already has an edge at side {side_b}")

        index = len(self.edges)
        self.edges.append(SquareEdge(a=a, side_a=side_a, b=b, side_b=side_b, distance=distance))
        node_a.edges[side_a] = index
        node_b.edges[side_b] = index
        return index

    def detach(self, index: int) -> None:
        """Remove an edge from both of its endpoints."""
        e = self.edge(index)
        self.nodes[e.a].edges[e.side_a] = None
        self.nodes[e.b].edges[e.side_b] = None
        self.edges[index] = None

    def neighbor(self, node: int, side: int) -> tuple[int, int] | None:
        """
        Follow the edge at a corner.

        Returns:
            (destination node, corner of the destination) or None if the
            corner has no edge
        """
        e = self.nodes[node].edges[side]
        if e is None:
            return None
        edge = self.edges[e]
        return edge.destination(node), edge.destination_side(node)

    def number_of_connections(self, node: int) -> int:
        return self.nodes[node].number_of_connections()


# ============================================================================
# Grid
# ============================================================================


@dataclass(slots=True)
class SquareGrid:
    """
    Ordered grid of squares, row-major.

    Empty cells (None) are the opposite color squares of a chessboard.
    """

    rows: int
    columns: int
    nodes: list[int | None]

    def __post_init__(self):
        if len(self.nodes) != self.rows * self.columns:
            raise ValueError(
                f"{self.rows}x{self.columns} grid needs {self.rows * self.columns} cells, got {len(self.nodes)}"
            )

    @classmethod
    def empty(cls, rows: int, columns: int) -> SquareGrid:
        return cls(rows=rows, columns=columns, nodes=[None] * (rows * columns))

    def _offset(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.columns):
            raise IndexError(
                f"Cell ({row}, {col}) outside of {self.rows}x{self.columns} grid"
            )
        return row * self.columns + col

    def get(self, row: int, col: int) -> int | None:
        return self.nodes[self._offset(row, col)]

    def set(self, row: int, col: int, node: int | None) -> None:
        self.nodes[self._offset(row, col)] = node

    def occupied(self) -> int:
        """Number of non-empty cells."""
        return sum(1 for n in self.nodes if n is not None)

    def to_array(self) -> np.ndarray:
        """
        Grid as a (rows, columns) array of node handles, -1 where empty.
        """
        cells = [-1 if n is None else n for n in self.nodes]
        return np.array(cells, dtype=np.int64).reshape(self.rows, self.columns)


# ============================================================================
# Configuration
# ============================================================================


@dataclass(frozen=True, slots=True)
class GridConfig:
    """
    Settings for turning clusters into grids.
    Corresponds to TOML [grids] section.
    """

    verbose: bool = False
    min_rows: int = 1  # Grids with fewer rows are discarded
    min_columns: int = 1  # Grids with fewer columns are discarded
