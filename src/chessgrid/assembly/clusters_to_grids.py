"""
Conversion of cross connected clusters of squares into ordered grids.

Takes as input a set of unordered cross connected clusters and converts them
into ordered grids with known numbers of rows and columns. The output is a
valid "chessboard" pattern: rows and columns count both the white and the
black squares, only one color is present in the graph and the other shows up
as empty cells.

Rows are always ordered in the same direction. A row is collected by walking
a zig-zag through the squares of the neighboring row and keeping every other
square.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..types import NUM_CORNERS, GridConfig, SquareGraph, SquareGrid
from .circular import add_offset
from .validation import check_edge_count

logger = logging.getLogger(__name__)


class GridInvariantError(RuntimeError):
    """Internal traversal invariant was violated. Indicates a bug, not bad input."""


def find_seed_node(graph: SquareGraph, cluster: Sequence[int]) -> int | None:
    """
    Finds a seed with 1 or 2 edges.

    Args:
        graph: Graph the cluster belongs to
        cluster: Node handles in traversal order

    Returns:
        First node with 1 or 2 connections, None if there is none
    """
    for n in cluster:
        connections = graph.number_of_connections(n)
        if connections == 1 or connections == 2:
            return n
    return None


def flip_add(tmp: list[int], row: list[int]) -> None:
    """Append tmp to row in reverse order."""
    for i in range(len(tmp) - 1, -1, -1):
        row.append(tmp[i])


def assemble_grid(list_rows: Sequence[Sequence[int]], offset: int) -> SquareGrid:
    """
    Re-organize rows into a grid data structure.

    Squares of a row occupy every other column. Row 0 starts at column
    `offset` and each following row starts at the other parity.

    Args:
        list_rows: Rows of node handles, all ordered in the same direction
        offset: 0 if the first row starts in column 0, 1 if it is inset

    Returns:
        SquareGrid wide enough to hold every row
    """
    columns = 0
    for row_index, row in enumerate(list_rows):
        start = (offset + row_index) % 2
        columns = max(columns, start + 2 * len(row) - 1)

    grid = SquareGrid.empty(len(list_rows), columns)
    for row_index, row in enumerate(list_rows):
        start = (offset + row_index) % 2
        for i, node in enumerate(row):
            grid.set(row_index, start + 2 * i, node)
    return grid


class CrossClustersIntoGrids:
    """
    Converts clusters of squares into grids, discarding the ones which are not.

    Usage:
        alg = CrossClustersIntoGrids()
        grids = alg.process(graph, clusters)
    """

    def __init__(self, config: GridConfig | None = None):
        self.config = config or GridConfig()
        self.verbose = self.config.verbose
        self.grids: list[SquareGrid] = []
        self.graph: SquareGraph | None = None

        # Nodes already placed in the grid being built. Reset for every cluster
        self._visited: set[int] = set()

    def set_verbose(self, verbose: bool) -> None:
        self.verbose = verbose

    def get_grids(self) -> list[SquareGrid]:
        return self.grids

    def _log(self, msg: str, *args) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, msg, *args)

    # ========================================================================
    # Clusters
    # ========================================================================

    def process(
        self,
        graph: SquareGraph,
        clusters: Sequence[Sequence[int]],
    ) -> list[SquareGrid]:
        """
        Converts all the found clusters into grids, if they are valid.

        Args:
            graph: Graph holding every node referenced by the clusters
            clusters: List of clusters, each a list of node handles

        Returns:
            Grids found, in the same order as the clusters they came from
        """
        self.graph = graph
        self.grids = []
        for cluster in clusters:
            self.process_cluster(cluster)
        self._log("%d of %d clusters are grids", len(self.grids), len(clusters))
        return self.grids

    def process_cluster(self, cluster: Sequence[int]) -> None:
        """
        Converts the cluster into a grid data structure. If it's not a grid
        then nothing happens.
        """
        if self.graph is None:
            raise RuntimeError("No graph set, call process() first")
        graph = self.graph

        # an isolated square
        if len(cluster) == 1 and graph.number_of_connections(cluster[0]) == 0:
            self.grids.append(SquareGrid(rows=1, columns=1, nodes=[cluster[0]]))
            self._check_shape()
            return

        self._visited.clear()

        seed = find_seed_node(graph, cluster)
        if seed is None:
            self._log("cluster of %d: no node with 1 or 2 connections", len(cluster))
            return

        connections = graph.number_of_connections(seed)
        if connections == 1:
            first_row = self._first_row_1(seed)
        elif connections == 2:
            first_row = self._first_row_2(seed)
        else:
            raise GridInvariantError(f"Seed {seed} has {connections} connections")

        if first_row is None:
            self._log("cluster of %d: no first row from seed %d", len(cluster), seed)
            return

        # is the first column empty or not. Only the next row is unvisited at
        # this point, so a single open edge means the first square is a corner
        offset = 0 if self.number_of_open_edges(first_row[0]) == 1 else 1

        # Add the next rows to the list, one after another
        list_rows = [first_row]
        while True:
            row: list[int] = []
            if not self.add_next_row(list_rows[-1][0], row):
                self._log(
                    "cluster of %d: row %d runs into a square already in the grid",
                    len(cluster), len(list_rows),
                )
                return
            if not row:
                break
            list_rows.append(row)

        grid = assemble_grid(list_rows, offset)
        self.grids.append(grid)

        # check the grid's connectivity
        if not check_edge_count(graph, grid):
            self.grids.pop()
            self._log(
                "cluster of %d: %dx%d grid has unexpected edge counts",
                len(cluster), grid.rows, grid.columns,
            )
            return

        self._check_shape()

    def _check_shape(self) -> None:
        """Discard the last grid if it's smaller than the configured minimum."""
        grid = self.grids[-1]
        if grid.rows < self.config.min_rows or grid.columns < self.config.min_columns:
            self.grids.pop()
            self._log("discarding %dx%d grid, too small", grid.rows, grid.columns)
        else:
            self._log("found %dx%d grid", grid.rows, grid.columns)

    # ========================================================================
    # Rows
    # ========================================================================

    def _first_row_1(self, seed: int) -> list[int] | None:
        for i in range(NUM_CORNERS):
            if self.is_open_edge(seed, i):
                row = [seed]
                self._visited.add(seed)
                if not self.add_to_row(seed, i, 1, True, row):
                    return None
                return row
        raise GridInvariantError(f"Seed {seed} has no open edge")

    def _first_row_2(self, seed: int) -> list[int] | None:
        index_lower = self.lower_edge_index(seed)
        index_upper = add_offset(index_lower, 1, NUM_CORNERS)
        if not (self.is_open_edge(seed, index_lower) and self.is_open_edge(seed, index_upper)):
            return None

        self._visited.add(seed)

        list_down: list[int] = []
        row: list[int] = []
        if not self.add_to_row(seed, index_lower, -1, True, list_down):
            return None
        flip_add(list_down, row)
        row.append(seed)
        if not self.add_to_row(seed, index_upper, 1, True, row):
            return None
        return row

    def add_next_row(self, seed: int, row: list[int]) -> bool:
        """
        Given a node, find all the squares in the row next to it.

        The seed is the first square of the previous row. The new row is
        ordered in the same direction as the previous one and written into
        `row`, which is left empty if there is no further row.

        Returns:
            False if the walk ran into a square already in the grid
        """
        graph = self.graph
        num_connections = self.number_of_open_edges(seed)

        if num_connections == 1:
            for i in range(NUM_CORNERS):
                if not self.is_open_edge(seed, i):
                    continue

                # determine which direction to traverse along
                dst, corner = graph.neighbor(seed, i)
                lower = graph.neighbor(dst, add_offset(corner, -1, NUM_CORNERS))
                upper = graph.neighbor(dst, add_offset(corner, 1, NUM_CORNERS))

                if lower is not None and lower[0] not in self._visited:
                    # dst comes before the seed
                    tmp: list[int] = []
                    if not self.add_to_row(seed, i, -1, False, tmp):
                        return False
                    flip_add(tmp, row)
                elif lower is not None or upper is not None:
                    return self.add_to_row(seed, i, 1, False, row)
                else:
                    self._visited.add(dst)
                    row.append(dst)
                break

        elif num_connections == 2:
            index_lower = self.lower_edge_index(seed)
            index_upper = add_offset(index_lower, 1, NUM_CORNERS)
            # the two open edges must be on neighboring corners
            if not (self.is_open_edge(seed, index_lower) and self.is_open_edge(seed, index_upper)):
                return True

            tmp = []
            if not self.add_to_row(seed, index_lower, -1, False, tmp):
                return False
            flip_add(tmp, row)
            return self.add_to_row(seed, index_upper, 1, False, row)

        return True

    def add_to_row(
        self,
        n: int,
        corner: int,
        sign: int,
        skip: bool,
        row: list[int],
    ) -> bool:
        """
        Given a node and the corner to the next node down the line, add to
        the list every other node until it hits the end of the row.

        Every node that would be added is marked as visited, so a walk that
        loops back on itself stops at the first node it sees a second time.

        Args:
            n: Initial node
            corner: Which corner points to the next node
            sign: Determines the direction it will traverse. -1 or 1
            skip: True = start adding nodes at second, False = start first
            row: List that the nodes are placed into

        Returns:
            True if the end of the row was reached, False if the walk hit a
            node that is already in the grid
        """
        graph = self.graph
        while True:
            step = graph.neighbor(n, corner)
            if step is None:
                return True
            n, corner = step

            if not skip:
                if n in self._visited:
                    return False
                self._visited.add(n)
                row.append(n)
            skip = not skip
            sign *= -1
            corner = add_offset(corner, sign, NUM_CORNERS)

    # ========================================================================
    # Open edges
    # ========================================================================

    def lower_edge_index(self, node: int) -> int:
        """
        Returns the index which comes first. Assumes that there are two options.
        """
        if self.is_open_edge(node, 0):
            if self.is_open_edge(node, 1):
                return 0
            return 3

        for i in range(1, NUM_CORNERS):
            if self.is_open_edge(node, i):
                return i

        raise GridInvariantError(f"Node {node} has no open edge")

    def number_of_open_edges(self, node: int) -> int:
        total = 0
        for i in range(NUM_CORNERS):
            if self.is_open_edge(node, i):
                total += 1
        return total

    def is_open_edge(self, node: int, index: int) -> bool:
        """
        Is the edge open and can be traversed to? Can't be empty and can't
        lead to a node already in the grid.
        """
        step = self.graph.neighbor(node, index)
        if step is None:
            return False
        return step[0] not in self._visited
