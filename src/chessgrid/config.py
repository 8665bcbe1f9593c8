"""
Configuration and data file loading/saving.

Pure functions operating on dataclasses, everything stored as TOML:
- grid settings ([grids] table)
- square graphs and their clusters
- assembled grids
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import rtoml

from .types import GridConfig, SquareGraph, SquareGrid


# ============================================================================
# Grid Settings
# ============================================================================


def load_grid_config(path: Path) -> GridConfig:
    """
    Load grid settings from TOML file.

    Missing keys (or a missing [grids] table) fall back to defaults.

    Args:
        path: Path to config.toml file

    Returns:
        GridConfig dataclass
    """
    data = rtoml.load(Path(path))
    section = data.get("grids", {})

    return GridConfig(
        verbose=bool(section.get("verbose", False)),
        min_rows=int(section.get("min_rows", 1)),
        min_columns=int(section.get("min_columns", 1)),
    )


def save_grid_config(config: GridConfig, path: Path) -> None:
    """
    Save grid settings to TOML file.

    Args:
        config: GridConfig dataclass
        path: Path to save config.toml
    """
    data = {
        "grids": {
            "verbose": config.verbose,
            "min_rows": config.min_rows,
            "min_columns": config.min_columns,
        }
    }

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        rtoml.dump(data, f)


# ============================================================================
# Square Graphs
# ============================================================================


def load_graph(path: Path) -> tuple[SquareGraph, list[list[int]]]:
    """
    Load a square graph and its clusters from TOML file.

    Format:
        clusters = [[0, 1, 2], ...]   # optional, default one cluster of all

        [[nodes]]
        center = [12.5, 40.0]          # optional

        [[edges]]
        a = 0
        side_a = 2
        b = 1
        side_b = 0
        distance = 1.5                 # optional

    Args:
        path: Path to graph file

    Returns:
        (graph, clusters)
    """
    data = rtoml.load(Path(path))

    graph = SquareGraph()
    for node_data in data.get("nodes", []):
        center = node_data.get("center")
        graph.add_node(center=None if center is None else np.array(center, dtype=np.float64))

    for i, edge_data in enumerate(data.get("edges", [])):
        try:
            a = int(edge_data["a"])
            side_a = int(edge_data["side_a"])
            b = int(edge_data["b"])
            side_b = int(edge_data["side_b"])
        except KeyError as e:
            raise ValueError(f"Edge {i} is missing key {e}") from e

        for n in (a, b):
            if not 0 <= n < len(graph.nodes):
                raise ValueError(f"Edge {i} refers to unknown node {n}")

        graph.connect(a, side_a, b, side_b, float(edge_data.get("distance", 0.0)))

    if "clusters" in data:
        clusters = [[int(n) for n in cluster] for cluster in data["clusters"]]
        for cluster in clusters:
            for n in cluster:
                if not 0 <= n < len(graph.nodes):
                    raise ValueError(f"Cluster refers to unknown node {n}")
    else:
        clusters = [list(range(len(graph.nodes)))]

    return graph, clusters


def save_graph(
    graph: SquareGraph,
    clusters: list[list[int]] | None,
    path: Path,
) -> None:
    """
    Save a square graph to TOML file.

    Detached edges are dropped, so edge handles are renumbered. Node handles
    are preserved.

    Args:
        graph: SquareGraph to save
        clusters: Optional clusters of node handles
        path: Path to graph file
    """
    nodes = []
    for node in graph.nodes:
        entry = {}
        if node.center is not None:
            entry["center"] = [float(v) for v in node.center]
        nodes.append(entry)

    edges = []
    for edge in graph.edges:
        if edge is None:
            continue
        edges.append({
            "a": edge.a,
            "side_a": edge.side_a,
            "b": edge.b,
            "side_b": edge.side_b,
            "distance": float(edge.distance),
        })

    data = {}
    if clusters is not None:
        data["clusters"] = [[int(n) for n in cluster] for cluster in clusters]
    data["nodes"] = nodes
    data["edges"] = edges

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        rtoml.dump(data, f)


# ============================================================================
# Grids
# ============================================================================


def save_grids(grids: list[SquareGrid], path: Path) -> None:
    """
    Save grids to TOML file.

    Cells are stored row-major with -1 marking empty cells.

    Args:
        grids: Grids to save
        path: Path to grids file
    """
    data = {
        "grids": [
            {
                "rows": grid.rows,
                "columns": grid.columns,
                "cells": grid.to_array().ravel().tolist(),
            }
            for grid in grids
        ]
    }

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        rtoml.dump(data, f)


def load_grids(path: Path) -> list[SquareGrid]:
    """
    Load grids from TOML file.

    Args:
        path: Path to grids file

    Returns:
        List of SquareGrid, empty if the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        return []

    data = rtoml.load(path)
    grids = []
    for grid_data in data.get("grids", []):
        rows = int(grid_data["rows"])
        columns = int(grid_data["columns"])
        cells = grid_data["cells"]
        grids.append(SquareGrid(
            rows=rows,
            columns=columns,
            nodes=[None if c < 0 else int(c) for c in cells],
        ))
    return grids
