"""
Tests for chessgrid.config (TOML settings, graphs and grids).
"""

import numpy as np
import pytest

from chessgrid.assembly import CrossClustersIntoGrids, create_chessboard_graph
from chessgrid.config import (
    load_graph,
    load_grid_config,
    load_grids,
    save_graph,
    save_grid_config,
    save_grids,
)
from chessgrid.types import GridConfig, SquareGraph, SquareGrid


class TestGridConfig:
    def test_save_and_load_roundtrip(self, temp_dir):
        original = GridConfig(verbose=True, min_rows=3, min_columns=4)
        path = temp_dir / "config.toml"
        save_grid_config(original, path)

        assert path.exists()
        assert load_grid_config(path) == original

    def test_missing_section_uses_defaults(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("[other]\nvalue = 1\n")
        assert load_grid_config(path) == GridConfig()

    def test_partial_section(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("[grids]\nmin_rows = 5\n")
        config = load_grid_config(path)
        assert config.min_rows == 5
        assert config.min_columns == 1
        assert config.verbose is False

    def test_creates_parent_dirs(self, temp_dir):
        path = temp_dir / "nested" / "dir" / "config.toml"
        save_grid_config(GridConfig(), path)
        assert path.exists()


class TestGraphFile:
    def test_save_and_load_roundtrip(self, temp_dir):
        graph, positions = create_chessboard_graph(3, 5, rotations=1)
        clusters = [list(range(len(positions)))]
        path = temp_dir / "graph.toml"
        save_graph(graph, clusters, path)

        loaded, loaded_clusters = load_graph(path)
        assert loaded_clusters == clusters
        assert len(loaded.nodes) == len(graph.nodes)
        for original, node in zip(graph.nodes, loaded.nodes):
            np.testing.assert_array_almost_equal(node.center, original.center)
            assert node.number_of_connections() == original.number_of_connections()
        assert loaded.edges == graph.edges

    def test_loaded_graph_gives_same_grid(self, temp_dir):
        graph, positions = create_chessboard_graph(4, 4, rotations=3)
        clusters = [list(range(len(positions)))]
        path = temp_dir / "graph.toml"
        save_graph(graph, clusters, path)
        loaded, loaded_clusters = load_graph(path)

        expected = CrossClustersIntoGrids().process(graph, clusters)
        found = CrossClustersIntoGrids().process(loaded, loaded_clusters)
        assert [g.nodes for g in found] == [g.nodes for g in expected]

    def test_default_cluster(self, temp_dir):
        path = temp_dir / "graph.toml"
        path.write_text(
            "[[nodes]]\ncenter = [0.5, 0.5]\n\n"
            "[[nodes]]\ncenter = [1.5, 1.5]\n\n"
            "[[edges]]\na = 0\nside_a = 2\nb = 1\nside_b = 0\n"
        )
        graph, clusters = load_graph(path)
        assert clusters == [[0, 1]]
        assert graph.neighbor(0, 2) == (1, 0)
        assert graph.edge(0).distance == 0.0

    def test_nodes_without_center(self, temp_dir):
        graph = SquareGraph()
        graph.add_node()
        graph.add_node(center=[2.0, 3.0])
        path = temp_dir / "graph.toml"
        save_graph(graph, None, path)

        loaded, clusters = load_graph(path)
        assert loaded.node(0).center is None
        np.testing.assert_array_equal(loaded.node(1).center, [2.0, 3.0])
        assert clusters == [[0, 1]]

    def test_detached_edges_dropped(self, temp_dir):
        graph, positions = create_chessboard_graph(3, 3)
        graph.detach(0)
        path = temp_dir / "graph.toml"
        save_graph(graph, None, path)

        loaded, _ = load_graph(path)
        assert len(loaded.edges) == len(graph.edges) - 1

    def test_missing_edge_key(self, temp_dir):
        path = temp_dir / "graph.toml"
        path.write_text(
            "[[nodes]]\n\n[[nodes]]\n\n"
            "[[edges]]\na = 0\nside_a = 2\nb = 1\n"
        )
        with pytest.raises(ValueError, match="side_b"):
            load_graph(path)

    def test_unknown_node(self, temp_dir):
        path = temp_dir / "graph.toml"
        path.write_text(
            "[[nodes]]\n\n"
            "[[edges]]\na = 0\nside_a = 2\nb = 5\nside_b = 0\n"
        )
        with pytest.raises(ValueError, match="unknown node"):
            load_graph(path)

    def test_unknown_node_in_cluster(self, temp_dir):
        path = temp_dir / "graph.toml"
        path.write_text("clusters = [[0, 3]]\n\n[[nodes]]\n")
        with pytest.raises(ValueError, match="unknown node"):
            load_graph(path)


class TestGridsFile:
    def test_save_and_load_roundtrip(self, temp_dir):
        grids = [
            SquareGrid(rows=1, columns=1, nodes=[4]),
            SquareGrid(rows=2, columns=3, nodes=[0, None, 1, None, 2, None]),
        ]
        path = temp_dir / "grids.toml"
        save_grids(grids, path)
        assert load_grids(path) == grids

    def test_empty_list(self, temp_dir):
        path = temp_dir / "grids.toml"
        save_grids([], path)
        assert load_grids(path) == []

    def test_nonexistent_file(self, temp_dir):
        assert load_grids(temp_dir / "nonexistent.toml") == []

    def test_wrong_cell_count(self, temp_dir):
        path = temp_dir / "grids.toml"
        path.write_text("[[grids]]\nrows = 2\ncolumns = 2\ncells = [0, -1, 1]\n")
        with pytest.raises(ValueError):
            load_grids(path)
