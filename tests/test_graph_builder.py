"""
Unit tests for NetworkX graph construction and analysis.
"""

import json

import networkx as nx
import pytest
from poetry_graph.graph_analyzer import GraphAnalyzer
from poetry_graph.graph_builder import NetworkXGraphBuilder, build_networkx_graph
from poetry_graph.graph_projector import GraphProjection, project_graph
from poetry_graph.triple_extractor import extract_triples


SAMPLE_TEXT = """this knowledge graph
  is a graph
a graph
  has nodes
  has edges
edges
  have labels
"""


@pytest.fixture
def sample_projection():
    """Project the sample text."""
    return project_graph(extract_triples(SAMPLE_TEXT))


class TestNetworkXGraphBuilder:
    """Test suite for NetworkXGraphBuilder class."""

    @pytest.fixture
    def builder(self):
        """Create builder instance for testing."""
        return NetworkXGraphBuilder()

    def test_build_graph(self, builder, sample_projection):
        """Test nodes and edges mirror the projection."""
        graph = builder.build_graph(sample_projection)

        assert isinstance(graph, nx.MultiDiGraph)
        assert graph.number_of_nodes() == 5
        assert graph.number_of_edges() == 4
        assert graph.nodes[0]["name"] == "this knowledge graph"

    def test_edge_labels(self, builder, sample_projection):
        """Test edges carry the predicate as label."""
        graph = builder.build_graph(sample_projection)
        labels = {(u, v): data["label"] for u, v, data in graph.edges(data=True)}

        assert labels[(0, 1)] == "is"
        assert labels[(2, 4)] == "have"

    def test_parallel_edges_survive(self, builder):
        """Test duplicate projected edges stay parallel edges."""
        projection = project_graph(extract_triples("a\n  knows b\n  likes b"))
        graph = builder.build_graph(projection)

        assert graph.number_of_edges(0, 1) == 2

    def test_isolated_nodes_kept(self, builder):
        """Test nodes without edges are part of the graph."""
        graph = builder.build_graph(project_graph(extract_triples("a\nb")))

        assert set(graph.nodes) == {0, 1}
        assert graph.number_of_edges() == 0

    def test_rebuild_replaces_graph(self, builder, sample_projection):
        """Test building twice does not accumulate edges."""
        builder.build_graph(sample_projection)
        graph = builder.build_graph(sample_projection)

        assert graph.number_of_edges() == 4

    def test_graph_stats(self, builder, sample_projection):
        """Test graph statistics."""
        builder.build_graph(sample_projection)
        stats = builder.get_graph_stats()

        assert stats["total_nodes"] == 5
        assert stats["total_edges"] == 4
        assert stats["num_connected_components"] == 1
        assert stats["edge_label_distribution"] == {"is": 1, "has": 2, "have": 1}

    def test_graph_stats_empty(self, builder):
        """Test statistics of an empty graph."""
        stats = builder.get_graph_stats()

        assert stats["total_nodes"] == 0
        assert stats["num_connected_components"] == 0

    def test_clear_graph(self, builder, sample_projection):
        """Test clearing the graph."""
        builder.build_graph(sample_projection)
        builder.clear_graph()

        assert builder.graph.number_of_nodes() == 0

    def test_build_graph_clears_existing_graph(self, sample_projection):
        """Test a builder seeded with a graph replaces its contents."""
        graph = nx.MultiDiGraph()
        graph.add_edge("stale", "edge")
        builder = NetworkXGraphBuilder(graph)

        built = builder.build_graph(sample_projection)

        assert built is graph
        assert "stale" not in built
        assert built.number_of_nodes() == 5

    def test_export_seeded_graph(self, tmp_path):
        """Test a builder exports the graph it was given unchanged."""
        graph = nx.MultiDiGraph(source="notes")
        graph.add_node(0, name="a")
        output = tmp_path / "graph.json"

        NetworkXGraphBuilder(graph).export_graph(str(output), "json")

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["graph"] == {"source": "notes"}
        assert data["nodes"] == [{"name": "a", "id": 0}]

    def test_export_graphml(self, builder, sample_projection, tmp_path):
        """Test GraphML export round-trips node names."""
        builder.build_graph(sample_projection)
        output = tmp_path / "graph.graphml"
        builder.export_graph(str(output), "graphml")

        loaded = nx.read_graphml(output)
        assert sorted(data["name"] for _, data in loaded.nodes(data=True)) == sorted(
            sample_projection.nodes
        )

    def test_export_json(self, builder, sample_projection, tmp_path):
        """Test node-link JSON export."""
        builder.build_graph(sample_projection)
        output = tmp_path / "graph.json"
        builder.export_graph(str(output), "json")

        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["nodes"]) == 5
        assert len(data["edges"]) == 4

    def test_export_gexf(self, builder, sample_projection, tmp_path):
        """Test GEXF export writes a file."""
        builder.build_graph(sample_projection)
        output = tmp_path / "nested" / "graph.gexf"
        builder.export_graph(str(output), "gexf")

        assert output.exists()

    def test_export_unsupported_format(self, builder, tmp_path):
        """Test unsupported formats raise ValueError."""
        with pytest.raises(ValueError):
            builder.export_graph(str(tmp_path / "graph.dot"), "dot")

    def test_build_networkx_graph_helper(self):
        """Test the module-level helper."""
        graph = build_networkx_graph(GraphProjection(["a"], [(0, 0)], {(0, 0): "is"}))

        assert graph.nodes[0]["name"] == "a"
        assert nx.number_of_selfloops(graph) == 1


class TestGraphAnalyzer:
    """Test suite for GraphAnalyzer class."""

    @pytest.fixture
    def analyzer(self, sample_projection):
        """Create analyzer over the sample graph."""
        return GraphAnalyzer(build_networkx_graph(sample_projection))

    def test_basic_statistics(self, analyzer):
        """Test basic statistics."""
        stats = analyzer.basic_statistics()

        assert stats["total_nodes"] == 5
        assert stats["total_edges"] == 4
        assert stats["is_directed"] is True
        assert stats["is_connected"] is True

    def test_basic_statistics_empty_graph(self):
        """Test basic statistics on an empty graph."""
        stats = GraphAnalyzer(nx.MultiDiGraph()).basic_statistics()

        assert stats["total_nodes"] == 0
        assert stats["is_connected"] is False

    def test_structural_analysis(self, analyzer):
        """Test structural analysis."""
        structure = analyzer.structural_analysis()

        assert structure["connected_components"] == 1
        assert structure["largest_component_size"] == 5
        assert structure["self_loops"] == 0
        assert structure["average_clustering_coefficient"] == 0.0

    def test_structural_analysis_with_self_loop(self):
        """Test self loops are counted and do not break clustering."""
        graph = build_networkx_graph(project_graph(extract_triples("loop\n  refers to loop")))
        structure = GraphAnalyzer(graph).structural_analysis()

        assert structure["self_loops"] == 1
        assert structure["connected_components"] == 1

    def test_centrality_analysis(self, analyzer):
        """Test centrality rankings use node names."""
        metrics = analyzer.centrality_analysis(top_n=1)

        assert metrics["top_degree_nodes"][0]["node"] == "a graph"
        assert len(metrics["top_pagerank_nodes"]) == 1

    def test_degree_distribution(self, analyzer):
        """Test degree distribution."""
        dist = analyzer.degree_distribution()

        assert dist["max_degree"] == 3
        assert dist["min_degree"] == 1
        assert sum(dist["degree_histogram"].values()) == 5

    def test_degree_distribution_empty(self):
        """Test degree distribution on an empty graph."""
        dist = GraphAnalyzer(nx.MultiDiGraph()).degree_distribution()

        assert dist["degree_histogram"] == {}

    def test_node_neighborhood(self, analyzer, sample_projection):
        """Test outgoing neighborhood of a node."""
        node_id = sample_projection.index_of("a graph")
        neighborhood = analyzer.get_node_neighborhood(node_id, depth=2)

        assert neighborhood["name"] == "a graph"
        assert neighborhood["neighbors"] == ["edges", "nodes"]
        assert neighborhood["neighbors_by_depth"]["depth_2"] == ["labels"]
        assert neighborhood["total_reachable"] == 3
        assert neighborhood["in_degree"] == 1
        assert neighborhood["out_degree"] == 2

    def test_node_neighborhood_unknown(self, analyzer):
        """Test unknown nodes report an error entry."""
        assert "error" in analyzer.get_node_neighborhood(42)

    def test_analyze_complete(self, analyzer, tmp_path):
        """Test full analysis and export."""
        analysis = analyzer.analyze_complete()

        assert set(analysis) == {
            "basic_stats", "centrality_metrics", "structural_analysis",
            "degree_distribution", "neighborhoods"
        }
        assert [entry["node_id"] for entry in analysis["neighborhoods"]] == [0, 1, 2, 3, 4]
        assert "depth_2" not in analysis["neighborhoods"][0]["neighbors_by_depth"]

        output = tmp_path / "analysis.json"
        analyzer.export_analysis(analysis, str(output))
        assert json.loads(output.read_text(encoding="utf-8"))["basic_stats"]["total_nodes"] == 5


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
