"""
Graph Analysis Module

Provides analysis of parsed poetry graphs: basic statistics, centrality,
structure, degree distribution and node neighborhoods.
"""

from typing import Any, Dict, List
import statistics
import networkx as nx
from collections import Counter
import logging
from .utils import save_json, time_function


class GraphAnalyzer:
    """
    Analyzes NetworkX graphs built from graph projections.

    Nodes are expected to be projection indices carrying a ``name``
    attribute; reports use the names so they read like the source text.

    Attributes:
        graph: NetworkX graph

    Examples:
        >>> import networkx as nx
        >>> G = nx.MultiDiGraph()
        >>> G.add_edge(0, 1)
        0
        >>> analyzer = GraphAnalyzer(G)
        >>> analyzer.basic_statistics()['total_nodes']
        2
    """

    def __init__(self, graph: nx.Graph):
        """
        Initialize analyzer.

        Args:
            graph: NetworkX graph
        """
        self.graph = graph
        self.logger = logging.getLogger(__name__)

        self.logger.debug(f"GraphAnalyzer initialized for graph with {graph.number_of_nodes()} nodes")

    @time_function
    def analyze_complete(self, top_n: int = 10, neighborhood_depth: int = 1) -> Dict[str, Any]:
        """
        Perform complete graph analysis.

        Args:
            top_n: Number of nodes kept in each centrality ranking
            neighborhood_depth: Hops followed for each node neighborhood

        Returns:
            Analysis dictionary containing basic_stats, centrality_metrics,
            structural_analysis, degree_distribution and neighborhoods
        """
        self.logger.info("Starting complete graph analysis")

        analysis = {
            "basic_stats": self.basic_statistics(),
            "centrality_metrics": self.centrality_analysis(top_n=top_n),
            "structural_analysis": self.structural_analysis(),
            "degree_distribution": self.degree_distribution(),
            "neighborhoods": [
                self.get_node_neighborhood(node, depth=neighborhood_depth)
                for node in self.graph.nodes
            ],
        }

        self.logger.info("Complete analysis finished")

        return analysis

    def basic_statistics(self) -> Dict[str, Any]:
        """
        Calculate basic graph statistics.

        Returns:
            Basic stats dictionary with total_nodes, total_edges,
            graph_density, average_degree, is_directed, is_connected
        """
        total_nodes = self.graph.number_of_nodes()
        total_edges = self.graph.number_of_edges()

        if total_nodes > 1:
            density = nx.density(self.graph)
        else:
            density = 0.0

        if total_nodes > 0:
            degrees = dict(self.graph.degree())
            avg_degree = sum(degrees.values()) / total_nodes
        else:
            avg_degree = 0.0

        is_directed = self.graph.is_directed()

        # Connectivity is undefined for the null graph
        if total_nodes == 0:
            is_connected = False
        elif is_directed:
            is_connected = nx.is_weakly_connected(self.graph)
        else:
            is_connected = nx.is_connected(self.graph)

        stats = {
            "total_nodes": total_nodes,
            "total_edges": total_edges,
            "graph_density": round(density, 4),
            "average_degree": round(avg_degree, 2),
            "is_directed": is_directed,
            "is_connected": is_connected
        }

        self.logger.debug(f"Basic stats: {total_nodes} nodes, {total_edges} edges")

        return stats

    def centrality_analysis(self, top_n: int = 10) -> Dict[str, Any]:
        """Rank nodes by degree centrality and PageRank."""
        if self.graph.number_of_nodes() == 0:
            return {"top_degree_nodes": [], "top_pagerank_nodes": []}

        degree_cent = nx.degree_centrality(self.graph)
        top_degree = sorted(degree_cent.items(), key=lambda x: x[1], reverse=True)[:top_n]

        pagerank = nx.pagerank(self.graph, alpha=0.85, max_iter=100)
        top_pagerank = sorted(pagerank.items(), key=lambda x: x[1], reverse=True)[:top_n]

        return {
            "top_degree_nodes": [
                {"node": self._name(node), "centrality": round(score, 4)}
                for node, score in top_degree
            ],
            "top_pagerank_nodes": [
                {"node": self._name(node), "score": round(score, 4)}
                for node, score in top_pagerank
            ],
        }

    def structural_analysis(self) -> Dict[str, Any]:
        """
        Analyze graph structure.

        Returns:
            Structural analysis dictionary with connected_components,
            largest_component_size, self_loops, average_clustering_coefficient
        """
        self.logger.info("Performing structural analysis")

        if self.graph.is_directed():
            components = list(nx.weakly_connected_components(self.graph))
        else:
            components = list(nx.connected_components(self.graph))

        # Clustering is only defined on simple undirected graphs
        simple = nx.Graph(self.graph.to_undirected())
        simple.remove_edges_from(nx.selfloop_edges(simple))

        analysis = {
            "connected_components": len(components),
            "largest_component_size": len(max(components, key=len)) if components else 0,
            "self_loops": nx.number_of_selfloops(self.graph),
            "average_clustering_coefficient": (
                round(nx.average_clustering(simple), 4) if simple.number_of_nodes() else 0.0
            ),
        }

        self.logger.info("Structural analysis complete")

        return analysis

    def degree_distribution(self) -> Dict[str, Any]:
        """
        Analyze degree distribution.

        Returns:
            Degree distribution stats with mean_degree, median_degree,
            max_degree, min_degree, degree_histogram
        """
        degrees = [d for _, d in self.graph.degree()]

        if not degrees:
            return {
                "mean_degree": 0,
                "median_degree": 0,
                "max_degree": 0,
                "min_degree": 0,
                "degree_histogram": {}
            }

        degree_counts = Counter(degrees)

        return {
            "mean_degree": round(statistics.mean(degrees), 2),
            "median_degree": statistics.median(degrees),
            "max_degree": max(degrees),
            "min_degree": min(degrees),
            "degree_histogram": dict(sorted(degree_counts.items()))
        }

    def export_analysis(self, analysis: Dict[str, Any], output_path: str) -> None:
        """
        Export analysis results to JSON.

        Args:
            analysis: Analysis results dictionary
            output_path: Output file path
        """
        save_json(analysis, output_path, indent=2)
        self.logger.info(f"Exported analysis to {output_path}")

    def get_node_neighborhood(self, node_id: int, depth: int = 1) -> Dict[str, Any]:
        """
        Get neighborhood information for a specific node.

        Follows outgoing edges only, so neighbors are the objects reachable
        from the node's properties.

        Args:
            node_id: Node index
            depth: Neighborhood depth (hops)

        Returns:
            Dictionary with neighborhood info, or an ``error`` entry if the
            node is unknown
        """
        if node_id not in self.graph:
            return {"error": f"Node {node_id} not found in graph"}

        neighbors_by_depth: Dict[str, List[str]] = {}

        current_level = {node_id}
        visited = {node_id}

        for d in range(1, depth + 1):
            next_level = set()
            for node in current_level:
                for neighbor in self.graph.neighbors(node):
                    if neighbor not in visited:
                        next_level.add(neighbor)
                        visited.add(neighbor)

            neighbors_by_depth[f"depth_{d}"] = sorted(self._name(n) for n in next_level)
            current_level = next_level

        return {
            "node_id": node_id,
            "name": self._name(node_id),
            "degree": self.graph.degree(node_id),
            "out_degree": self.graph.out_degree(node_id),
            "in_degree": self.graph.in_degree(node_id),
            "neighbors": sorted({self._name(n) for n in self.graph.neighbors(node_id)}),
            "neighbors_by_depth": neighbors_by_depth,
            "total_reachable": len(visited) - 1
        }

    def _name(self, node: Any) -> str:
        return self.graph.nodes[node].get('name', str(node))


# Module logger
logger = logging.getLogger(__name__)
