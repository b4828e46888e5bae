"""
NetworkX Graph Construction Module

Builds NetworkX graphs from graph projections so that the parsed poetry can
be handed to graph algorithms or exported to standard graph file formats.
"""

from typing import Any, Dict, Optional
import json
import logging
from collections import Counter
from pathlib import Path
import networkx as nx
from networkx.readwrite import json_graph
from .graph_projector import GraphProjection


class NetworkXGraphBuilder:
    """
    Graph constructor using NetworkX.

    Nodes are the projection indices and carry the node label as ``name``.
    Every projected edge becomes its own edge in a MultiDiGraph with the
    predicate stored as ``label``, so parallel edges survive.

    Attributes:
        graph: NetworkX MultiDiGraph instance

    Examples:
        >>> builder = NetworkXGraphBuilder()
        >>> projection = GraphProjection(["a", "b"], [(0, 1)], {(0, 1): "knows"})
        >>> graph = builder.build_graph(projection)
        >>> graph.number_of_edges()
        1
    """

    def __init__(self, graph: Optional[nx.MultiDiGraph] = None):
        """
        Initialize the builder.

        Args:
            graph: Existing graph to export or rebuild (a new one if None)
        """
        self.graph = graph if graph is not None else nx.MultiDiGraph()
        self.logger = logging.getLogger(__name__)
        self.logger.debug("Initialized NetworkX graph builder")

    def build_graph(self, projection: GraphProjection) -> nx.MultiDiGraph:
        """
        Build NetworkX graph from a projection.

        Args:
            projection: Projected nodes, edges and labels

        Returns:
            NetworkX graph object
        """
        self.clear_graph()

        for index, name in enumerate(projection.nodes):
            self.graph.add_node(index, name=name)

        for source, target in projection.edges:
            self.graph.add_edge(
                source,
                target,
                label=projection.labels.get((source, target), '')
            )

        self.logger.info(
            f"Graph built: {self.graph.number_of_nodes()} nodes, "
            f"{self.graph.number_of_edges()} edges"
        )

        return self.graph

    def clear_graph(self) -> None:
        """Clear all nodes and edges from the graph."""
        self.graph.clear()
        self.logger.debug("Cleared graph")

    def get_graph_stats(self) -> Dict[str, Any]:
        """
        Calculate graph statistics.

        Returns:
            Dictionary with statistics
        """
        total_nodes = self.graph.number_of_nodes()
        total_edges = self.graph.number_of_edges()

        edge_labels = Counter(
            data.get('label', '')
            for _, _, data in self.graph.edges(data=True)
        )

        if total_nodes > 0:
            density = nx.density(self.graph)
            num_components = nx.number_weakly_connected_components(self.graph)
            avg_degree = sum(dict(self.graph.degree()).values()) / total_nodes
        else:
            density = 0.0
            num_components = 0
            avg_degree = 0

        stats = {
            'total_nodes': total_nodes,
            'total_edges': total_edges,
            'density': round(density, 4),
            'num_connected_components': num_components,
            'average_degree': round(avg_degree, 2),
            'edge_label_distribution': dict(edge_labels)
        }

        self.logger.info(f"Graph stats: {total_nodes} nodes, {total_edges} edges")

        return stats

    def export_graph(self, output_path: str, format: str = "graphml") -> None:
        """
        Export NetworkX graph to file.

        Args:
            output_path: Output file path
            format: Format (graphml, gexf, json)
        """
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        if format == "graphml":
            nx.write_graphml(self.graph, output_path)
        elif format == "gexf":
            nx.write_gexf(self.graph, output_path)
        elif format == "json":
            data = json_graph.node_link_data(self.graph, edges="edges")
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        else:
            raise ValueError(f"Unsupported format: {format}")

        self.logger.info(f"Exported graph to {output_path} ({format})")


# Utility Functions

def build_networkx_graph(projection: GraphProjection) -> nx.MultiDiGraph:
    """
    Build a MultiDiGraph from a projection.

    Examples:
        >>> graph = build_networkx_graph(GraphProjection(["a"], [(0, 0)], {(0, 0): "is"}))
        >>> graph.nodes[0]['name']
        'a'
    """
    return NetworkXGraphBuilder().build_graph(projection)


# Module logger
logger = logging.getLogger(__name__)
