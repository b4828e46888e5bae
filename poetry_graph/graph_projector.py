"""
Graph Projection Module

Converts an extracted Document into compact, integer-indexed node and edge
lists with a label per edge, ready for graph algorithms and renderers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging
from collections import Counter
from .focus import EdgeRef, FocusRef, NodeRef
from .triple_extractor import Document


@dataclass
class GraphProjection:
    """
    Index-based view of a Document.

    Attributes:
        nodes: Node labels, indexed 0..n-1 in triples key order
        edges: Directed (source, target) index pairs, duplicates kept
        labels: Predicate per (source, target) pair, last write wins
    """

    nodes: List[str] = field(default_factory=list)
    edges: List[Tuple[int, int]] = field(default_factory=list)
    labels: Dict[Tuple[int, int], str] = field(default_factory=dict)

    def index_of(self, name: str) -> Optional[int]:
        """Return the index of a node label, or None if unknown."""
        try:
            return self.nodes.index(name)
        except ValueError:
            return None

    def describe(self, ref: FocusRef) -> Optional[str]:
        """
        Return display text for a focus reference.

        Node references resolve to the node label, edge references to the
        edge label. Out-of-range or unknown references give None.

        Examples:
            >>> projection = GraphProjection(["a", "b"], [(0, 1)], {(0, 1): "knows"})
            >>> projection.describe(EdgeRef(0, 1))
            'knows'
        """
        if isinstance(ref, NodeRef):
            if 0 <= ref.index < len(self.nodes):
                return self.nodes[ref.index]
            return None
        if isinstance(ref, EdgeRef):
            return self.labels.get((ref.source, ref.target))
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": list(self.nodes),
            "edges": [list(edge) for edge in self.edges],
            "labels": [
                {"source": source, "target": target, "label": label}
                for (source, target), label in self.labels.items()
            ],
        }


class GraphProjector:
    """
    Projects Documents into GraphProjections.

    Projection is a pure function of the Document; the projector keeps no
    state between calls.

    Examples:
        >>> from poetry_graph.triple_extractor import extract_triples
        >>> projector = GraphProjector()
        >>> projection = projector.project(extract_triples("a\\n  knows b"))
        >>> projection.nodes, projection.edges
        (['a', 'b'], [(0, 1)])
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def project(self, document: Document) -> GraphProjection:
        """
        Build node, edge and label collections from a Document.

        Args:
            document: Completed extraction result

        Returns:
            GraphProjection over the document's triples
        """
        nodes = list(document.triples)
        index = {name: position for position, name in enumerate(nodes)}

        resolved: List[Tuple[Tuple[int, int], str]] = []
        for subject, predicate, object_ in document.iter_triples():
            source = index.get(subject)
            target = index.get(object_)
            if source is None or target is None:
                self.logger.debug(
                    f"Skipping unresolved triple: {subject} -[{predicate}]-> {object_}"
                )
                continue
            resolved.append(((source, target), predicate))

        edges = [pair for pair, _ in resolved]
        labels: Dict[Tuple[int, int], str] = {}
        for pair, predicate in resolved:
            labels[pair] = predicate

        self.logger.info(f"Projected {len(nodes)} nodes and {len(edges)} edges")

        return GraphProjection(nodes=nodes, edges=edges, labels=labels)

    def get_statistics(self, projection: GraphProjection) -> Dict[str, Any]:
        """
        Calculate statistics for a projection.

        Args:
            projection: Projection to summarize

        Returns:
            Statistics dictionary with counts and label distribution

        Examples:
            >>> projector = GraphProjector()
            >>> stats = projector.get_statistics(GraphProjection())
            >>> stats['total_nodes']
            0
        """
        if not projection.nodes:
            return self._empty_statistics()

        touched = set()
        for source, target in projection.edges:
            touched.add(source)
            touched.add(target)

        label_distribution = Counter(projection.labels.values())

        return {
            "total_nodes": len(projection.nodes),
            "total_edges": len(projection.edges),
            "distinct_edges": len(set(projection.edges)),
            "self_loops": sum(1 for source, target in projection.edges if source == target),
            "isolated_nodes": len(projection.nodes) - len(touched),
            "label_distribution": dict(label_distribution),
        }

    def _empty_statistics(self) -> Dict[str, Any]:
        """Return empty statistics dictionary."""
        return {
            "total_nodes": 0,
            "total_edges": 0,
            "distinct_edges": 0,
            "self_loops": 0,
            "isolated_nodes": 0,
            "label_distribution": {},
        }


# Utility Functions

def project_graph(document: Document) -> GraphProjection:
    """Project a Document with a default projector."""
    return GraphProjector().project(document)


# Module logger
logger = logging.getLogger(__name__)
