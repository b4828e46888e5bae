"""
Poetry Graph

Parses indentation-based "pseudo-Turtle" text into triples and projects them
into an integer-indexed, labeled, directed graph.
"""

__version__ = "1.0.0"

from . import utils
from . import focus
from . import triple_extractor
from . import graph_projector
from . import graph_builder
from . import graph_analyzer
from . import pipeline

from .focus import EdgeRef, NodeRef
from .graph_projector import GraphProjection, GraphProjector, project_graph
from .triple_extractor import Document, TripleExtractor, extract_triples

__all__ = [
    "utils",
    "focus",
    "triple_extractor",
    "graph_projector",
    "graph_builder",
    "graph_analyzer",
    "pipeline",
    "Document",
    "TripleExtractor",
    "extract_triples",
    "GraphProjection",
    "GraphProjector",
    "project_graph",
    "NodeRef",
    "EdgeRef",
]
