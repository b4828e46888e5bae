"""
Poetry Graph Pipeline

Runs text through extraction and projection, optionally analyzes the
resulting graph and writes the artifacts configured in ``config.yaml``.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging
from .graph_analyzer import GraphAnalyzer
from .graph_builder import NetworkXGraphBuilder
from .graph_projector import GraphProjector
from .triple_extractor import TripleExtractor
from .utils import (
    deep_merge,
    ensure_dir,
    load_config,
    load_text_file,
    save_json,
    setup_logging,
    time_function,
)


DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "log_file": None,
        "console": True,
    },
    "output": {
        "directory": "output",
        "graph_format": "graphml",
        "triples_format": "json",
    },
    "analysis": {
        "enabled": True,
        "top_n": 10,
        "neighborhood_depth": 1,
    },
}

GRAPH_EXTENSIONS = {"graphml": "graphml", "gexf": "gexf", "json": "json"}
TRIPLE_EXTENSIONS = {"json": "json", "csv": "csv", "ttl": "ttl"}


class PoetryGraphPipeline:
    """
    End-to-end runner from poetry text to graph artifacts.

    Attributes:
        config: Effective configuration (defaults merged with overrides)

    Examples:
        >>> pipeline = PoetryGraphPipeline()
        >>> result = pipeline.run_text("a graph\\n  has nodes")
        >>> result['projection'].nodes
        ['a graph', 'nodes']
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = deep_merge(DEFAULT_CONFIG, config or {})
        self.extractor = TripleExtractor()
        self.projector = GraphProjector()
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_config_file(cls, config_path: Union[str, Path]) -> "PoetryGraphPipeline":
        """Create a pipeline from a YAML config file."""
        return cls(load_config(config_path))

    def configure_logging(self) -> None:
        """Apply the ``logging`` section of the config."""
        logging_config = self.config["logging"]
        level = logging.getLevelName(str(logging_config["level"]).upper())
        if not isinstance(level, int):
            self.logger.warning(f"Unknown log level {logging_config['level']}, using INFO")
            level = logging.INFO

        setup_logging(
            log_file=logging_config["log_file"],
            level=level,
            console_output=logging_config["console"]
        )

    @time_function
    def run_text(self, text: str) -> Dict[str, Any]:
        """
        Extract, project and (optionally) analyze text.

        Args:
            text: Poetry text

        Returns:
            Dictionary containing:
                - document: Extracted Document
                - projection: GraphProjection
                - graph: NetworkX MultiDiGraph
                - statistics: Projection statistics
                - analysis: Graph analysis (empty if disabled)
        """
        document = self.extractor.extract(text)
        projection = self.projector.project(document)

        builder = NetworkXGraphBuilder()
        graph = builder.build_graph(projection)

        analysis: Dict[str, Any] = {}
        if self.config["analysis"]["enabled"]:
            analysis = GraphAnalyzer(graph).analyze_complete(
                top_n=self.config["analysis"]["top_n"],
                neighborhood_depth=self.config["analysis"]["neighborhood_depth"]
            )

        return {
            "document": document,
            "projection": projection,
            "graph": graph,
            "statistics": self.projector.get_statistics(projection),
            "analysis": analysis,
        }

    def run_file(self, input_path: Union[str, Path]) -> Dict[str, Any]:
        """Load a text file and run it through the pipeline."""
        self.logger.info(f"Processing {input_path}")
        return self.run_text(load_text_file(input_path))

    def save_outputs(
        self,
        result: Dict[str, Any],
        output_dir: Optional[Union[str, Path]] = None,
        stem: str = "graph"
    ) -> Dict[str, Path]:
        """
        Write the artifacts of a pipeline run.

        Args:
            result: Return value of run_text or run_file
            output_dir: Target directory (defaults to output.directory)
            stem: Base file name for the artifacts

        Returns:
            Mapping of artifact kind to written path
        """
        output_config = self.config["output"]
        directory = ensure_dir(output_dir or output_config["directory"])

        graph_format = output_config["graph_format"]
        triples_format = output_config["triples_format"]
        if graph_format not in GRAPH_EXTENSIONS:
            raise ValueError(f"Unsupported graph format: {graph_format}")
        if triples_format not in TRIPLE_EXTENSIONS:
            raise ValueError(f"Unsupported triples format: {triples_format}")

        paths = {
            "projection": directory / f"{stem}.projection.json",
            "graph": directory / f"{stem}.{GRAPH_EXTENSIONS[graph_format]}",
            "triples": directory / f"{stem}.triples.{TRIPLE_EXTENSIONS[triples_format]}",
        }

        save_json(result["projection"].to_dict(), paths["projection"])

        builder = NetworkXGraphBuilder(result["graph"])
        builder.export_graph(str(paths["graph"]), format=graph_format)

        self.extractor.export_triples(
            result["document"], str(paths["triples"]), format=triples_format
        )

        if result.get("analysis"):
            paths["analysis"] = directory / f"{stem}.analysis.json"
            save_json(result["analysis"], paths["analysis"])

        self.logger.info(f"Saved {len(paths)} artifacts to {directory}")

        return paths


# Module logger
logger = logging.getLogger(__name__)
