"""
Triple Extraction Module

Turns indentation-based "poetry" text into subject/predicate/object triples.

A line with no leading whitespace declares a subject. Each indented line
below it states one property of that subject: the trailing text names the
object, the rest of the line is the predicate. Objects that were never
declared as subjects are registered as nodes of their own.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple
import csv
import logging
import re
from .utils import last_word, leading_whitespace, save_json, split_lines


@dataclass
class Document:
    """
    Intermediate parse state produced by extraction.

    Attributes:
        context: Reserved vocabulary/prefix mapping, always empty
        triples: Subject -> ordered list of (predicate, object) pairs
        subject: Current subject while scanning
    """

    context: Dict[str, str] = field(default_factory=dict)
    triples: Dict[str, List[Tuple[str, str]]] = field(default_factory=dict)
    subject: Optional[str] = None

    def add_subject(self, name: str) -> bool:
        """Register a subject key; returns False if it already existed."""
        if name in self.triples:
            return False
        self.triples[name] = []
        return True

    def add_property(self, predicate: str, object_: str) -> bool:
        """Attach (predicate, object) to the current subject, if any."""
        if self.subject is None:
            return False
        self.triples.setdefault(self.subject, []).append((predicate, object_))
        return True

    def iter_triples(self) -> Iterator[Tuple[str, str, str]]:
        """Yield (subject, predicate, object) in fold order."""
        for subject, properties in self.triples.items():
            for predicate, object_ in properties:
                yield subject, predicate, object_

    def to_dict(self) -> Dict[str, Any]:
        return {
            "context": dict(self.context),
            "triples": {
                subject: [list(pair) for pair in properties]
                for subject, properties in self.triples.items()
            },
            "subject": self.subject,
        }


class TripleExtractor:
    """
    Extracts triples from pseudo-Turtle text.

    Extraction is total: malformed lines are skipped, never reported.

    Examples:
        >>> extractor = TripleExtractor()
        >>> document = extractor.extract("a graph\\n  has nodes")
        >>> document.triples['a graph']
        [('has', 'nodes')]
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def extract(self, text: str) -> Document:
        """
        Build a Document from raw text.

        Args:
            text: Line-separated pseudo-Turtle text

        Returns:
            Document with every subject and every object as a triples key
        """
        document = Document()
        lines = split_lines(text)

        self._discover_subjects(document, lines)

        for line in lines:
            self._attach_property(document, line)

        triple_count = sum(len(props) for props in document.triples.values())
        self.logger.info(
            f"Extracted {triple_count} triples over {len(document.triples)} "
            f"subjects from {len(lines)} lines"
        )

        return document

    def _discover_subjects(self, document: Document, lines: List[str]) -> None:
        for line in lines:
            if line and leading_whitespace(line) == 0:
                document.add_subject(line.strip())

    def _attach_property(self, document: Document, line: str) -> None:
        if not line.strip():
            return

        if leading_whitespace(line) == 0:
            document.subject = line.strip()
            return

        # Suffixes match against the line with indentation dropped only
        content = line.lstrip()
        match = find_longest_suffix(content, document.triples)
        if match is not None:
            object_ = match
            predicate = content[:-len(object_)].rstrip()
        else:
            object_ = last_word(content)
            if object_ is None:
                return
            if document.add_subject(object_):
                self.logger.debug(f"Registered object node: {object_}")
            predicate = content.rstrip()[:-len(object_)].rstrip()

        if document.add_property(predicate, object_):
            self.logger.debug(f"Triple: {document.subject} -[{predicate}]-> {object_}")
        else:
            self.logger.debug(f"No current subject, skipping line: {content!r}")

    def export_triples(
        self,
        document: Document,
        output_path: str,
        format: str = "json"
    ) -> None:
        """
        Export a Document's triples to file.

        Args:
            document: Extraction result
            output_path: Output file path
            format: Output format (json, csv, ttl)

        Examples:
            >>> extractor = TripleExtractor()
            >>> document = extractor.extract("a graph\\n  has nodes")
            >>> extractor.export_triples(document, "output/triples.csv", "csv")
        """
        records = [
            {"subject": subject, "predicate": predicate, "object": object_}
            for subject, predicate, object_ in document.iter_triples()
        ]

        if format == "json":
            save_json(records, output_path, indent=2)

        elif format == "csv":
            Path(output_path).parent.mkdir(parents=True, exist_ok=True)

            with open(output_path, 'w', newline='', encoding='utf-8') as f:
                writer = csv.DictWriter(f, fieldnames=['subject', 'predicate', 'object'])
                writer.writeheader()
                writer.writerows(records)

        elif format == "ttl":
            Path(output_path).parent.mkdir(parents=True, exist_ok=True)

            with open(output_path, 'w', encoding='utf-8') as f:
                f.write("@prefix pg: <http://example.org/poetry-graph#> .\n\n")

                for record in records:
                    subj = to_local_name(record['subject'])
                    pred = to_local_name(record['predicate']) or "related"
                    obj = to_local_name(record['object'])

                    f.write(f"pg:{subj} pg:{pred} pg:{obj} .\n")

        else:
            raise ValueError(f"Unsupported format: {format}")

        self.logger.info(f"Exported {len(records)} triples to {output_path} ({format.upper()})")


# Utility Functions

def find_longest_suffix(text: str, candidates) -> Optional[str]:
    """
    Find the longest candidate that is a suffix of text.

    Among candidates of equal length, the first in iteration order wins.

    Args:
        text: Text to match against
        candidates: Iterable of candidate strings

    Returns:
        Longest matching candidate, or None

    Examples:
        >>> find_longest_suffix("is a graph", ["graph", "a graph"])
        'a graph'
        >>> find_longest_suffix("has nodes", ["graph"]) is None
        True
    """
    best = None
    for candidate in candidates:
        if not candidate or not text.endswith(candidate):
            continue
        if best is None or len(candidate) > len(best):
            best = candidate
    return best


def to_local_name(text: str) -> str:
    """
    Turn free text into a Turtle-safe local name.

    Examples:
        >>> to_local_name("has a connection to")
        'has_a_connection_to'
    """
    normalized = '_'.join(text.split())
    return re.sub(r'[^\w\-]', '', normalized)


def extract_triples(text: str) -> Document:
    """
    Extract a Document from text with a default extractor.

    Examples:
        >>> extract_triples("").triples
        {}
    """
    return TripleExtractor().extract(text)


# Module logger
logger = logging.getLogger(__name__)
