"""
Focus references into a graph projection.

A focus is a list of references, each naming either a node by index or an
edge by its (source, target) index pair. Selection layers currently hold zero
or one reference at a time.
"""

from dataclasses import dataclass
from typing import List, Union


@dataclass(frozen=True)
class NodeRef:
    index: int


@dataclass(frozen=True)
class EdgeRef:
    source: int
    target: int


FocusRef = Union[NodeRef, EdgeRef]
Focus = List[FocusRef]
