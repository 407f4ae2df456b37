"""Framework-free node and relationship payloads produced by the graph mapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass
class GraphNode:
    id: str
    labels: List[str]
    properties: Dict[str, object] = field(default_factory=dict)

    def present_properties(self) -> Dict[str, object]:
        """Properties without unset (None) values."""
        return {k: v for k, v in self.properties.items() if v is not None}


@dataclass
class GraphRelationship:
    start_node: str
    end_node: str
    type: str
    properties: Dict[str, object] = field(default_factory=dict)

    def sort_key(self) -> Tuple[str, str, str, str]:
        return (self.type, self.start_node, self.end_node, repr(sorted(self.properties.items())))
