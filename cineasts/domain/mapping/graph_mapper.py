# cineasts/domain/mapping/graph_mapper.py
from __future__ import annotations

from typing import Any, Dict, List

from cineasts.domain.dataclasses.graph import GraphNode, GraphRelationship
from cineasts.domain.mapping.schema import NodeSchema


def node_key(entity: Any, schema: NodeSchema) -> str:
    return str(getattr(entity, schema.key))


def to_graph_node(entity: Any, schema: NodeSchema) -> GraphNode:
    return GraphNode(
        id=node_key(entity, schema),
        labels=[schema.label],
        properties={p: getattr(entity, p, None) for p in schema.properties},
    )


def index_entries(entity: Any, schema: NodeSchema) -> Dict[str, object]:
    # one entry per indexed property; a property indexed twice appears once
    return {idx.property: getattr(entity, idx.property, None) for idx in schema.indexes}


def relationships_of(entity: Any, schema: NodeSchema) -> List[GraphRelationship]:
    """
    Expand every relationship collection of `entity` into edge payloads.
    The target node key is read from the element itself, or from
    `element.<via>` for relationship entities.
    """
    start = node_key(entity, schema)
    out: List[GraphRelationship] = []
    for spec in schema.relationships:
        for element in getattr(entity, spec.attribute, None) or ():
            target = getattr(element, spec.via) if spec.via else element
            out.append(
                GraphRelationship(
                    start_node=start,
                    end_node=str(getattr(target, spec.target_key)),
                    type=spec.type.value,
                    properties={p: getattr(element, p) for p in spec.properties},
                )
            )
    out.sort(key=GraphRelationship.sort_key)
    return out
