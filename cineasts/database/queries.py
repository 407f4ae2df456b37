"""Cypher query templates for the people side of the movie graph."""

from __future__ import annotations

from typing import Dict

from cineasts.domain.mapping.schema import PERSON_SCHEMA, NodeSchema, RelationshipSpec

GET_PERSON = """
MATCH (p:Person {id: $id})
RETURN p {.*} AS person,
       [(p)-[:DIRECTED]->(m:Movie) | m {.*}] AS directed,
       [(p)-[r:ACTS_IN]->(m:Movie) | {name: r.name, movie: m {.*}}] AS roles
"""

PERSON_EXISTS = """
OPTIONAL MATCH (p:Person {id: $id})
RETURN p IS NOT NULL AS found
"""

SEARCH_PEOPLE = """
CALL db.index.fulltext.queryNodes($index, $query) YIELD node, score
WHERE node:Person
RETURN node {.*} AS person, score
ORDER BY score DESC, node.name ASC
LIMIT $limit
"""

LIST_PEOPLE = """
MATCH (p:Person)
RETURN p {.*} AS person
ORDER BY p.name ASC
LIMIT $limit
"""

# Optimistic write. The throwaway property write takes the node's write lock
# before its version is read; a missing node stays missing. The WHERE drops
# the row when the stored version moved on (or the node vanished under a
# versioned entity), so nothing is created or SET and nothing is returned.
SAVE_PERSON = """
OPTIONAL MATCH (existing:Person {id: $id})
SET existing._lock = true
REMOVE existing._lock
WITH existing
WHERE (existing IS NULL AND $expected_version IS NULL)
   OR (existing IS NOT NULL
       AND coalesce(existing.version, 0) = coalesce($expected_version, 0))
MERGE (p:Person {id: $id})
SET p += $properties,
    p.version = coalesce($expected_version, 0) + 1,
    p.last_modified = $last_modified
RETURN p.version AS version
"""

MERGE_MOVIES = """
UNWIND $movies AS movie
MERGE (m:Movie {id: movie.id})
SET m += movie.properties
"""

DELETE_PERSON = """
MATCH (p:Person {id: $id})
DETACH DELETE p
"""

LIST_DIRECTED = """
MATCH (:Person {id: $id})-[:DIRECTED]->(m:Movie)
RETURN m {.*} AS movie
ORDER BY m.title ASC
"""

LIST_ROLES = """
MATCH (p:Person {id: $id})-[r:ACTS_IN]->(m:Movie)
RETURN p {.*} AS person, r.name AS name, m {.*} AS movie
ORDER BY m.title ASC, r.name ASC
"""


def clear_relationships(owner: NodeSchema) -> str:
    """Drop every outgoing edge the owner's schema maps, before re-merging."""
    types = "|".join(t.value for t in owner.relationship_types())
    return (
        f"MATCH (s:{owner.label} {{{owner.key}: $id}})-[r:{types}]->()\n"
        f"DELETE r"
    )


def merge_relationships(owner: NodeSchema, spec: RelationshipSpec) -> str:
    """
    UNWIND GraphRelationship payloads into edges. Edge attributes take part
    in the MERGE pattern so two roles in one movie stay two edges.
    """
    props = ", ".join(f"{p}: rel.properties.{p}" for p in spec.properties)
    pattern = f"[r:{spec.type.value} {{{props}}}]" if props else f"[r:{spec.type.value}]"
    return (
        "UNWIND $rels AS rel\n"
        f"MATCH (s:{owner.label} {{{owner.key}: rel.start_node}})\n"
        f"MATCH (t:{spec.target_label} {{{spec.target_key}: rel.end_node}})\n"
        f"MERGE (s)-{pattern}->(t)"
    )


CLEAR_PERSON_RELATIONSHIPS = clear_relationships(PERSON_SCHEMA)

MERGE_PERSON_RELATIONSHIPS: Dict[str, str] = {
    spec.type.value: merge_relationships(PERSON_SCHEMA, spec)
    for spec in PERSON_SCHEMA.relationships
}
