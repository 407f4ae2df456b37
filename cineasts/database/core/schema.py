"""Render and apply Neo4j constraints/indexes declared by node schemas."""

from __future__ import annotations

from typing import Dict, List

from neo4j import Session

from cineasts.common.logging import get_logger
from cineasts.domain.enums import IndexKind
from cineasts.domain.mapping.schema import MOVIE_SCHEMA, PERSON_SCHEMA, NodeSchema

logger = get_logger(__name__)

DEFAULT_SCHEMAS = (PERSON_SCHEMA, MOVIE_SCHEMA)


def _unique(schema: NodeSchema, prop: str) -> str:
    name = f"{schema.label.lower()}_{prop}_unique"
    return (
        f"CREATE CONSTRAINT {name} IF NOT EXISTS "
        f"FOR (n:{schema.label}) REQUIRE n.{prop} IS UNIQUE"
    )


def _exact(schema: NodeSchema, prop: str) -> str:
    name = f"{schema.label.lower()}_{prop}"
    return f"CREATE INDEX {name} IF NOT EXISTS FOR (n:{schema.label}) ON (n.{prop})"


def _fulltext(schema: NodeSchema, name: str, props: List[str]) -> str:
    on_each = ", ".join(f"n.{p}" for p in props)
    return f"CREATE FULLTEXT INDEX {name} IF NOT EXISTS FOR (n:{schema.label}) ON EACH [{on_each}]"


def schema_statements(*schemas: NodeSchema) -> List[str]:
    """
    Idempotent DDL for the given schemas (defaults to Person + Movie).
    Full-text specs sharing an index name become one multi-property index.
    """
    statements: List[str] = []
    for schema in schemas or DEFAULT_SCHEMAS:
        fulltext: Dict[str, List[str]] = {}
        for idx in schema.indexes:
            if idx.kind == IndexKind.unique:
                statements.append(_unique(schema, idx.property))
            elif idx.kind == IndexKind.exact:
                statements.append(_exact(schema, idx.property))
            else:
                fulltext.setdefault(idx.name, []).append(idx.property)
        for name, props in fulltext.items():
            statements.append(_fulltext(schema, name, props))
    return statements


def apply_schema(session: Session, *schemas: NodeSchema) -> List[str]:
    statements = schema_statements(*schemas)
    for statement in statements:
        session.run(statement).consume()
        logger.info("Executed: %s", statement)
    return statements
