from __future__ import annotations
from datetime import datetime, timezone
from typing import List, Optional

from neo4j import ManagedTransaction, Transaction

from cineasts.common.logging import get_logger
from cineasts.common.strings.normalize import fulltext_query
from cineasts.database import queries
from cineasts.database.repos._mapping import (
    movie_payloads,
    to_domain_movie,
    to_domain_person,
    to_node_properties,
)
from cineasts.domain.entities.links.role import Role
from cineasts.domain.entities.movie import Movie
from cineasts.domain.entities.person import Person
from cineasts.domain.mapping.schema import PERSON_SCHEMA

logger = get_logger(__name__)

# the index apply_schema creates for Person.name
PEOPLE_INDEX = PERSON_SCHEMA.fulltext_indexes()[0].name


class StaleVersionError(RuntimeError):
    """The stored Person moved past the version the caller loaded."""

    def __init__(self, person_id: str, expected_version: Optional[int]) -> None:
        super().__init__(
            f"Person {person_id!r} was modified concurrently (expected version {expected_version})"
        )
        self.person_id = person_id
        self.expected_version = expected_version


class Neo4jPeopleRepo:
    """
    People repository over one Neo4j transaction. The caller owns the
    transaction boundary (commit/rollback); nothing here commits.
    """

    def __init__(self, tx: Transaction | ManagedTransaction) -> None:
        self.db = tx

    # -------- People (CRUD) --------

    def get(self, person_id: str) -> Optional[Person]:
        record = self.db.run(queries.GET_PERSON, {"id": person_id}).single()
        if record is None:
            return None
        return to_domain_person(record["person"], record["directed"], record["roles"])

    def exists(self, person_id: str) -> bool:
        record = self.db.run(queries.PERSON_EXISTS, {"id": person_id}).single()
        return bool(record and record["found"])

    def search(self, q: str, limit: int = 25) -> List[Person]:
        query = fulltext_query(q)
        if not query:
            rows = self.db.run(queries.LIST_PEOPLE, {"limit": limit})
        else:
            rows = self.db.run(
                queries.SEARCH_PEOPLE,
                {"index": PEOPLE_INDEX, "query": query, "limit": limit},
            )
        return [to_domain_person(row["person"]) for row in rows]

    def save(self, person: Person) -> Person:
        """
        Upsert the node, then replace its DIRECTED / ACTS_IN edges with the
        entity's collections. Bumps `version` and stamps `last_modified` on
        the entity after a successful write.
        """
        expected = person.version
        now = datetime.now(timezone.utc)
        record = self.db.run(
            queries.SAVE_PERSON,
            {
                "id": person.id,
                "expected_version": expected,
                "properties": to_node_properties(person),
                "last_modified": now,
            },
        ).single()
        if record is None:
            logger.warning("Stale write for person %s (expected version %s)", person.id, expected)
            raise StaleVersionError(person.id, expected)

        movies = movie_payloads(person)
        if movies:
            self.db.run(queries.MERGE_MOVIES, {"movies": movies}).consume()

        self.db.run(queries.CLEAR_PERSON_RELATIONSHIPS, {"id": person.id}).consume()
        by_type: dict[str, list[dict]] = {}
        for rel in person.outgoing_relationships():
            by_type.setdefault(rel.type, []).append(
                {"start_node": rel.start_node, "end_node": rel.end_node, "properties": rel.properties}
            )
        for rel_type, rels in by_type.items():
            self.db.run(queries.MERGE_PERSON_RELATIONSHIPS[rel_type], {"rels": rels}).consume()

        person.version = record["version"]
        person.last_modified = now
        logger.debug(
            "Saved person %s v%s (%d movies, %d roles)",
            person.id, person.version, len(person.directed_movies), len(person.roles),
        )
        return person

    def delete(self, person_id: str) -> None:
        self.db.run(queries.DELETE_PERSON, {"id": person_id}).consume()

    # -------- Person -> Movie links --------

    def list_directed(self, person_id: str) -> List[Movie]:
        rows = self.db.run(queries.LIST_DIRECTED, {"id": person_id})
        return [to_domain_movie(row["movie"]) for row in rows]

    def list_roles(self, person_id: str) -> List[Role]:
        rows = list(self.db.run(queries.LIST_ROLES, {"id": person_id}))
        if not rows:
            return []
        person = to_domain_person(rows[0]["person"])
        return [person.played_in(to_domain_movie(row["movie"]), row["name"]) for row in rows]
