# tests/services/conftest.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from starlette.testclient import TestClient

from cineasts.common.strings.normalize import normalize_name
from cineasts.database.repos._mapping import to_domain_movie, to_domain_person, to_node_properties
from cineasts.database.repos.people_repo import StaleVersionError
from cineasts.domain.entities.links.role import Role
from cineasts.domain.entities.movie import Movie
from cineasts.domain.entities.person import Person
from cineasts.services.api.app import create_app
from cineasts.services.api.deps import get_people_repo


def _movie_row(m: Movie) -> Dict[str, Any]:
    return {"id": m.id, "title": m.title, "year": m.year}


class InMemoryPeopleRepo:
    """
    PeopleRepoPort over plain dict rows shaped like the Cypher results, so
    every read goes through the same hydration as the Neo4j repo.
    """

    def __init__(self) -> None:
        self.rows: Dict[str, Dict[str, Any]] = {}

    def get(self, person_id: str) -> Optional[Person]:
        row = self.rows.get(person_id)
        if row is None:
            return None
        return to_domain_person(row["person"], row["directed"], row["roles"])

    def exists(self, person_id: str) -> bool:
        return person_id in self.rows

    def search(self, q: str, limit: int = 25) -> List[Person]:
        needle = normalize_name(q)
        hits = [
            r for r in self.rows.values()
            if not needle or all(t in normalize_name(r["person"]["name"]) for t in needle.split())
        ]
        hits.sort(key=lambda r: r["person"]["name"])
        return [to_domain_person(r["person"]) for r in hits[:limit]]

    def save(self, person: Person) -> Person:
        stored = self.rows.get(person.id)
        current = stored["person"].get("version") if stored else None
        if (current or 0) != (person.version or 0):
            raise StaleVersionError(person.id, person.version)

        now = datetime.now(timezone.utc)
        props = to_node_properties(person)
        props.update(version=(person.version or 0) + 1, last_modified=now)
        self.rows[person.id] = {
            "person": props,
            "directed": [_movie_row(m) for m in person.directed_movies],
            "roles": [{"name": r.name, "movie": _movie_row(r.movie)} for r in person.roles],
        }
        person.version = props["version"]
        person.last_modified = now
        return person

    def delete(self, person_id: str) -> None:
        self.rows.pop(person_id, None)

    def list_directed(self, person_id: str) -> List[Movie]:
        row = self.rows.get(person_id) or {"directed": []}
        return sorted((to_domain_movie(m) for m in row["directed"]), key=lambda m: m.title)

    def list_roles(self, person_id: str) -> List[Role]:
        person = self.get(person_id)
        if person is None:
            return []
        return sorted(person.roles, key=lambda r: (r.movie.title, r.name))


@pytest.fixture()
def people_repo() -> InMemoryPeopleRepo:
    return InMemoryPeopleRepo()


@pytest.fixture()
def api_client(people_repo):
    """
    A TestClient whose `get_people_repo` dependency is overridden to return
    one in-memory repo for the whole test (so POST -> GET works) without a
    running Neo4j.
    """
    app = create_app()
    app.dependency_overrides[get_people_repo] = lambda: people_repo
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
