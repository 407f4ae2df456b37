# cineasts/database/repos/_mapping.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

from cineasts.domain.entities.movie import Movie
from cineasts.domain.entities.person import Person
from cineasts.domain.mapping.graph_mapper import to_graph_node
from cineasts.domain.mapping.schema import MOVIE_SCHEMA, PERSON_SCHEMA

# written by the SAVE query itself, never copied from the entity
_MANAGED = ("version", "last_modified")


def _native(value: Any) -> Any:
    # neo4j.time.Date / DateTime -> datetime.date / datetime.datetime
    to_native = getattr(value, "to_native", None)
    return to_native() if callable(to_native) else value


def to_domain_movie(row: Mapping[str, Any]) -> Movie:
    year = row.get("year")
    return Movie(id=str(row["id"]), title=row["title"], year=int(year) if year is not None else None)


def to_domain_person(
    row: Mapping[str, Any],
    directed: Iterable[Mapping[str, Any]] = (),
    roles: Iterable[Mapping[str, Any]] = (),
) -> Person:
    """Hydrate: construct with id + name, then fill field by field."""
    person = Person(id=str(row["id"]), name=row["name"])
    person.birthday = _native(row.get("birthday"))
    person.birthplace = row.get("birthplace")
    person.biography = row.get("biography")
    person.version = row.get("version")
    person.last_modified = _native(row.get("last_modified"))
    person.profile_image_url = row.get("profile_image_url")

    for m in directed or ():
        person.directed(to_domain_movie(m))
    for r in roles or ():
        person.played_in(to_domain_movie(r["movie"]), r["name"])
    return person


def to_node_properties(person: Person) -> Dict[str, Any]:
    node = to_graph_node(person, PERSON_SCHEMA)
    return {k: v for k, v in node.properties.items() if k not in _MANAGED}


def movie_payloads(person: Person) -> List[Dict[str, Any]]:
    """Every Movie the person points at, once, as {id, properties}."""
    movies = {m.id: m for m in person.directed_movies}
    movies.update({r.movie.id: r.movie for r in person.roles})
    out = []
    for movie_id in sorted(movies):
        node = to_graph_node(movies[movie_id], MOVIE_SCHEMA)
        out.append({"id": node.id, "properties": node.present_properties()})
    return out
