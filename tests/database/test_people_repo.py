# tests/database/test_people_repo.py
from datetime import date, datetime

import pytest
from neo4j.time import Date, DateTime

from cineasts.database import queries
from cineasts.database.repos.people_repo import Neo4jPeopleRepo, StaleVersionError
from cineasts.domain.entities.movie import Movie
from cineasts.domain.entities.person import Person


def _keanu_row(**extra):
    row = {
        "id": "6384",
        "name": "Keanu Reeves",
        "birthday": Date(1964, 9, 2),
        "birthplace": "Beirut, Lebanon",
        "version": 3,
        "last_modified": DateTime(2011, 3, 12, 10, 30, 0),
    }
    row.update(extra)
    return row


def test_get_missing_person_returns_none(tx):
    repo = Neo4jPeopleRepo(tx)
    assert repo.get("nope") is None
    assert tx.calls == [(queries.GET_PERSON, {"id": "nope"})]


def test_get_hydrates_scalars_and_relationships(tx):
    tx.respond(
        queries.GET_PERSON,
        [
            {
                "person": _keanu_row(),
                "directed": [{"id": "11", "title": "Man of Tai Chi", "year": 2013}],
                "roles": [
                    {"name": "Neo", "movie": {"id": "603", "title": "The Matrix", "year": 1999}},
                    {"name": "John Wick", "movie": {"id": "245891", "title": "John Wick"}},
                ],
            }
        ],
    )
    p = Neo4jPeopleRepo(tx).get("6384")

    assert p is not None and str(p) == "Keanu Reeves [6384]"
    # temporal values come back as native python types
    assert p.birthday == date(1964, 9, 2) and type(p.birthday) is date
    assert isinstance(p.last_modified, datetime)
    assert p.version == 3
    assert p.biography is None

    assert p.directed_movies == {Movie(id="11", title="Man of Tai Chi")}
    assert {(r.movie.id, r.name) for r in p.roles} == {("603", "Neo"), ("245891", "John Wick")}
    assert all(r.person is p for r in p.roles)

    # hydrated collections accept further additions
    p.directed(Movie(id="1", title="Another"))
    assert len(p.directed_movies) == 2


def test_exists(tx):
    tx.respond(queries.PERSON_EXISTS, lambda params: [{"found": params["id"] == "6384"}])
    repo = Neo4jPeopleRepo(tx)
    assert repo.exists("6384") is True
    assert repo.exists("0") is False


def test_search_uses_fulltext_index(tx):
    tx.respond(queries.SEARCH_PEOPLE, [{"person": _keanu_row(), "score": 2.5}])
    found = Neo4jPeopleRepo(tx).search("  Keanu RE ", limit=5)

    assert [p.id for p in found] == ["6384"]
    (params,) = tx.params_for(queries.SEARCH_PEOPLE)
    assert params == {"index": "people", "query": "keanu* AND re*", "limit": 5}


def test_blank_search_lists_by_name(tx):
    tx.respond(
        queries.LIST_PEOPLE,
        [{"person": {"id": "1", "name": "Ann"}}, {"person": {"id": "2", "name": "Bob"}}],
    )
    found = Neo4jPeopleRepo(tx).search("   ", limit=10)
    assert [p.name for p in found] == ["Ann", "Bob"]
    assert tx.queries() == [queries.LIST_PEOPLE]
    assert tx.params_for(queries.LIST_PEOPLE) == [{"limit": 10}]


def test_save_writes_node_movies_and_edges(tx):
    tx.respond(queries.SAVE_PERSON, [{"version": 1}])
    p = Person("6384", "Keanu Reeves", birthplace="Beirut, Lebanon")
    matrix = Movie(id="603", title="The Matrix", year=1999)
    p.played_in(matrix, "Neo")
    p.directed(Movie(id="11", title="Man of Tai Chi"))

    saved = Neo4jPeopleRepo(tx).save(p)

    assert saved is p
    assert p.version == 1
    assert p.last_modified is not None and p.last_modified.tzinfo is not None

    assert tx.queries() == [
        queries.SAVE_PERSON,
        queries.MERGE_MOVIES,
        queries.CLEAR_PERSON_RELATIONSHIPS,
        queries.MERGE_PERSON_RELATIONSHIPS["ACTS_IN"],
        queries.MERGE_PERSON_RELATIONSHIPS["DIRECTED"],
    ]

    (save_params,) = tx.params_for(queries.SAVE_PERSON)
    assert save_params["id"] == "6384"
    assert save_params["expected_version"] is None
    assert "version" not in save_params["properties"]
    assert "last_modified" not in save_params["properties"]
    assert save_params["properties"]["birthplace"] == "Beirut, Lebanon"
    # unset optionals are sent as null so stale values get removed
    assert save_params["properties"]["biography"] is None

    (movie_params,) = tx.params_for(queries.MERGE_MOVIES)
    assert movie_params["movies"] == [
        {"id": "11", "properties": {"id": "11", "title": "Man of Tai Chi"}},
        {"id": "603", "properties": {"id": "603", "title": "The Matrix", "year": 1999}},
    ]

    (acts_in,) = tx.params_for(queries.MERGE_PERSON_RELATIONSHIPS["ACTS_IN"])
    assert acts_in["rels"] == [{"start_node": "6384", "end_node": "603", "properties": {"name": "Neo"}}]


def test_save_without_relationships_still_clears_edges(tx):
    tx.respond(queries.SAVE_PERSON, [{"version": 5}])
    p = Person("1", "Nobody", version=4)
    Neo4jPeopleRepo(tx).save(p)

    assert tx.queries() == [queries.SAVE_PERSON, queries.CLEAR_PERSON_RELATIONSHIPS]
    assert tx.params_for(queries.SAVE_PERSON)[0]["expected_version"] == 4
    assert p.version == 5


def test_save_stale_version_raises_and_stops(tx):
    # no row back: the stored version did not match
    tx.respond(queries.SAVE_PERSON, [])
    p = Person("6384", "Keanu Reeves", version=2)
    p.directed(Movie(id="11", title="Man of Tai Chi"))

    with pytest.raises(StaleVersionError) as exc:
        Neo4jPeopleRepo(tx).save(p)

    assert exc.value.person_id == "6384"
    assert exc.value.expected_version == 2
    assert tx.queries() == [queries.SAVE_PERSON]
    # entity untouched
    assert p.version == 2 and p.last_modified is None


def test_delete(tx):
    Neo4jPeopleRepo(tx).delete("6384")
    assert tx.calls == [(queries.DELETE_PERSON, {"id": "6384"})]


def test_list_directed(tx):
    tx.respond(queries.LIST_DIRECTED, [{"movie": {"id": "603", "title": "The Matrix", "year": 1999}}])
    movies = Neo4jPeopleRepo(tx).list_directed("9340")
    assert [str(m) for m in movies] == ["The Matrix (1999) [603]"]


def test_list_roles(tx):
    tx.respond(
        queries.LIST_ROLES,
        [
            {"person": {"id": "6384", "name": "Keanu Reeves"}, "name": "Neo", "movie": {"id": "603", "title": "The Matrix"}},
            {"person": {"id": "6384", "name": "Keanu Reeves"}, "name": "Thomas A. Anderson", "movie": {"id": "603", "title": "The Matrix"}},
        ],
    )
    roles = Neo4jPeopleRepo(tx).list_roles("6384")
    assert [r.name for r in roles] == ["Neo", "Thomas A. Anderson"]
    assert {r.person.id for r in roles} == {"6384"}


def test_list_roles_empty(tx):
    assert Neo4jPeopleRepo(tx).list_roles("6384") == []


def test_search_hyphenated_name_sends_one_prefix_per_word(tx):
    Neo4jPeopleRepo(tx).search("Carrie-Anne", limit=5)
    (params,) = tx.params_for(queries.SEARCH_PEOPLE)
    assert params["query"] == "carrie* AND anne*"


def test_save_query_checks_version_before_creating_the_node():
    q = queries.SAVE_PERSON
    lock = q.index("SET existing._lock")
    check = q.index("WHERE (existing IS NULL AND $expected_version IS NULL)")
    merge = q.index("MERGE (p:Person")
    # write lock first, then the version filter, and only then MERGE
    assert q.index("OPTIONAL MATCH (existing:Person") < lock < check < merge
    assert q.count("MERGE") == 1
