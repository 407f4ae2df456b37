# tests/integration/conftest.py
from __future__ import annotations

import pytest

from cineasts.database.core.schema import apply_schema

NEO4J_IMAGE = "neo4j:5"


@pytest.fixture(scope="session")
def neo4j_driver():
    """Real Neo4j in a container; the whole module is skipped without Docker."""
    testcontainers_neo4j = pytest.importorskip("testcontainers.neo4j")
    try:
        container = testcontainers_neo4j.Neo4jContainer(NEO4J_IMAGE)
        container.start()
    except Exception as e:  # docker missing / daemon down
        pytest.skip(f"Neo4j container unavailable: {e}")

    driver = container.get_driver()
    try:
        with driver.session() as session:
            apply_schema(session)
            session.run("CALL db.awaitIndexes()").consume()
        yield driver
    finally:
        driver.close()
        container.stop()


@pytest.fixture()
def graph_session(neo4j_driver):
    with neo4j_driver.session() as session:
        session.run("MATCH (n) DETACH DELETE n").consume()
        yield session
