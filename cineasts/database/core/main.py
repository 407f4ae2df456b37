# cineasts/database/core/main.py
from __future__ import annotations

from functools import lru_cache
from typing import Iterator

from neo4j import Driver, GraphDatabase, Session

from cineasts.common.logging import get_logger
from cineasts.common.settings import get_settings

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_driver() -> Driver:
    """
    Process-wide Neo4j driver. Creating it does not open a connection;
    the pool fills on first use.
    """
    cfg = get_settings().neo4j
    logger.info("Creating Neo4j driver for %s (database=%s)", cfg.effective_uri, cfg.database)
    return GraphDatabase.driver(
        cfg.effective_uri,
        auth=(cfg.user, cfg.password),
        max_connection_pool_size=cfg.max_connection_pool_size,
        connection_timeout=cfg.connection_timeout_sec,
    )


def close_driver() -> None:
    if get_driver.cache_info().currsize:
        logger.info("Closing Neo4j driver")
        get_driver().close()
        get_driver.cache_clear()


def get_session() -> Iterator[Session]:
    """
    FastAPI-friendly dependency that yields a Neo4j session bound to the
    configured database. Transactions are opened on top of it.
    """
    session = get_driver().session(database=get_settings().neo4j.database)
    try:
        yield session
    finally:
        session.close()
