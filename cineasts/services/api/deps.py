# cineasts/services/api/deps.py
from __future__ import annotations
from typing import Generator
from fastapi import Depends
from neo4j import Session, Transaction

from cineasts.database.core.main import get_session
from cineasts.database.core.transaction import transactional
from cineasts.database.repos.people_repo import Neo4jPeopleRepo
from cineasts.domain.ports.graph import PeopleRepoPort


def get_db() -> Generator[Session, None, None]:
    yield from get_session()


def transactional_session(db: Session = Depends(get_db)) -> Generator[Transaction, None, None]:
    """
    Request-scoped transaction. Any repo/service using this transaction
    participates in the same unit of work.

    Usage in routers:
      def endpoint(tx: Transaction = Depends(transactional_session)):
          ...
    """
    with transactional(db) as tx:
        yield tx


def get_people_repo(tx: Transaction = Depends(transactional_session)) -> PeopleRepoPort:
    """
    Provide a PeopleRepoPort implementation (Neo4j) via DI.
    Tests swap this for an in-memory repo.
    """
    return Neo4jPeopleRepo(tx)
