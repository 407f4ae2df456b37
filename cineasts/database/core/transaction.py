# cineasts/database/core/transaction.py
from contextlib import contextmanager
from typing import Iterator

from neo4j import Session, Transaction


@contextmanager
def transactional(session: Session) -> Iterator[Transaction]:
    """
    Explicit transaction on `session`: COMMIT on normal exit, ROLLBACK if an
    exception bubbles out.
    """
    tx = session.begin_transaction()
    try:
        yield tx
        tx.commit()
    except Exception:
        if not tx.closed():
            tx.rollback()
        raise
    finally:
        tx.close()
