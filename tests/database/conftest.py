# tests/database/conftest.py
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Tuple, Union

import pytest

Rows = Union[List[Dict[str, Any]], Callable[[Dict[str, Any]], List[Dict[str, Any]]]]


class FakeResult:
    """Just enough of neo4j.Result: iteration, single(), consume()."""

    def __init__(self, rows: Iterable[Dict[str, Any]]) -> None:
        self._rows = list(rows)

    def __iter__(self):
        return iter(self._rows)

    def single(self):
        return self._rows[0] if self._rows else None

    def consume(self) -> None:
        return None


class FakeTx:
    """
    Stand-in for a neo4j Transaction/Session. Records every `run` call and
    answers with rows scripted per query text (unscripted queries return
    no rows).
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self._responses: Dict[str, Rows] = {}

    def respond(self, query: str, rows: Rows) -> None:
        self._responses[query] = rows

    def run(self, query: str, parameters: Dict[str, Any] | None = None) -> FakeResult:
        params = dict(parameters or {})
        self.calls.append((query, params))
        scripted = self._responses.get(query, [])
        rows = scripted(params) if callable(scripted) else scripted
        return FakeResult(rows)

    def queries(self) -> List[str]:
        return [q for q, _ in self.calls]

    def params_for(self, query: str) -> List[Dict[str, Any]]:
        return [p for q, p in self.calls if q == query]


@pytest.fixture()
def tx() -> FakeTx:
    return FakeTx()
