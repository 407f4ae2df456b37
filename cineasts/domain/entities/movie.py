# cineasts/domain/entities/movie.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class Movie:
    """
    Minimal Movie node as seen from the people side of the graph.
    Identity is the external id; two Movie objects with the same id are the
    same node, whatever their titles say.
    """
    id: str
    title: str
    year: Optional[int] = None

    def __post_init__(self):
        if not self.id or not str(self.id).strip():
            raise ValueError("movie id is required")
        if not self.title or not self.title.strip():
            raise ValueError("movie title is required")
        if self.year is not None and self.year < 0:
            raise ValueError("year must be >= 0")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Movie):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("Movie", self.id))

    def __str__(self) -> str:
        if self.year is not None:
            return f"{self.title} ({self.year}) [{self.id}]"
        return f"{self.title} [{self.id}]"
