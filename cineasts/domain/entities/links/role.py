# cineasts/domain/entities/links/role.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cineasts.domain.entities.movie import Movie
    from cineasts.domain.entities.person import Person


@dataclass(frozen=True)
class Role:
    """
    Relationship entity: `person` acted as `name` in `movie`.
    Stored as (:Person)-[:ACTS_IN {name}]->(:Movie). The same person may play
    several roles in one movie, so the name is part of the identity.
    """
    person: "Person"
    movie: "Movie"
    name: str

    def __post_init__(self):
        if self.person is None or self.movie is None:
            raise ValueError("a role needs both a person and a movie")
        if not self.name or not self.name.strip():
            raise ValueError("role name is required")

    def __str__(self) -> str:
        return f"{self.person.name} as {self.name} in {self.movie.title}"
