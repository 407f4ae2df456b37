# cineasts/domain/entities/person.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING, Dict, List, Optional, Set

from cineasts.domain.dataclasses.graph import GraphRelationship
from cineasts.domain.entities.links.role import Role
from cineasts.domain.mapping import graph_mapper
from cineasts.domain.mapping.schema import PERSON_SCHEMA

if TYPE_CHECKING:
    from cineasts.domain.entities.movie import Movie


@dataclass(eq=False)
class Person:
    """
    Person node of the movie graph (actors, directors).

    Mapping (see PERSON_SCHEMA):
      - id    unique constraint
      - name  full-text index "people"
      - directed_movies -> (:Person)-[:DIRECTED]->(:Movie)
      - roles           -> (:Person)-[:ACTS_IN {name}]->(:Movie)

    Both relationship collections are allocated on every construction path,
    including repository hydration, so `directed` and `played_in` never see
    a missing collection. `version` and `last_modified` belong to the
    repository; nothing here checks them.

    `id` is fixed once set. Equality and hashing go by `id`.
    """

    id: str
    name: str

    birthday: Optional[date] = None
    birthplace: Optional[str] = None
    biography: Optional[str] = None
    version: Optional[int] = None
    last_modified: Optional[datetime] = None
    profile_image_url: Optional[str] = None

    directed_movies: Set["Movie"] = field(default_factory=set, repr=False)
    roles: Set[Role] = field(default_factory=set, repr=False)

    def __post_init__(self):
        if not self.id or not str(self.id).strip():
            raise ValueError("person id is required")
        if not self.name or not self.name.strip():
            raise ValueError("person name is required")

    def __setattr__(self, key, value):
        if key == "id" and "id" in self.__dict__:
            raise AttributeError("Person.id cannot be changed")
        super().__setattr__(key, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Person):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("Person", self.id))

    def __str__(self) -> str:
        return f"{self.name} [{self.id}]"

    # ---- relationships -----------------------------------------------------

    def directed(self, movie: "Movie") -> None:
        self.directed_movies.add(movie)

    def played_in(self, movie: "Movie", role_name: str) -> Role:
        role = Role(person=self, movie=movie, name=role_name)
        self.roles.add(role)
        return role

    # ---- mapping capabilities (Indexable / RelationshipOwner) --------------

    def index_entries(self) -> Dict[str, object]:
        return graph_mapper.index_entries(self, PERSON_SCHEMA)

    def outgoing_relationships(self) -> List[GraphRelationship]:
        return graph_mapper.relationships_of(self, PERSON_SCHEMA)
