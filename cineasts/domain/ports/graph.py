from __future__ import annotations
from typing import Dict, List, Optional, Protocol, runtime_checkable

from cineasts.domain.dataclasses.graph import GraphRelationship
from cineasts.domain.entities.movie import Movie
from cineasts.domain.entities.links.role import Role
from cineasts.domain.entities.person import Person


@runtime_checkable
class Indexable(Protocol):
    def index_entries(self) -> Dict[str, object]: ...


@runtime_checkable
class RelationshipOwner(Protocol):
    def outgoing_relationships(self) -> List[GraphRelationship]: ...


class PeopleRepoPort(Protocol):
    def get(self, person_id: str) -> Optional[Person]: ...
    def exists(self, person_id: str) -> bool: ...
    def search(self, q: str, limit: int = 25) -> List[Person]: ...
    def save(self, person: Person) -> Person: ...
    def delete(self, person_id: str) -> None: ...
    def list_directed(self, person_id: str) -> List[Movie]: ...
    def list_roles(self, person_id: str) -> List[Role]: ...
