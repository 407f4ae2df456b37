# cineasts/domain/mapping/schema.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from cineasts.domain.enums import IndexKind, RelationshipType


@dataclass(frozen=True)
class IndexSpec:
    """
    One indexed property of a node label.

      - unique:   uniqueness constraint (implies an exact-match index)
      - fulltext: token-based search index; `name` is the index name that
                  search queries address (e.g. "people")
      - exact:    plain lookup index
    """
    property: str
    kind: IndexKind
    name: Optional[str] = None

    def __post_init__(self):
        if not self.property:
            raise ValueError("index property is required")
        if self.kind == IndexKind.fulltext and not self.name:
            raise ValueError(f"fulltext index on {self.property!r} needs a name")


@dataclass(frozen=True)
class RelationshipSpec:
    """
    Maps a collection attribute of the owning entity to outgoing edges.

    Plain relationships hold target entities directly (Person.directed_movies).
    Relationship entities hold link objects (Person.roles -> Role); `via` names
    the link attribute that points at the target node and `properties` the
    link attributes stored on the edge.
    """
    attribute: str
    type: RelationshipType
    target_label: str
    via: Optional[str] = None
    target_key: str = "id"
    properties: Tuple[str, ...] = ()

    @property
    def carries_attributes(self) -> bool:
        return bool(self.properties)


@dataclass(frozen=True)
class NodeSchema:
    label: str
    key: str
    properties: Tuple[str, ...]
    indexes: Tuple[IndexSpec, ...] = ()
    relationships: Tuple[RelationshipSpec, ...] = ()

    def __post_init__(self):
        if self.key not in self.properties:
            raise ValueError(f"key {self.key!r} is not a property of {self.label}")
        for idx in self.indexes:
            if idx.property not in self.properties:
                raise ValueError(f"index on unknown property {idx.property!r} of {self.label}")
        attrs = [r.attribute for r in self.relationships]
        if len(attrs) != len(set(attrs)):
            raise ValueError(f"duplicate relationship attribute on {self.label}")

    def unique_properties(self) -> Tuple[str, ...]:
        return tuple(i.property for i in self.indexes if i.kind == IndexKind.unique)

    def fulltext_indexes(self) -> Tuple[IndexSpec, ...]:
        return tuple(i for i in self.indexes if i.kind == IndexKind.fulltext)

    def relationship(self, attribute: str) -> RelationshipSpec:
        for r in self.relationships:
            if r.attribute == attribute:
                return r
        raise KeyError(f"{self.label} has no relationship attribute {attribute!r}")

    def relationship_types(self) -> Tuple[RelationshipType, ...]:
        return tuple(r.type for r in self.relationships)


MOVIE_SCHEMA = NodeSchema(
    label="Movie",
    key="id",
    properties=("id", "title", "year"),
    indexes=(
        IndexSpec("id", IndexKind.unique),
        IndexSpec("title", IndexKind.fulltext, name="search"),
    ),
)

PERSON_SCHEMA = NodeSchema(
    label="Person",
    key="id",
    properties=(
        "id",
        "name",
        "birthday",
        "birthplace",
        "biography",
        "version",
        "last_modified",
        "profile_image_url",
    ),
    indexes=(
        IndexSpec("id", IndexKind.unique),
        IndexSpec("name", IndexKind.fulltext, name="people"),
    ),
    relationships=(
        RelationshipSpec("directed_movies", RelationshipType.directed, MOVIE_SCHEMA.label),
        RelationshipSpec(
            "roles",
            RelationshipType.acts_in,
            MOVIE_SCHEMA.label,
            via="movie",
            properties=("name",),
        ),
    ),
)
