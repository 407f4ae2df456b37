from cineasts.domain.enums.index_kind import IndexKind
from cineasts.domain.enums.relationship_type import RelationshipType
__all__ = [
    "IndexKind",
    "RelationshipType",
]
