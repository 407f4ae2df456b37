from __future__ import annotations
from enum import StrEnum

class IndexKind(StrEnum):
    unique = "unique"      # uniqueness constraint, exact match
    fulltext = "fulltext"  # token-based search, needs an index name
    exact = "exact"        # plain range/lookup index
