from __future__ import annotations
from enum import StrEnum

class RelationshipType(StrEnum):
    directed = "DIRECTED"
    acts_in = "ACTS_IN"
