# cineasts/services/schemas/people.py
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------- Movies ----------

class MovieRef(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    title: str = Field(..., min_length=1, max_length=255)
    year: Optional[int] = Field(default=None, ge=0)


class MovieRead(MovieRef):
    model_config = ConfigDict(from_attributes=True)


# ---------- Roles ----------

class RoleCreate(BaseModel):
    movie: MovieRef
    name: str = Field(..., min_length=1, max_length=255)


class RoleRead(BaseModel):
    person_id: str
    movie: MovieRead
    name: str


# ---------- Person ----------

class PersonBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    birthday: Optional[date] = None
    birthplace: Optional[str] = Field(default=None, max_length=255)
    biography: Optional[str] = None
    profile_image_url: Optional[str] = Field(default=None, max_length=1024)


class PersonCreate(PersonBase):
    id: str = Field(..., min_length=1, max_length=64)


class PersonUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    birthday: Optional[date] = None
    birthplace: Optional[str] = Field(default=None, max_length=255)
    biography: Optional[str] = None
    profile_image_url: Optional[str] = Field(default=None, max_length=1024)
    # optimistic concurrency: send back the version you read
    version: Optional[int] = None


class PersonRead(PersonBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str
    version: Optional[int] = None
    last_modified: Optional[datetime] = None
    directed_movies: List[MovieRead] = []
    roles: List[RoleRead] = []
