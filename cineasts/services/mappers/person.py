# cineasts/services/mappers/person.py
from __future__ import annotations

from cineasts.domain.entities.links.role import Role
from cineasts.domain.entities.movie import Movie
from cineasts.domain.entities.person import Person
from cineasts.services.schemas.people import (
    MovieRef, MovieRead, PersonCreate, PersonRead, PersonUpdate, RoleRead,
)


def to_domain_movie(s: MovieRef) -> Movie:
    return Movie(id=s.id, title=s.title, year=s.year)


def to_domain_from_create(s: PersonCreate) -> Person:
    return Person(
        id=s.id,
        name=s.name,
        birthday=s.birthday,
        birthplace=s.birthplace,
        biography=s.biography,
        profile_image_url=s.profile_image_url,
    )


def apply_patch_to_domain(person: Person, p: PersonUpdate) -> Person:
    # only fields the client actually sent; an explicit null clears the field
    sent = p.model_fields_set

    if "name" in sent and p.name is not None:
        person.name = p.name
    if "birthday" in sent: person.birthday = p.birthday
    if "birthplace" in sent: person.birthplace = p.birthplace
    if "biography" in sent: person.biography = p.biography
    if "profile_image_url" in sent: person.profile_image_url = p.profile_image_url

    # the repo compares this against the stored version on save
    if p.version is not None:
        person.version = p.version
    return person


def to_movie_read(m: Movie) -> MovieRead:
    return MovieRead.model_validate(m)


def to_role_read(r: Role) -> RoleRead:
    return RoleRead(person_id=r.person.id, movie=to_movie_read(r.movie), name=r.name)


def to_read(person: Person) -> PersonRead:
    return PersonRead(
        id=person.id,
        name=person.name,
        label=str(person),
        birthday=person.birthday,
        birthplace=person.birthplace,
        biography=person.biography,
        profile_image_url=person.profile_image_url,
        version=person.version,
        last_modified=person.last_modified,
        directed_movies=[
            to_movie_read(m) for m in sorted(person.directed_movies, key=lambda m: (m.title, m.id))
        ],
        roles=[
            to_role_read(r) for r in sorted(person.roles, key=lambda r: (r.movie.title, r.name))
        ],
    )
