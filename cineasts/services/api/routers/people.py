# cineasts/services/api/routers/people.py
from __future__ import annotations

from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Path

from cineasts.common.logging import get_logger
from cineasts.common.settings import get_settings
from cineasts.database.repos.people_repo import StaleVersionError
from cineasts.domain.entities.person import Person
from cineasts.domain.ports.graph import PeopleRepoPort
from cineasts.services.api.deps import get_people_repo
from cineasts.services.mappers.person import (
    apply_patch_to_domain, to_domain_from_create, to_domain_movie,
    to_movie_read, to_read, to_role_read,
)
from cineasts.services.schemas.people import (
    MovieRef, MovieRead, PersonCreate, PersonRead, PersonUpdate, RoleCreate, RoleRead,
)

cfg = get_settings()
logger = get_logger(__name__)
router = APIRouter(prefix=f"{cfg.api.prefix}/people", tags=["people"])


# ---- helpers ----

def _person_or_404(repo: PeopleRepoPort, person_id: str) -> Person:
    obj = repo.get(person_id)
    if obj is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Person not found")
    return obj


def _save_or_409(repo: PeopleRepoPort, person: Person) -> Person:
    try:
        return repo.save(person)
    except StaleVersionError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=str(e)) from e


# ---- CRUD ----

@router.get("", response_model=List[PersonRead])
def search_people(
    q: str = Query("", description="Full-text search over names (prefix match per word)"),
    limit: int = Query(cfg.search.default_limit, ge=1, le=cfg.search.max_limit),
    repo: PeopleRepoPort = Depends(get_people_repo),
) -> List[PersonRead]:
    return [to_read(p) for p in repo.search(q, limit=limit)]


@router.post("", response_model=PersonRead, status_code=HTTPStatus.CREATED)
def create_person(
    payload: PersonCreate,
    repo: PeopleRepoPort = Depends(get_people_repo),
) -> PersonRead:
    if repo.exists(payload.id):
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail="Person already exists")
    person = _save_or_409(repo, to_domain_from_create(payload))
    logger.info("Created person %s", person)
    return to_read(person)


@router.get("/{person_id}", response_model=PersonRead)
def get_person(
    person_id: str = Path(..., min_length=1),
    repo: PeopleRepoPort = Depends(get_people_repo),
) -> PersonRead:
    return to_read(_person_or_404(repo, person_id))


@router.patch("/{person_id}", response_model=PersonRead)
def update_person(
    person_id: str,
    payload: PersonUpdate,
    repo: PeopleRepoPort = Depends(get_people_repo),
) -> PersonRead:
    person = apply_patch_to_domain(_person_or_404(repo, person_id), payload)
    return to_read(_save_or_409(repo, person))


@router.delete("/{person_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_person(
    person_id: str,
    repo: PeopleRepoPort = Depends(get_people_repo),
) -> None:
    _person_or_404(repo, person_id)
    repo.delete(person_id)
    logger.info("Deleted person %s", person_id)
    # 204
    return None


# ---- Directed movies ----

@router.get("/{person_id}/directed", response_model=List[MovieRead])
def list_directed(
    person_id: str,
    repo: PeopleRepoPort = Depends(get_people_repo),
) -> List[MovieRead]:
    _person_or_404(repo, person_id)
    return [to_movie_read(m) for m in repo.list_directed(person_id)]


@router.post("/{person_id}/directed", response_model=MovieRead, status_code=HTTPStatus.CREATED)
def add_directed(
    person_id: str,
    payload: MovieRef,
    repo: PeopleRepoPort = Depends(get_people_repo),
) -> MovieRead:
    person = _person_or_404(repo, person_id)
    movie = to_domain_movie(payload)
    # idempotent: directing the same movie twice keeps one edge
    person.directed(movie)
    # the set keeps the first instance; answer with what gets stored
    stored = next(m for m in person.directed_movies if m == movie)
    _save_or_409(repo, person)
    return to_movie_read(stored)


# ---- Roles ----

@router.get("/{person_id}/roles", response_model=List[RoleRead])
def list_roles(
    person_id: str,
    repo: PeopleRepoPort = Depends(get_people_repo),
) -> List[RoleRead]:
    _person_or_404(repo, person_id)
    return [to_role_read(r) for r in repo.list_roles(person_id)]


@router.post("/{person_id}/roles", response_model=RoleRead, status_code=HTTPStatus.CREATED)
def add_role(
    person_id: str,
    payload: RoleCreate,
    repo: PeopleRepoPort = Depends(get_people_repo),
) -> RoleRead:
    person = _person_or_404(repo, person_id)
    role = person.played_in(to_domain_movie(payload.movie), payload.name)
    _save_or_409(repo, person)
    return to_role_read(role)
