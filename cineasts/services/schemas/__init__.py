from cineasts.services.schemas.people import (
    MovieRef,
    MovieRead,
    RoleCreate,
    RoleRead,
    PersonBase,
    PersonCreate,
    PersonUpdate,
    PersonRead,
)

__all__ = [
    "MovieRef",
    "MovieRead",
    "RoleCreate",
    "RoleRead",
    "PersonBase",
    "PersonCreate",
    "PersonUpdate",
    "PersonRead",
]
