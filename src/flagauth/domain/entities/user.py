"""User entity."""

from dataclasses import dataclass, field

from flagauth.domain.value_objects import Flag


@dataclass
class User:
    """Internal user with direct flags, role references and an optional external link."""

    id: str
    name: str
    flags: list[Flag] = field(default_factory=list)
    roles: list[str] = field(default_factory=list)
    external_id: str | None = None
    avatar: str | None = None
