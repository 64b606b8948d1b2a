"""Role entity."""

from dataclasses import dataclass, field

from flagauth.domain.value_objects import Flag


@dataclass
class Role:
    """Role - grants its flags to every user referencing it.

    ``inherit`` is persisted for compatibility but never consulted during
    resolution; roles do not inherit from other roles.
    """

    id: str
    name: str
    description: str = ""
    flags: list[Flag] = field(default_factory=list)
    inherit: list[str] = field(default_factory=list)
    creator: str | None = None
