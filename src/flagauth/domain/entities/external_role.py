"""External role entity - mirror of a role on the external chat platform."""

from dataclasses import dataclass, field

from flagauth.domain.value_objects import Flag


@dataclass
class ExternalRole:
    """External role with flags granted to its current members.

    ``deleted`` mirrors the platform's deletion event; a deleted role keeps
    resolving until it is purged.
    """

    id: str
    name: str
    guild_id: str | None = None
    deleted: bool = False
    flags: list[Flag] = field(default_factory=list)
