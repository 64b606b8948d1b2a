"""Permission catalog repository port."""

from typing import Protocol

from flagauth.domain.entities import Permission
from flagauth.domain.value_objects import Flag


class PermissionRepository(Protocol):
    """Port for permission catalog persistence, keyed by flag."""

    async def get_by_flag(self, flag: Flag) -> Permission | None: ...

    async def upsert(self, permission: Permission) -> Permission: ...

    async def delete(self, flag: Flag) -> None: ...
