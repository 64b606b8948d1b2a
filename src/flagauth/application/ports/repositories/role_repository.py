"""Role repository port."""

from collections.abc import Collection
from typing import Protocol

from flagauth.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role persistence."""

    async def get_by_id(self, role_id: str) -> Role | None: ...

    async def list_by_ids(self, role_ids: Collection[str]) -> list[Role]: ...

    async def upsert(self, role: Role) -> Role: ...

    async def delete(self, role_id: str) -> None: ...
