"""External role repository port."""

from collections.abc import Collection
from typing import Protocol

from flagauth.domain.entities import ExternalRole


class ExternalRoleRepository(Protocol):
    """Port for external role persistence. Lookups include soft-deleted roles."""

    async def get_by_id(self, role_id: str) -> ExternalRole | None: ...

    async def list_by_ids(self, role_ids: Collection[str]) -> list[ExternalRole]: ...

    async def upsert(self, role: ExternalRole) -> ExternalRole: ...

    async def delete(self, role_id: str) -> None: ...
