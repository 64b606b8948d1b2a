"""User repository port."""

from typing import Protocol

from flagauth.domain.entities import User


class UserRepository(Protocol):
    """Port for user persistence."""

    async def get_by_id(self, user_id: str) -> User | None: ...

    async def get_by_external_id(self, external_id: str) -> User | None: ...

    async def upsert(self, user: User) -> User: ...

    async def delete(self, user_id: str) -> None: ...
