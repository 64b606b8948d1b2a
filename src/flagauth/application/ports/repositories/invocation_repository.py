"""Cooldown invocation repository port."""

from datetime import datetime
from typing import Protocol

from flagauth.domain.entities import CooldownInvocation
from flagauth.domain.value_objects import Flag


class InvocationRepository(Protocol):
    """Port for append-only cooldown invocation records."""

    async def list_active(
        self, subject_id: str, flag: Flag, now: datetime
    ) -> list[CooldownInvocation]: ...

    async def create(self, invocation: CooldownInvocation) -> CooldownInvocation: ...

    async def delete_expired(self, now: datetime) -> int: ...
