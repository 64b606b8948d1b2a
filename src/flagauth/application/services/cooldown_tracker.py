"""Cooldown tracking for flags declared with a usage limit."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

from flagauth.application.dto import CooldownStatus
from flagauth.domain.entities import CooldownInvocation
from flagauth.domain.value_objects import Flag

logger = logging.getLogger(__name__)

NOT_ON_COOLDOWN = CooldownStatus(on_cooldown=False)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CooldownTracker:
    """Counts active invocations per (subject, held flag).

    Checking is read-only; ``record_use`` is the only write. The two are not
    atomic, so concurrent callers may briefly exceed a limit.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def check_cooldown(self, subject_id: str, held_flag: Flag) -> CooldownStatus:
        """Report whether ``subject_id`` has exhausted ``held_flag``'s limit."""
        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_flag(held_flag)
            if permission is None or not permission.has_limit:
                return NOT_ON_COOLDOWN

            invocations = await uow.invocations.list_active(
                subject_id, held_flag, self._clock()
            )

        if len(invocations) < permission.usage_limit:
            return NOT_ON_COOLDOWN
        return CooldownStatus(
            on_cooldown=True,
            cooldown_expires=min(i.expires_at for i in invocations),
        )

    async def record_use(self, subject_id: str, held_flag: Flag) -> CooldownInvocation | None:
        """Persist one use of ``held_flag``; returns None for unlimited flags."""
        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_flag(held_flag)
            if permission is None or not permission.has_limit:
                return None

            invocation = CooldownInvocation(
                id=uuid4(),
                subject_id=subject_id,
                flag=held_flag,
                expires_at=self._clock() + permission.window,
            )
            await uow.invocations.create(invocation)

        logger.debug(
            "Recorded use of %s by %s until %s",
            held_flag,
            subject_id,
            invocation.expires_at.isoformat(),
        )
        return invocation

    async def reap_expired(self) -> int:
        """Delete lapsed invocations. Returns the number removed."""
        async with self._uow_factory() as uow:
            removed = await uow.invocations.delete_expired(self._clock())
        logger.info("Reaped %d expired invocations", removed)
        return removed
