"""Cooldown invocation entity - one consumed use of a limited flag."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from flagauth.domain.value_objects import Flag


@dataclass(frozen=True)
class CooldownInvocation:
    """Append-only record; active until ``expires_at`` passes."""

    id: UUID
    subject_id: str
    flag: Flag
    expires_at: datetime

    def is_active(self, now: datetime) -> bool:
        return self.expires_at > now
