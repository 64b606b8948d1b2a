"""Domain exceptions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flagauth.domain.value_objects.flag import Flag


class FlagAuthError(Exception):
    """Base exception for flagauth."""

    pass


class InvalidFlagFormat(FlagAuthError, ValueError):
    """Raw string does not follow the permission flag grammar."""

    def __init__(self, raw: object, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"Invalid flag {raw!r}: {reason}")


class PermissionDenied(FlagAuthError):
    """One or more required flags are not satisfied.

    Only the missing *required* flags are exposed, never the held flags that
    were compared against them.
    """

    def __init__(self, missing: Sequence[Flag]) -> None:
        self.missing = list(missing)
        listed = ", ".join(str(f) for f in self.missing)
        super().__init__(f"Missing permissions: {listed}")


class OnCooldown(FlagAuthError):
    """The matched grant has used up its allowance for the current window."""

    def __init__(self, flag: Flag, expires: datetime | None) -> None:
        self.flag = flag
        self.expires = expires
        super().__init__(f"Permission {flag} is on cooldown")


class NotFound(FlagAuthError):
    """Requested resource was not found."""

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} {identifier} not found")


class ValidationError(FlagAuthError):
    """Validation failed for input data."""

    pass


class CollaboratorUnavailable(FlagAuthError):
    """An external collaborator could not answer."""

    pass
