"""Permission holder references.

A holder is a typed lookup key into user, role or external records. The
variants form a closed union so resolution can match over them exhaustively.
"""

import re
from dataclasses import dataclass
from enum import StrEnum

from flagauth.domain.exceptions import ValidationError


class HolderType(StrEnum):
    """Kinds of subjects that can be granted flags."""

    USER = "user"
    ROLE = "role"
    EXTERNAL_USER = "external_user"
    EXTERNAL_ROLE = "external_role"


@dataclass(frozen=True)
class UserHolder:
    """Internal user, referenced by its hex id."""

    id: str
    type = HolderType.USER


@dataclass(frozen=True)
class RoleHolder:
    """Internal role, referenced by its hex id."""

    id: str
    type = HolderType.ROLE


@dataclass(frozen=True)
class ExternalUserHolder:
    """User on the external chat platform, referenced by its platform id."""

    id: str
    type = HolderType.EXTERNAL_USER


@dataclass(frozen=True)
class ExternalRoleHolder:
    """Role on the external chat platform, referenced by its platform id."""

    id: str
    type = HolderType.EXTERNAL_ROLE


PermissionHolder = UserHolder | RoleHolder | ExternalUserHolder | ExternalRoleHolder

_INTERNAL_ID = re.compile(r"[0-9a-f]{12,24}")
_EXTERNAL_ID = re.compile(r"[0-9]+")

_ID_PATTERNS: dict[HolderType, re.Pattern[str]] = {
    HolderType.USER: _INTERNAL_ID,
    HolderType.ROLE: _INTERNAL_ID,
    HolderType.EXTERNAL_USER: _EXTERNAL_ID,
    HolderType.EXTERNAL_ROLE: _EXTERNAL_ID,
}

_HOLDER_CLASSES: dict[HolderType, type[PermissionHolder]] = {
    HolderType.USER: UserHolder,
    HolderType.ROLE: RoleHolder,
    HolderType.EXTERNAL_USER: ExternalUserHolder,
    HolderType.EXTERNAL_ROLE: ExternalRoleHolder,
}


def parse_holder(holder_type: str, holder_id: str) -> PermissionHolder:
    """Build a holder from its wire representation.

    Internal ids are 12-24 lowercase hex characters; external platform ids are
    decimal strings. Anything else raises ``ValidationError``.
    """
    try:
        kind = HolderType(holder_type)
    except ValueError:
        raise ValidationError(f"Unknown holder type: {holder_type!r}") from None
    if not isinstance(holder_id, str) or not _ID_PATTERNS[kind].fullmatch(holder_id):
        raise ValidationError(f"Malformed {kind} id: {holder_id!r}")
    return _HOLDER_CLASSES[kind](holder_id)
