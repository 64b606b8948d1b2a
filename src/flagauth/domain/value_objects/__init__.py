"""Domain value objects."""

from flagauth.domain.value_objects.flag import (
    Flag,
    StrictFlag,
    to_flags,
    validate_flag,
    validate_strict_flag,
)
from flagauth.domain.value_objects.holder import (
    ExternalRoleHolder,
    ExternalUserHolder,
    HolderType,
    PermissionHolder,
    RoleHolder,
    UserHolder,
    parse_holder,
)

__all__ = [
    "ExternalRoleHolder",
    "ExternalUserHolder",
    "Flag",
    "HolderType",
    "PermissionHolder",
    "RoleHolder",
    "StrictFlag",
    "UserHolder",
    "parse_holder",
    "to_flags",
    "validate_flag",
    "validate_strict_flag",
]
