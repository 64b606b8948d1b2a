"""Domain entities."""

from flagauth.domain.entities.external_role import ExternalRole
from flagauth.domain.entities.invocation import CooldownInvocation
from flagauth.domain.entities.permission import Permission
from flagauth.domain.entities.role import Role
from flagauth.domain.entities.user import User

__all__ = [
    "CooldownInvocation",
    "ExternalRole",
    "Permission",
    "Role",
    "User",
]
