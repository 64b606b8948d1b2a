"""Repository ports."""

from flagauth.application.ports.repositories.external_role_repository import (
    ExternalRoleRepository,
)
from flagauth.application.ports.repositories.invocation_repository import (
    InvocationRepository,
)
from flagauth.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from flagauth.application.ports.repositories.role_repository import RoleRepository
from flagauth.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "ExternalRoleRepository",
    "InvocationRepository",
    "PermissionRepository",
    "RoleRepository",
    "UserRepository",
]
