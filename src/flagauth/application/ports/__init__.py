"""Application ports - interfaces for external adapters."""

from flagauth.application.ports.membership_provider import MembershipProvider
from flagauth.application.ports.permission_checker import PermissionChecker
from flagauth.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "MembershipProvider",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
