"""Application services."""

from flagauth.application.services.authorization_service import AuthorizationService
from flagauth.application.services.cooldown_tracker import CooldownTracker
from flagauth.application.services.holder_resolver import HolderResolver, Resolution

__all__ = ["AuthorizationService", "CooldownTracker", "HolderResolver", "Resolution"]
