"""Invoke permission use case - the point where cooldown uses are recorded."""

from flagauth.application.dto import CheckResult, RequestContext
from flagauth.application.ports import PermissionChecker
from flagauth.application.services import CooldownTracker
from flagauth.domain.exceptions import OnCooldown


class InvokePermissionUseCase:
    """Exercise one flag: assert it, refuse if throttled, then record the use."""

    def __init__(
        self,
        permission_checker: PermissionChecker,
        cooldown_tracker: CooldownTracker,
    ) -> None:
        self._permission_checker = permission_checker
        self._cooldowns = cooldown_tracker

    async def execute(self, context: RequestContext, flag: str) -> CheckResult:
        """Record one use against the held flag that granted ``flag``."""
        (result,) = await self._permission_checker.assert_permissions(context, flag)
        if result.on_cooldown:
            raise OnCooldown(result.flag, result.cooldown_expires)

        await self._cooldowns.record_use(context.user_id, result.matched_by)
        return result
