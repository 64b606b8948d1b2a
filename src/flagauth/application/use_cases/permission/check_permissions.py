"""Check permissions use case."""

from flagauth.application.dto import CheckSummary, RequestContext
from flagauth.application.ports import PermissionChecker
from flagauth.domain.exceptions import ValidationError
from flagauth.domain.value_objects import PermissionHolder, to_flags

CHECK_FLAG = "flagauth.permission.check"


class CheckPermissionsUseCase:
    """Check an arbitrary holder's flags on behalf of an authorized caller."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def execute(
        self,
        context: RequestContext,
        holder: PermissionHolder,
        required: list[str],
        additional: list[str] | None = None,
    ) -> CheckSummary:
        """Caller must hold flagauth.permission.check.

        ``additional`` flags are treated as granted for this check only, to
        answer "would the holder pass if it also held these". Nothing is
        stored.
        """
        await self._permission_checker.assert_permissions(context, CHECK_FLAG)

        flags = to_flags(required)
        if not flags:
            raise ValidationError("At least one required flag must be given")
        extra = to_flags(additional or [])

        checks = await self._permission_checker.check(holder, flags, additional=extra)
        return CheckSummary(checks=checks)
