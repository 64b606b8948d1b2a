"""Permission checker port - flag authorization."""

from collections.abc import Sequence
from typing import Protocol

from flagauth.application.dto import CheckResult, RequestContext
from flagauth.domain.value_objects import Flag, PermissionHolder


class PermissionChecker(Protocol):
    """Port for checking holders against required flags."""

    async def check(
        self,
        holder: PermissionHolder,
        required: Sequence[Flag],
        context: RequestContext | None = None,
        additional: Sequence[Flag] = (),
    ) -> list[CheckResult]: ...

    async def assert_permissions(
        self, context: RequestContext, *required: str
    ) -> list[CheckResult]: ...
