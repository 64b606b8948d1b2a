"""Authorization service - checks holders against required flags."""

import asyncio
import logging
from collections.abc import Sequence

from flagauth.application.dto import CheckResult, RequestContext
from flagauth.application.services.cooldown_tracker import CooldownTracker
from flagauth.application.services.holder_resolver import HolderResolver
from flagauth.domain.exceptions import PermissionDenied
from flagauth.domain.services import first_match, most_specific_first
from flagauth.domain.value_objects import Flag, PermissionHolder, to_flags

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Resolves a holder, matches required flags and reports cooldown state.

    Checks never consume a cooldown slot. Unknown holders fail closed: every
    requirement is reported as not passed.
    """

    def __init__(self, resolver: HolderResolver, cooldowns: CooldownTracker) -> None:
        self._resolver = resolver
        self._cooldowns = cooldowns

    async def resolve(
        self, holder: PermissionHolder, context: RequestContext | None = None
    ) -> frozenset[Flag]:
        return await self._resolver.resolve(holder, context)

    async def load(self, context: RequestContext) -> RequestContext:
        """Return ``context`` with the subject's resolved flags memoized."""
        if context.held is not None:
            return context
        held = await self._resolver.resolve(context.holder)
        return context.with_held(held)

    async def check(
        self,
        holder: PermissionHolder,
        required: Sequence[Flag],
        context: RequestContext | None = None,
        additional: Sequence[Flag] = (),
    ) -> list[CheckResult]:
        """Check each required flag independently, preserving input order.

        The most specific held flag that matches is the one a cooldown is
        attributed to. Only holders backed by a concrete user carry cooldowns.

        ``additional`` flags count as held for this call only. They are
        consulted after the holder's own grants and never carry cooldown state.
        """
        resolution = await self._resolver.resolve_subject(holder, context)
        held = most_specific_first(resolution.flags)
        extra = most_specific_first(set(additional))
        user_id = resolution.user_id

        async def check_one(flag: Flag) -> CheckResult:
            matched = first_match(flag, held)
            if matched is None:
                assumed = first_match(flag, extra)
                if assumed is None:
                    return CheckResult(flag=flag, passed=False)
                return CheckResult(flag=flag, passed=True, matched_by=assumed)
            if user_id is None:
                return CheckResult(flag=flag, passed=True, matched_by=matched)
            status = await self._cooldowns.check_cooldown(user_id, matched)
            return CheckResult(
                flag=flag,
                passed=True,
                on_cooldown=status.on_cooldown,
                cooldown_expires=status.cooldown_expires,
                matched_by=matched,
            )

        return list(await asyncio.gather(*(check_one(f) for f in required)))

    async def assert_permissions(
        self, context: RequestContext, *required: str
    ) -> list[CheckResult]:
        """Raise ``PermissionDenied`` unless the request's user holds every flag.

        ``required`` must be strict flags; malformed or wildcard input raises
        ``InvalidFlagFormat`` before anything is resolved.
        """
        flags = to_flags(required, strict=True)
        checks = await self.check(context.holder, flags, context)
        missing = [c.flag for c in checks if not c.passed]
        if missing:
            logger.info(
                "Denied user %s, missing %s",
                context.user_id,
                ", ".join(str(f) for f in missing),
            )
            raise PermissionDenied(missing)
        return checks
