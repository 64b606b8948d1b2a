"""Holder resolution - flattens a holder into its effective flag set."""

import logging
from dataclasses import dataclass
from typing import assert_never

from flagauth.application.dto import RequestContext
from flagauth.application.ports import MembershipProvider, UnitOfWork
from flagauth.domain.entities import User
from flagauth.domain.exceptions import CollaboratorUnavailable
from flagauth.domain.value_objects import (
    ExternalRoleHolder,
    ExternalUserHolder,
    Flag,
    PermissionHolder,
    RoleHolder,
    UserHolder,
)

logger = logging.getLogger(__name__)

_EMPTY: frozenset[Flag] = frozenset()


@dataclass(frozen=True)
class Resolution:
    """Resolved flags plus the concrete user they belong to, if any.

    ``user_id`` is set only when the holder is, or is linked to, an internal
    user; cooldown accounting applies only then.
    """

    flags: frozenset[Flag]
    user_id: str | None = None


class HolderResolver:
    """Resolves users, roles and external identities to their flag sets.

    Unknown holders resolve to an empty set rather than raising. Role
    inheritance is not followed.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        membership_provider: MembershipProvider | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._membership = membership_provider

    async def resolve(
        self, holder: PermissionHolder, context: RequestContext | None = None
    ) -> frozenset[Flag]:
        """Return the holder's effective, deduplicated flags."""
        resolution = await self.resolve_subject(holder, context)
        return resolution.flags

    async def resolve_subject(
        self, holder: PermissionHolder, context: RequestContext | None = None
    ) -> Resolution:
        """Resolve flags and the concrete user behind ``holder``.

        When ``context`` already carries the flags of the same user they are
        reused instead of querying the store again.
        """
        if context is not None and context.held is not None and holder == context.holder:
            return Resolution(flags=context.held, user_id=context.user_id)

        match holder:
            case UserHolder(id=user_id):
                async with self._uow_factory() as uow:
                    user = await uow.users.get_by_id(user_id)
                    if user is None:
                        return Resolution(flags=_EMPTY)
                    local = await self._local_flags(uow, user)
                return await self._with_external(user, local)
            case RoleHolder(id=role_id):
                async with self._uow_factory() as uow:
                    role = await uow.roles.get_by_id(role_id)
                if role is None:
                    return Resolution(flags=_EMPTY)
                return Resolution(flags=frozenset(role.flags))
            case ExternalUserHolder(id=external_id):
                async with self._uow_factory() as uow:
                    user = await uow.users.get_by_external_id(external_id)
                    local = await self._local_flags(uow, user) if user is not None else _EMPTY
                if user is None:
                    return Resolution(flags=await self._external_flags(external_id))
                return await self._with_external(user, local)
            case ExternalRoleHolder(id=role_id):
                async with self._uow_factory() as uow:
                    external_role = await uow.external_roles.get_by_id(role_id)
                if external_role is None:
                    return Resolution(flags=_EMPTY)
                return Resolution(flags=frozenset(external_role.flags))
            case _:
                assert_never(holder)

    async def _local_flags(self, uow: UnitOfWork, user: User) -> frozenset[Flag]:
        """Direct flags plus the flags of referenced roles."""
        flags: set[Flag] = set(user.flags)
        if user.roles:
            for role in await uow.roles.list_by_ids(user.roles):
                flags.update(role.flags)
        return frozenset(flags)

    async def _with_external(self, user: User, local: frozenset[Flag]) -> Resolution:
        if not user.external_id:
            return Resolution(flags=local, user_id=user.id)
        external = await self._external_flags(user.external_id)
        return Resolution(flags=local | external, user_id=user.id)

    async def _external_flags(self, external_id: str) -> frozenset[Flag]:
        """Flags of external roles the identity currently holds; best effort.

        The membership call runs with no unit of work open, so a slow
        collaborator never pins a pooled connection.
        """
        if self._membership is None:
            return _EMPTY
        try:
            role_ids = await self._membership.get_role_ids(external_id)
        except CollaboratorUnavailable as e:
            logger.warning("Membership lookup for %s failed, ignoring external roles: %s", external_id, e)
            return _EMPTY
        if not role_ids:
            return _EMPTY

        flags: set[Flag] = set()
        async with self._uow_factory() as uow:
            for external_role in await uow.external_roles.list_by_ids(role_ids):
                flags.update(external_role.flags)
        return frozenset(flags)
