"""Mirror external platform role events into stored external roles."""

import logging
from enum import StrEnum

from flagauth.application.dto import RequestContext
from flagauth.application.ports import PermissionChecker
from flagauth.domain.entities import ExternalRole
from flagauth.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)

SYNC_FLAG = "flagauth.externalrole.sync"


class ExternalRoleEvent(StrEnum):
    """Role lifecycle events emitted by the external platform."""

    UPDATED = "updated"
    DELETED = "deleted"
    PURGED = "purged"


class SyncExternalRoleUseCase:
    """Apply a rename, soft delete or purge to a stored external role."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self,
        context: RequestContext,
        role_id: str,
        event: ExternalRoleEvent,
        name: str | None = None,
    ) -> ExternalRole | None:
        """Returns the updated role, or None once purged."""
        await self._permission_checker.assert_permissions(context, SYNC_FLAG)

        async with self._uow_factory() as uow:
            role = await uow.external_roles.get_by_id(role_id)
            if role is None:
                raise NotFound("External role", role_id)

            if event is ExternalRoleEvent.PURGED:
                await uow.external_roles.delete(role_id)
                logger.info("Purged external role %s", role_id)
                return None

            if event is ExternalRoleEvent.DELETED:
                role.deleted = True
            elif event is ExternalRoleEvent.UPDATED:
                if not name:
                    raise ValidationError("Role name is required for updates")
                role.name = name

            await uow.external_roles.upsert(role)

        logger.info("Applied %s to external role %s", event.value, role_id)
        return role
