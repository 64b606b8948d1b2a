"""External role API resources."""

import falcon.asgi

from flagauth.application.use_cases.external_role.sync_external_role import (
    ExternalRoleEvent,
    SyncExternalRoleUseCase,
)
from flagauth.domain.exceptions import NotFound, PermissionDenied, ValidationError
from flagauth.domain.value_objects import HolderType, parse_holder


class ExternalRoleEventsResource:
    """POST /v1/external-roles/{role_id}/events - mirror a platform role event."""

    def __init__(self, sync_external_role: SyncExternalRoleUseCase) -> None:
        self._sync = sync_external_role

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
    ) -> None:
        """Apply an updated, deleted or purged event."""
        context = getattr(req.context, "auth", None)
        if not context:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            parse_holder(HolderType.EXTERNAL_ROLE, role_id)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            body = await req.get_media()
            event = ExternalRoleEvent(body["event"])
            name = body.get("name")
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Unknown event"}
            return

        try:
            role = await self._sync.execute(context, role_id, event, name=name)
        except PermissionDenied as e:
            resp.status = falcon.HTTP_403
            resp.media = {
                "error": "Permission denied",
                "missing": [str(f) for f in e.missing],
            }
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        if role is None:
            resp.status = falcon.HTTP_204
            return
        resp.media = {"id": role.id, "name": role.name, "deleted": role.deleted}
        resp.status = falcon.HTTP_200
