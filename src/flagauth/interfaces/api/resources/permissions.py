"""Permissions API resources."""

import falcon.asgi

from flagauth.application.services import AuthorizationService
from flagauth.application.use_cases.permission.check_permissions import CheckPermissionsUseCase
from flagauth.application.use_cases.permission.invoke_permission import InvokePermissionUseCase
from flagauth.domain.exceptions import (
    InvalidFlagFormat,
    OnCooldown,
    PermissionDenied,
    ValidationError,
)
from flagauth.domain.services import most_specific_first
from flagauth.domain.value_objects import parse_holder


def _denied(resp: falcon.asgi.Response, error: PermissionDenied) -> None:
    resp.status = falcon.HTTP_403
    resp.media = {
        "error": "Permission denied",
        "missing": [str(f) for f in error.missing],
    }


class PermissionCheckResource:
    """POST /v1/permissions/check - check a holder against required flags."""

    def __init__(self, check_permissions: CheckPermissionsUseCase) -> None:
        self._check = check_permissions

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Return per-flag results for the holder in the body."""
        context = getattr(req.context, "auth", None)
        if not context:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            holder = parse_holder(body["holder"]["type"], body["holder"]["id"])
            required = body["required"]
            if not isinstance(required, list):
                raise ValidationError("required must be a list of flags")
            additional = body.get("additional", [])
            if not isinstance(additional, list):
                raise ValidationError("additional must be a list of flags")
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            summary = await self._check.execute(context, holder, required, additional)
        except PermissionDenied as e:
            _denied(resp, e)
            return
        except (InvalidFlagFormat, ValidationError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = summary.to_dict()
        resp.status = falcon.HTTP_200


class PermissionsMeResource:
    """GET /v1/permissions/me - the caller's effective flags."""

    def __init__(self, authorization: AuthorizationService) -> None:
        self._authorization = authorization

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List resolved flags, most specific first."""
        context = getattr(req.context, "auth", None)
        if not context:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        context = await self._authorization.load(context)
        resp.media = {"flags": [str(f) for f in most_specific_first(context.held)]}
        resp.status = falcon.HTTP_200


class PermissionInvokeResource:
    """POST /v1/permissions/invoke - exercise a flag and consume a cooldown slot."""

    def __init__(self, invoke_permission: InvokePermissionUseCase) -> None:
        self._invoke = invoke_permission

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Assert the flag for the caller and record one use."""
        context = getattr(req.context, "auth", None)
        if not context:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            flag = body["flag"]
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        try:
            result = await self._invoke.execute(context, flag)
        except InvalidFlagFormat as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except PermissionDenied as e:
            _denied(resp, e)
            return
        except OnCooldown as e:
            resp.status = falcon.HTTP_429
            resp.media = {
                "error": "On cooldown",
                "flag": str(e.flag),
                "cooldown_expires": e.expires.isoformat() if e.expires else None,
            }
            return

        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200
