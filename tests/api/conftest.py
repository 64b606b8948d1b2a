"""Fixtures for API tests."""

import falcon.asgi
import pytest
from falcon.testing import TestClient

from flagauth.application.dto import RequestContext
from flagauth.application.use_cases.external_role.sync_external_role import (
    SyncExternalRoleUseCase,
)
from flagauth.application.use_cases.permission.check_permissions import (
    CheckPermissionsUseCase,
)
from flagauth.application.use_cases.permission.invoke_permission import (
    InvokePermissionUseCase,
)
from flagauth.interfaces.api.app import create_app
from flagauth.interfaces.api.resources.external_roles import ExternalRoleEventsResource
from flagauth.interfaces.api.resources.health import HealthResource
from flagauth.interfaces.api.resources.permissions import (
    PermissionCheckResource,
    PermissionInvokeResource,
    PermissionsMeResource,
)

BOT_ID = "b0" * 12
USER_ID = "a1" * 12


class AuthBypassMiddleware:
    """Middleware that takes the caller's user id from X-Test-User."""

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        user_id = req.get_header("X-Test-User")
        req.context.auth = RequestContext(user_id=user_id) if user_id else None


@pytest.fixture
def app(seeded_uow, uow_factory, authorization, cooldown_tracker):
    """Falcon ASGI app wired to in-memory fakes."""
    return create_app(
        check_resource=PermissionCheckResource(CheckPermissionsUseCase(authorization)),
        me_resource=PermissionsMeResource(authorization),
        invoke_resource=PermissionInvokeResource(
            InvokePermissionUseCase(authorization, cooldown_tracker)
        ),
        external_role_events_resource=ExternalRoleEventsResource(
            SyncExternalRoleUseCase(uow_factory, authorization)
        ),
        health_resource=HealthResource(),
        middleware=[AuthBypassMiddleware()],
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def as_bot() -> dict[str, str]:
    return {"X-Test-User": BOT_ID}


@pytest.fixture
def as_user() -> dict[str, str]:
    return {"X-Test-User": USER_ID}
