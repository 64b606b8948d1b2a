"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from flagauth.interfaces.api.resources.external_roles import ExternalRoleEventsResource
from flagauth.interfaces.api.resources.health import HealthResource
from flagauth.interfaces.api.resources.permissions import (
    PermissionCheckResource,
    PermissionInvokeResource,
    PermissionsMeResource,
)


def create_app(
    check_resource: PermissionCheckResource,
    me_resource: PermissionsMeResource,
    invoke_resource: PermissionInvokeResource,
    external_role_events_resource: ExternalRoleEventsResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/permissions/check", check_resource)
    app.add_route("/v1/permissions/me", me_resource)
    app.add_route("/v1/permissions/invoke", invoke_resource)
    app.add_route(
        "/v1/external-roles/{role_id}/events",
        external_role_events_resource,
    )
    return app
