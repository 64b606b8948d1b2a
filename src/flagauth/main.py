"""Application entry point and composition root."""

import logging

import falcon

from flagauth import __version__
from flagauth.application.services import AuthorizationService, CooldownTracker, HolderResolver
from flagauth.application.use_cases.external_role.sync_external_role import (
    SyncExternalRoleUseCase,
)
from flagauth.application.use_cases.permission.check_permissions import CheckPermissionsUseCase
from flagauth.application.use_cases.permission.invoke_permission import InvokePermissionUseCase
from flagauth.config import Settings, get_settings
from flagauth.infrastructure.auth.keycloak_provider import KeycloakProvider
from flagauth.infrastructure.membership.http_provider import HttpMembershipProvider
from flagauth.infrastructure.persistence.postgres.connection import create_pool
from flagauth.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from flagauth.interfaces.api.app import create_app
from flagauth.interfaces.api.middleware.auth import AuthMiddleware
from flagauth.interfaces.api.middleware.lifespan import LifespanMiddleware
from flagauth.interfaces.api.resources.external_roles import ExternalRoleEventsResource
from flagauth.interfaces.api.resources.health import HealthResource
from flagauth.interfaces.api.resources.permissions import (
    PermissionCheckResource,
    PermissionInvokeResource,
    PermissionsMeResource,
)

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def main() -> None:
    """CLI entry point."""
    print(f"flagauth v{__version__}")


def create_flagauth_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
            user_claim=settings.keycloak_user_claim,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set, all requests are unauthenticated")

    membership = (
        HttpMembershipProvider(
            base_url=settings.membership_api_url,
            token=settings.membership_api_token,
            timeout=settings.membership_timeout,
        )
        if settings.membership_api_url
        else None
    )

    resolver = HolderResolver(uow_factory, membership)
    cooldowns = CooldownTracker(uow_factory)
    authorization = AuthorizationService(resolver, cooldowns)

    check_permissions = CheckPermissionsUseCase(permission_checker=authorization)
    invoke_permission = InvokePermissionUseCase(
        permission_checker=authorization,
        cooldown_tracker=cooldowns,
    )
    sync_external_role = SyncExternalRoleUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=authorization,
    )

    app = create_app(
        check_resource=PermissionCheckResource(check_permissions),
        me_resource=PermissionsMeResource(authorization),
        invoke_resource=PermissionInvokeResource(invoke_permission),
        external_role_events_resource=ExternalRoleEventsResource(sync_external_role),
        health_resource=HealthResource(pool),
        middleware=[
            LifespanMiddleware(pool, membership),
            AuthMiddleware(keycloak),
        ],
    )

    async def log_exception(req, resp, ex, params):
        logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
        resp.status = falcon.HTTP_500
        resp.media = {"title": "500 Internal Server Error"}

    app.add_error_handler(Exception, log_exception)
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_flagauth_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run_server()
