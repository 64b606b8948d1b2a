"""Auth middleware - resolves the bearer token to a request context."""

import falcon.asgi

from flagauth.application.dto import RequestContext


class AuthMiddleware:
    """Middleware that validates the bearer token and sets req.context.auth.

    ``req.context.auth`` is a ``RequestContext`` for authenticated requests
    and None otherwise.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.auth = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return
        user = self._keycloak.decode_token(auth[7:])
        if user:
            req.context.auth = RequestContext(user_id=user.user_id)
