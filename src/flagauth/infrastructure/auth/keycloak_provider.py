"""Keycloak OIDC provider for JWT validation."""

import logging
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class OIDCUser:
    """Authenticated user from OIDC token."""

    user_id: str
    username: str | None


class KeycloakProvider:
    """Keycloak OIDC - introspects bearer tokens and extracts the internal user id.

    The internal user id is read from ``user_claim``; tokens without it fall
    back to the ``sub`` claim.
    """

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
        user_claim: str = "flagauth_user_id",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._user_claim = user_claim

    def decode_token(self, token: str) -> OIDCUser | None:
        """Validate token, return user info or None."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active"):
            return None
        user_id = token_info.get(self._user_claim) or token_info.get("sub")
        if not user_id:
            return None
        return OIDCUser(
            user_id=str(user_id),
            username=token_info.get("preferred_username"),
        )
