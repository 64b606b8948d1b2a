"""HTTP membership provider - external platform role lookups."""

import logging

import httpx

from flagauth.domain.exceptions import CollaboratorUnavailable

logger = logging.getLogger(__name__)


class HttpMembershipProvider:
    """Looks up the external roles of a platform user over HTTP.

    Expects ``GET {base_url}/users/{external_id}`` to answer
    ``{"roles": ["<role id>", ...]}``. A 404 means the identity is not visible
    to the API and yields no roles. The client must be opened before use and
    closed on shutdown.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def open(self) -> None:
        if self._client is not None:
            return
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_role_ids(self, external_id: str) -> list[str]:
        """List role ids currently held by ``external_id``."""
        if self._client is None:
            raise CollaboratorUnavailable("Membership client is not open")

        try:
            response = await self._client.get(f"/users/{external_id}")
        except httpx.HTTPError as e:
            raise CollaboratorUnavailable(f"Membership request failed: {e}") from e

        if response.status_code == 404:
            return []
        if response.is_error:
            raise CollaboratorUnavailable(
                f"Membership API answered {response.status_code}"
            )

        try:
            roles = response.json().get("roles") or []
        except (ValueError, AttributeError) as e:
            raise CollaboratorUnavailable("Malformed membership response") from e
        if not isinstance(roles, list) or not all(
            isinstance(r, str | int) and not isinstance(r, bool) for r in roles
        ):
            raise CollaboratorUnavailable("Malformed membership response")
        return [str(r) for r in roles]
