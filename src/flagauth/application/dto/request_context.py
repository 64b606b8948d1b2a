"""Request-scoped authorization context."""

from dataclasses import dataclass, replace

from flagauth.domain.value_objects import Flag, UserHolder


@dataclass(frozen=True)
class RequestContext:
    """Authenticated subject of one request.

    ``held`` memoizes the subject's resolved flags for the lifetime of the
    request; it is filled by ``AuthorizationService.load`` and passed along
    explicitly instead of being stored on a shared object.
    """

    user_id: str
    held: frozenset[Flag] | None = None

    @property
    def holder(self) -> UserHolder:
        return UserHolder(self.user_id)

    def with_held(self, held: frozenset[Flag]) -> "RequestContext":
        return replace(self, held=held)
