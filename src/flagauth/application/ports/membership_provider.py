"""Membership provider port - external platform role membership."""

from typing import Protocol


class MembershipProvider(Protocol):
    """Port for listing the external roles an external identity currently holds.

    Implementations raise ``CollaboratorUnavailable`` when they cannot answer.
    """

    async def get_role_ids(self, external_id: str) -> list[str]: ...
