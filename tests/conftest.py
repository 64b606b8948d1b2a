"""Pytest fixtures for flagauth tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Collection
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta

import pytest

from flagauth.application.services import AuthorizationService, CooldownTracker, HolderResolver
from flagauth.domain.entities import (
    CooldownInvocation,
    ExternalRole,
    Permission,
    Role,
    User,
)
from flagauth.domain.exceptions import CollaboratorUnavailable
from flagauth.domain.value_objects import Flag, to_flags


def flags(*raw: str) -> list[Flag]:
    """Shorthand for a validated flag list."""
    return to_flags(raw)


# --- Fake repositories ---


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> User | None:
        return self._by_id.get(user_id)

    async def get_by_external_id(self, external_id: str) -> User | None:
        for user in self._by_id.values():
            if user.external_id == external_id:
                return user
        return None

    async def upsert(self, user: User) -> User:
        self._by_id[user.id] = user
        return user

    async def delete(self, user_id: str) -> None:
        self._by_id.pop(user_id, None)

    def add(self, user: User) -> User:
        """Helper to add user for tests."""
        self._by_id[user.id] = user
        return user


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Role] = {}
        self.list_calls: list[list[str]] = []

    async def get_by_id(self, role_id: str) -> Role | None:
        return self._by_id.get(role_id)

    async def list_by_ids(self, role_ids: Collection[str]) -> list[Role]:
        self.list_calls.append(list(role_ids))
        return [self._by_id[i] for i in role_ids if i in self._by_id]

    async def upsert(self, role: Role) -> Role:
        self._by_id[role.id] = role
        return role

    async def delete(self, role_id: str) -> None:
        self._by_id.pop(role_id, None)

    def add(self, role: Role) -> Role:
        """Helper to add role for tests."""
        self._by_id[role.id] = role
        return role


class FakeExternalRoleRepository:
    """In-memory external role repository, soft-deleted roles included."""

    def __init__(self) -> None:
        self._by_id: dict[str, ExternalRole] = {}

    async def get_by_id(self, role_id: str) -> ExternalRole | None:
        return self._by_id.get(role_id)

    async def list_by_ids(self, role_ids: Collection[str]) -> list[ExternalRole]:
        return [self._by_id[i] for i in role_ids if i in self._by_id]

    async def upsert(self, role: ExternalRole) -> ExternalRole:
        self._by_id[role.id] = role
        return role

    async def delete(self, role_id: str) -> None:
        self._by_id.pop(role_id, None)

    def add(self, role: ExternalRole) -> ExternalRole:
        """Helper to add external role for tests."""
        self._by_id[role.id] = role
        return role


class FakePermissionRepository:
    """In-memory permission catalog."""

    def __init__(self) -> None:
        self._by_flag: dict[str, Permission] = {}

    async def get_by_flag(self, flag: Flag) -> Permission | None:
        return self._by_flag.get(flag.canonical)

    async def upsert(self, permission: Permission) -> Permission:
        self._by_flag[permission.flag.canonical] = permission
        return permission

    async def delete(self, flag: Flag) -> None:
        self._by_flag.pop(flag.canonical, None)

    def add(self, permission: Permission) -> Permission:
        """Helper to add catalog entry for tests."""
        self._by_flag[permission.flag.canonical] = permission
        return permission


class FakeInvocationRepository:
    """In-memory append-only invocation store."""

    def __init__(self) -> None:
        self.items: list[CooldownInvocation] = []

    async def list_active(
        self, subject_id: str, flag: Flag, now: datetime
    ) -> list[CooldownInvocation]:
        return [
            i
            for i in self.items
            if i.subject_id == subject_id and i.flag == flag and i.is_active(now)
        ]

    async def create(self, invocation: CooldownInvocation) -> CooldownInvocation:
        self.items.append(invocation)
        return invocation

    async def delete_expired(self, now: datetime) -> int:
        before = len(self.items)
        self.items = [i for i in self.items if i.is_active(now)]
        return before - len(self.items)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.users = FakeUserRepository()
        self.roles = FakeRoleRepository()
        self.external_roles = FakeExternalRoleRepository()
        self.permissions = FakePermissionRepository()
        self.invocations = FakeInvocationRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Fake collaborators ---


class FakeMembershipProvider:
    """Membership provider backed by a dict; can simulate an outage."""

    def __init__(self, memberships: dict[str, list[str]] | None = None) -> None:
        self.memberships = memberships or {}
        self.unavailable = False
        self.calls: list[str] = []

    async def get_role_ids(self, external_id: str) -> list[str]:
        self.calls.append(external_id)
        if self.unavailable:
            raise CollaboratorUnavailable("membership API down")
        return list(self.memberships.get(external_id, []))


class FixedClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def membership() -> FakeMembershipProvider:
    return FakeMembershipProvider()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def resolver(uow_factory, membership) -> HolderResolver:
    return HolderResolver(uow_factory, membership)


@pytest.fixture
def cooldown_tracker(uow_factory, clock) -> CooldownTracker:
    return CooldownTracker(uow_factory, clock=clock)


@pytest.fixture
def authorization(resolver, cooldown_tracker) -> AuthorizationService:
    return AuthorizationService(resolver, cooldown_tracker)


@pytest.fixture
def seeded_uow(fake_uow: FakeUnitOfWork, membership: FakeMembershipProvider) -> FakeUnitOfWork:
    """Store with a wildcard bot user, a test user linked to external id 123,
    a role and an external role that each grant ``test.permission``."""
    fake_uow.users.add(User(id="b0" * 12, name="botuser", flags=flags("*")))
    fake_uow.users.add(
        User(
            id="a1" * 12,
            name="test",
            flags=flags("test.permission"),
            external_id="123",
        )
    )
    fake_uow.roles.add(
        Role(id="c2" * 12, name="testrole", flags=flags("test.permission"))
    )
    fake_uow.external_roles.add(
        ExternalRole(id="456", name="testexternalrole", guild_id="789", flags=flags("test.permission"))
    )
    return fake_uow


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - assertions pass, checks return no results.

    ``unsafe=True`` lets the mock expose ``assert_permissions``; Mock otherwise
    rejects attribute names starting with "assert".
    """
    from unittest.mock import AsyncMock

    mock = AsyncMock(spec=AuthorizationService, unsafe=True)
    mock.assert_permissions.return_value = []
    mock.check.return_value = []
    return mock
