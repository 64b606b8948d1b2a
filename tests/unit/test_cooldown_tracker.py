"""Unit tests for CooldownTracker."""

from datetime import timedelta
from uuid import uuid4

import pytest

from flagauth.application.services import CooldownTracker
from flagauth.domain.entities import CooldownInvocation, Permission
from flagauth.domain.value_objects import validate_flag

from tests.conftest import FakeUnitOfWork, FixedClock

SUBJECT = "a1" * 12
FLAG = validate_flag("test.permission")


@pytest.fixture
def limited(fake_uow: FakeUnitOfWork) -> FakeUnitOfWork:
    fake_uow.permissions.add(
        Permission(flag=FLAG, name="Test", usage_limit=1, cooldown_seconds=60)
    )
    return fake_uow


@pytest.mark.asyncio
async def test_unknown_flag_is_never_on_cooldown(cooldown_tracker: CooldownTracker) -> None:
    status = await cooldown_tracker.check_cooldown(SUBJECT, FLAG)
    assert status.on_cooldown is False
    assert status.cooldown_expires is None


@pytest.mark.asyncio
async def test_unlimited_flag_records_nothing(
    cooldown_tracker: CooldownTracker, fake_uow: FakeUnitOfWork
) -> None:
    fake_uow.permissions.add(Permission(flag=FLAG, name="Test"))

    assert await cooldown_tracker.record_use(SUBJECT, FLAG) is None
    assert fake_uow.invocations.items == []
    assert (await cooldown_tracker.check_cooldown(SUBJECT, FLAG)).on_cooldown is False


@pytest.mark.asyncio
async def test_limit_of_one(
    cooldown_tracker: CooldownTracker, limited: FakeUnitOfWork, clock: FixedClock
) -> None:
    assert (await cooldown_tracker.check_cooldown(SUBJECT, FLAG)).on_cooldown is False

    invocation = await cooldown_tracker.record_use(SUBJECT, FLAG)

    assert invocation is not None
    assert invocation.expires_at == clock.now + timedelta(seconds=60)
    status = await cooldown_tracker.check_cooldown(SUBJECT, FLAG)
    assert status.on_cooldown is True
    assert status.cooldown_expires == invocation.expires_at


@pytest.mark.asyncio
async def test_cooldown_lapses_after_window(
    cooldown_tracker: CooldownTracker, limited: FakeUnitOfWork, clock: FixedClock
) -> None:
    await cooldown_tracker.record_use(SUBJECT, FLAG)

    clock.advance(59)
    assert (await cooldown_tracker.check_cooldown(SUBJECT, FLAG)).on_cooldown is True
    clock.advance(1)
    assert (await cooldown_tracker.check_cooldown(SUBJECT, FLAG)).on_cooldown is False


@pytest.mark.asyncio
async def test_limit_counts_uses_within_window(
    cooldown_tracker: CooldownTracker, fake_uow: FakeUnitOfWork, clock: FixedClock
) -> None:
    fake_uow.permissions.add(
        Permission(flag=FLAG, name="Test", usage_limit=3, cooldown_seconds=100)
    )

    first = await cooldown_tracker.record_use(SUBJECT, FLAG)
    clock.advance(10)
    await cooldown_tracker.record_use(SUBJECT, FLAG)
    assert (await cooldown_tracker.check_cooldown(SUBJECT, FLAG)).on_cooldown is False

    clock.advance(10)
    await cooldown_tracker.record_use(SUBJECT, FLAG)
    status = await cooldown_tracker.check_cooldown(SUBJECT, FLAG)

    assert status.on_cooldown is True
    # The earliest-expiring use frees the next slot.
    assert status.cooldown_expires == first.expires_at


@pytest.mark.asyncio
async def test_subjects_are_independent(
    cooldown_tracker: CooldownTracker, limited: FakeUnitOfWork
) -> None:
    await cooldown_tracker.record_use(SUBJECT, FLAG)
    assert (await cooldown_tracker.check_cooldown("b0" * 12, FLAG)).on_cooldown is False


@pytest.mark.asyncio
async def test_flags_are_independent(
    cooldown_tracker: CooldownTracker, limited: FakeUnitOfWork
) -> None:
    other = validate_flag("test.other")
    limited.permissions.add(
        Permission(flag=other, name="Other", usage_limit=1, cooldown_seconds=60)
    )

    await cooldown_tracker.record_use(SUBJECT, FLAG)

    assert (await cooldown_tracker.check_cooldown(SUBJECT, other)).on_cooldown is False


@pytest.mark.asyncio
async def test_wildcard_grant_is_tracked_under_its_own_flag(
    cooldown_tracker: CooldownTracker, fake_uow: FakeUnitOfWork
) -> None:
    wildcard = validate_flag("test.*")
    fake_uow.permissions.add(
        Permission(flag=wildcard, name="Any test", usage_limit=1, cooldown_seconds=30)
    )

    invocation = await cooldown_tracker.record_use(SUBJECT, wildcard)

    assert invocation.flag == wildcard
    assert (await cooldown_tracker.check_cooldown(SUBJECT, wildcard)).on_cooldown is True


@pytest.mark.asyncio
async def test_check_does_not_record(
    cooldown_tracker: CooldownTracker, limited: FakeUnitOfWork
) -> None:
    for _ in range(3):
        await cooldown_tracker.check_cooldown(SUBJECT, FLAG)
    assert limited.invocations.items == []


@pytest.mark.asyncio
async def test_reap_expired(
    cooldown_tracker: CooldownTracker, fake_uow: FakeUnitOfWork, clock: FixedClock
) -> None:
    fake_uow.invocations.items = [
        CooldownInvocation(uuid4(), SUBJECT, FLAG, clock.now - timedelta(seconds=1)),
        CooldownInvocation(uuid4(), SUBJECT, FLAG, clock.now),
        CooldownInvocation(uuid4(), SUBJECT, FLAG, clock.now + timedelta(seconds=1)),
    ]

    removed = await cooldown_tracker.reap_expired()

    assert removed == 2
    assert len(fake_uow.invocations.items) == 1
