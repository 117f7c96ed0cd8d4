"""Tests for RecipientResolver (fake user directory)."""

from app.application.services.recipient_resolver import RecipientResolver
from app.domain.enums import UserRole
from tests.fakes import FakeUserDirectory, make_user


def _directory() -> FakeUserDirectory:
    return FakeUserDirectory(
        make_user("admin1", UserRole.ADMIN),
        make_user("admin2", UserRole.ADMIN),
        make_user("u1"),
        make_user("u2"),
        make_user("u3"),
    )


async def test_resolve_drops_admins() -> None:
    """Two admins and three users in: exactly the three users out."""
    resolver = RecipientResolver(_directory())
    got = await resolver.resolve({"admin1", "admin2", "u1", "u2", "u3"})
    assert got == {"u1", "u2", "u3"}


async def test_resolve_uses_one_batched_lookup() -> None:
    directory = _directory()
    resolver = RecipientResolver(directory)
    await resolver.resolve({"u1", "u2", "admin1"})
    assert directory.calls == [("get_many_by_ids", frozenset({"u1", "u2", "admin1"}))]


async def test_resolve_empty_input_skips_directory() -> None:
    directory = _directory()
    resolver = RecipientResolver(directory)
    assert await resolver.resolve(set()) == set()
    assert directory.calls == []


async def test_resolve_drops_unknown_ids() -> None:
    resolver = RecipientResolver(_directory())
    assert await resolver.resolve({"u1", "ghost"}) == {"u1"}


async def test_resolve_is_repeatable() -> None:
    resolver = RecipientResolver(_directory())
    first = await resolver.resolve({"u1", "admin2"})
    second = await resolver.resolve({"u1", "admin2"})
    assert first == second == {"u1"}


async def test_admin_audience_returns_every_admin() -> None:
    directory = _directory()
    resolver = RecipientResolver(directory)
    assert await resolver.admin_audience() == {"admin1", "admin2"}
    assert directory.calls == [("find_by_role", UserRole.ADMIN)]


async def test_admin_audience_skips_inactive_admins() -> None:
    directory = FakeUserDirectory(
        make_user("admin1", UserRole.ADMIN),
        make_user("retired", UserRole.ADMIN, is_active=False),
    )
    assert await RecipientResolver(directory).admin_audience() == {"admin1"}
