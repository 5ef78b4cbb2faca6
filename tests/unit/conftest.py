"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.document import Document
from domain.entities.profile import Profile, UserStatus


class FakeUnitOfWork:
    """Fake Unit of Work with a mocked document repository."""

    def __init__(self) -> None:
        self.documents = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


def make_doc(collection: str, id: str, **data: Any) -> Document:
    """Shorthand for a stored document."""
    return Document(collection=collection, id=id, data=data)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def member() -> Profile:
    """An ordinary signed-in student."""
    return Profile(uid="u-member", display_name="Sam Student", email="sam@example.edu")


@pytest.fixture
def other_member() -> Profile:
    return Profile(uid="u-other", display_name="Olive Other", email="olive@example.edu")


@pytest.fixture
def admin() -> Profile:
    return Profile(uid="u-admin", display_name="Ada Admin", is_admin=True)


@pytest.fixture
def faculty() -> Profile:
    return Profile(uid="u-faculty", display_name="Prof Faculty", is_faculty=True)


@pytest.fixture
def banned() -> Profile:
    return Profile(uid="u-banned", display_name="Bo Banned", status=UserStatus.BANNED.value)
