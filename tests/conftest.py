"""Pytest configuration and fixtures for pass-authz tests."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio

from pass_authz.features.acl import AclDriver, AclManager

from fake_repository import ACL_BASE, BASE, FakeRepository


@pytest.fixture
def repository():
    """Fake repository with an empty ACL container."""
    return FakeRepository()


@pytest_asyncio.fixture
async def client(repository):
    """HTTP client routed to the fake repository."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(repository.handle)) as http:
        yield http


@pytest.fixture
def driver(client):
    return AclDriver(ACL_BASE, client)


@pytest.fixture
def manager(driver):
    return AclManager(driver)


@pytest.fixture
def protected_resource(repository):
    """A protected resource without an ACL."""
    return repository.add(BASE + "submissions/" + uuid.uuid4().hex)


@pytest.fixture
def mock_builder():
    """Permission builder double whose grant methods chain."""
    builder = MagicMock()
    builder.grant_read.return_value = builder
    builder.grant_write.return_value = builder
    builder.grant_append.return_value = builder
    builder.perform = AsyncMock(return_value=ACL_BASE + "/acl")
    return builder


@pytest.fixture
def mock_acl_manager(mock_builder):
    manager = MagicMock()
    manager.set_permissions.return_value = mock_builder
    manager.add_permissions.return_value = mock_builder
    return manager
