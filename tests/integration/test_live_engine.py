"""
Smoke tests against the live engine API.

Skipped unless ANEXIA_INTEGRATION_TESTS_ON is set; ANEXIA_TOKEN must hold a
valid API token.
"""

import os

import pytest
import pytest_asyncio

from anxcloud.client import AnxcloudClient
from anxcloud.errors import ConditionNeverMetError
from anxcloud.lbaas import BackendAPI, ServerAPI
from anxcloud.pagination import loop_until, stream_async
from anxcloud.settings import INTEGRATION_TEST_ENV_NAME, get_settings

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        INTEGRATION_TEST_ENV_NAME not in os.environ,
        reason=f"{INTEGRATION_TEST_ENV_NAME} not set",
    ),
]


@pytest_asyncio.fixture
async def client():
    async with AnxcloudClient.from_settings(get_settings()) as client:
        yield client


@pytest.mark.asyncio
async def test_stream_backends(client):
    async with stream_async(BackendAPI(client)) as stream:
        backends = [backend async for backend in stream]

    assert stream.error is None
    assert all(backend.identifier for backend in backends)


@pytest.mark.asyncio
async def test_loop_until_servers(client):
    try:
        await loop_until(ServerAPI(client), lambda server: bool(server.identifier))
    except ConditionNeverMetError:
        pytest.skip("no servers in this account")
