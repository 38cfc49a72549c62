"""Pytest configuration for gcs-rest tests."""

import os
from unittest.mock import patch

import pytest

from gcs_rest.client import StorageClient
from gcs_rest.settings import GCSRestSettings, reset_settings
from gcs_rest.transport import TransportResponse

# Test constants
TEST_BUCKET = "test-bucket"
TEST_TOKEN = "test-access-token"


class RecordingTransport:
    """In-memory HttpTransport that records calls and replays responses."""

    def __init__(self, response: TransportResponse | None = None) -> None:
        self.response = response or TransportResponse(status=200, data={})
        self.calls: list[dict] = []
        self.closed = False

    async def _record(self, method, url, headers, body):
        self.calls.append({"method": method, "url": url, "headers": headers, "body": body})
        return self.response

    async def get(self, url, headers, body=None):
        return await self._record("GET", url, headers, body)

    async def post(self, url, headers, body=None):
        return await self._record("POST", url, headers, body)

    async def put(self, url, headers, body=None):
        return await self._record("PUT", url, headers, body)

    async def patch(self, url, headers, body=None):
        return await self._record("PATCH", url, headers, body)

    async def aclose(self):
        self.closed = True

    @property
    def last_call(self) -> dict:
        return self.calls[-1]


@pytest.fixture(autouse=True)
def reset_settings_after_test():
    """Reset settings singleton after each test."""
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def clean_env():
    """Keep GCS_* variables from the host out of the tests."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("GCS_")}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def bucket() -> str:
    """Sample bucket name for testing."""
    return TEST_BUCKET


@pytest.fixture
def token() -> str:
    """Sample bearer token for testing."""
    return TEST_TOKEN


@pytest.fixture
def settings() -> GCSRestSettings:
    """Default settings, isolated from any .env file."""
    return GCSRestSettings(_env_file=None)


@pytest.fixture
def transport() -> RecordingTransport:
    """Transport answering 200 with an empty JSON object."""
    return RecordingTransport()


@pytest.fixture
def client(transport, settings) -> StorageClient:
    """Storage client wired to the recording transport."""
    return StorageClient(transport=transport, settings=settings)
