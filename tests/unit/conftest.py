"""Shared fixtures for unit tests."""

import httpx
import pytest

from fake_swift import AUTH_V1_URL, KEYSTONE_URL, FakeSwift
from swiftstore.client import SwiftClient
from swiftstore.config import V1Config, V2Config, V3Config


@pytest.fixture
def swift() -> FakeSwift:
    """In-memory Swift service."""
    return FakeSwift()


@pytest.fixture
def http_client(swift: FakeSwift) -> httpx.AsyncClient:
    """HTTP client routed to the fake service."""
    return swift.client()


@pytest.fixture
def v1_config() -> V1Config:
    return V1Config(auth_url=AUTH_V1_URL, username="tester", password="testing", tenant="test")


@pytest.fixture
def v2_config() -> V2Config:
    return V2Config(
        auth_url=f"{KEYSTONE_URL}/v2.0",
        user_name="tester",
        api_key="testing",
        tenant="test",
        region="RegionOne",
        internal=False,
    )


@pytest.fixture
def v3_config() -> V3Config:
    return V3Config(
        auth_url=f"{KEYSTONE_URL}/v3",
        user_name="demo",
        api_key="demo",
        tenant="test",
        tenant_domain="Default",
        domain="Default",
        region="RegionOne",
        internal=False,
    )


@pytest.fixture
def client(v1_config: V1Config, http_client: httpx.AsyncClient) -> SwiftClient:
    """SwiftClient using TempAuth against the fake service."""
    return SwiftClient(v1_config, http_client=http_client, auth_retry_delay=0)
