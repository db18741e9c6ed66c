"""Unit tests for the Keystone v2.0 authenticator."""

import httpx
import pytest

from fake_swift import KEYSTONE_URL, STORAGE_URL, TOKEN, FakeSwift
from swiftstore.auth_v2 import V2Authenticator
from swiftstore.config import V2Config
from swiftstore.exceptions import AuthError

LONG_KEY = "k" * 40


class TestV2Authenticator:
    """Test cases for V2Authenticator."""

    @pytest.mark.asyncio
    async def test_password_credentials(
        self, swift: FakeSwift, http_client: httpx.AsyncClient, v2_config: V2Config
    ) -> None:
        """Test short credentials are sent as a password."""
        result = await V2Authenticator(v2_config, http_client).authenticate()
        assert result.url == STORAGE_URL
        assert result.token == TOKEN

        assert len(swift.auth_bodies) == 1
        body = swift.auth_bodies[0]["auth"]
        assert body["passwordCredentials"] == {"username": "tester", "password": "testing"}
        assert body["tenantName"] == "test"
        assert "tenantId" not in body
        assert str(swift.requests[0].url) == f"{KEYSTONE_URL}/v2.0/tokens"

    @pytest.mark.asyncio
    async def test_long_key_guesses_api_key(self, swift: FakeSwift, http_client: httpx.AsyncClient) -> None:
        """Test long credentials are tried as an API key first."""
        swift.v2_accepts = "api_key"
        config = V2Config(auth_url=f"{KEYSTONE_URL}/v2.0", user_name="tester", api_key=LONG_KEY)
        authenticator = V2Authenticator(config, http_client)
        await authenticator.authenticate()

        assert len(swift.auth_bodies) == 1
        assert swift.auth_bodies[0]["auth"]["RAX-KSKEY:apiKeyCredentials"] == {
            "username": "tester",
            "apiKey": LONG_KEY,
        }

    @pytest.mark.asyncio
    async def test_swaps_shape_once_and_locks(self, swift: FakeSwift, http_client: httpx.AsyncClient) -> None:
        """Test a rejected shape is swapped, then the working shape is kept."""
        config = V2Config(auth_url=f"{KEYSTONE_URL}/v2.0", user_name="tester", api_key=LONG_KEY)
        authenticator = V2Authenticator(config, http_client)

        await authenticator.authenticate()
        assert len(swift.auth_bodies) == 2
        assert "RAX-KSKEY:apiKeyCredentials" in swift.auth_bodies[0]["auth"]
        assert "passwordCredentials" in swift.auth_bodies[1]["auth"]
        assert authenticator.shape_locked is True

        await authenticator.authenticate()
        assert len(swift.auth_bodies) == 3
        assert "passwordCredentials" in swift.auth_bodies[2]["auth"]

    @pytest.mark.asyncio
    async def test_both_shapes_rejected(self, swift: FakeSwift, http_client: httpx.AsyncClient) -> None:
        """Test two rejected attempts raise AuthError."""
        swift.v2_accepts = "nothing"
        config = V2Config(auth_url=f"{KEYSTONE_URL}/v2.0", user_name="tester", api_key="testing")
        with pytest.raises(AuthError) as exc_info:
            await V2Authenticator(config, http_client).authenticate()
        assert exc_info.value.status_code == 401
        assert len(swift.auth_bodies) == 2

    @pytest.mark.asyncio
    async def test_locked_shape_is_not_swapped(
        self, swift: FakeSwift, http_client: httpx.AsyncClient, v2_config: V2Config
    ) -> None:
        """Test a later rejection does not swap a locked shape."""
        authenticator = V2Authenticator(v2_config, http_client)
        await authenticator.authenticate()

        swift.v2_accepts = "nothing"
        with pytest.raises(AuthError):
            await authenticator.authenticate()
        assert len(swift.auth_bodies) == 2

    @pytest.mark.asyncio
    async def test_region_selection(self, http_client: httpx.AsyncClient) -> None:
        """Test the endpoint of the configured region is used."""
        config = V2Config(
            auth_url=f"{KEYSTONE_URL}/v2.0", user_name="tester", api_key="testing", region="Other"
        )
        result = await V2Authenticator(config, http_client).authenticate()
        assert result.url == "http://other.test/v1/AUTH_test"

    @pytest.mark.asyncio
    async def test_any_region(self, http_client: httpx.AsyncClient) -> None:
        """Test the first endpoint is used without a region."""
        config = V2Config(auth_url=f"{KEYSTONE_URL}/v2.0", user_name="tester", api_key="testing", internal=False)
        result = await V2Authenticator(config, http_client).authenticate()
        assert result.url == "http://other.test/v1/AUTH_test"

    @pytest.mark.asyncio
    async def test_internal_endpoint(self, http_client: httpx.AsyncClient) -> None:
        """Test the internal URL is chosen for internal endpoints."""
        config = V2Config(
            auth_url=f"{KEYSTONE_URL}/v2.0/",
            user_name="tester",
            api_key="testing",
            region="RegionOne",
            internal=True,
        )
        result = await V2Authenticator(config, http_client).authenticate()
        assert result.url == "http://swift.internal/v1/AUTH_test"

    @pytest.mark.asyncio
    async def test_missing_object_store(self, v2_config: V2Config) -> None:
        """Test a catalog without object-store raises AuthError."""
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(
                lambda request: httpx.Response(
                    200, json={"access": {"token": {"id": TOKEN}, "serviceCatalog": []}}
                )
            )
        )
        with pytest.raises(AuthError, match="object-store"):
            await V2Authenticator(v2_config, client).authenticate()

    @pytest.mark.asyncio
    async def test_invalid_json(self, v2_config: V2Config) -> None:
        """Test an unparsable body raises AuthError."""
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="not json"))
        )
        with pytest.raises(AuthError, match="parse"):
            await V2Authenticator(v2_config, client).authenticate()
