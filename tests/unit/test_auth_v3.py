"""Unit tests for the Keystone v3 authenticator."""

import httpx
import pytest

from fake_swift import KEYSTONE_URL, STORAGE_URL, TOKEN, FakeSwift
from swiftstore.auth_v3 import V3Authenticator
from swiftstore.config import V3Config
from swiftstore.exceptions import AuthError, ConfigurationError

AUTH_URL = f"{KEYSTONE_URL}/v3"


def _request(**options) -> dict:
    config = V3Config(auth_url=AUTH_URL, **options)
    return V3Authenticator(config, httpx.AsyncClient()).build_request()["auth"]


class TestV3Request:
    """Test building the v3 auth request."""

    def test_password_with_project_name(self) -> None:
        """Test password identity scoped to a named project."""
        auth = _request(user_name="demo", api_key="secret", domain="Default", tenant="test", tenant_domain="Users")
        assert auth["identity"]["methods"] == ["password"]
        assert auth["identity"]["password"]["user"] == {
            "name": "demo",
            "password": "secret",
            "domain": {"name": "Default"},
        }
        assert auth["scope"] == {"project": {"name": "test", "domain": {"name": "Users"}}}

    def test_password_with_user_id(self) -> None:
        """Test password identity by user ID and domain ID."""
        auth = _request(user_id="u-1", api_key="secret", domain_id="d-1")
        assert auth["identity"]["password"]["user"] == {
            "id": "u-1",
            "password": "secret",
            "domain": {"id": "d-1"},
        }
        assert "scope" not in auth

    def test_token_method(self) -> None:
        """Test the api key is used as a token without a user."""
        auth = _request(api_key="existing-token", tenant_id="p-1")
        assert auth["identity"] == {"methods": ["token"], "token": {"id": "existing-token"}}
        assert auth["scope"] == {"project": {"id": "p-1"}}

    def test_token_method_requires_api_key(self) -> None:
        """Test token auth without a token is a configuration error."""
        with pytest.raises(ConfigurationError):
            _request(tenant="test")

    def test_application_credential_by_id(self) -> None:
        """Test application credentials by ID need no user and no scope."""
        auth = _request(
            application_credential_id="ac-1",
            application_credential_secret="s3cr3t",
            tenant="ignored",
        )
        assert auth["identity"] == {
            "methods": ["application_credential"],
            "application_credential": {"id": "ac-1", "secret": "s3cr3t"},
        }
        assert "scope" not in auth

    def test_application_credential_by_name(self) -> None:
        """Test application credentials by name resolve the user."""
        auth = _request(
            application_credential_name="backup",
            application_credential_secret="s3cr3t",
            user_name="demo",
            domain="Default",
        )
        assert auth["identity"]["application_credential"] == {
            "name": "backup",
            "secret": "s3cr3t",
            "user": {"name": "demo", "domain": {"name": "Default"}},
        }

    def test_application_credential_user_id(self) -> None:
        """Test the user ID takes precedence for application credentials."""
        auth = _request(
            application_credential_name="backup",
            application_credential_secret="s3cr3t",
            user_id="u-1",
            user_name="demo",
        )
        assert auth["identity"]["application_credential"]["user"] == {"id": "u-1"}

    def test_application_credential_domain_id(self) -> None:
        """Test the domain ID wins over the domain name."""
        auth = _request(
            application_credential_name="backup",
            application_credential_secret="s3cr3t",
            user_name="demo",
            domain_id="d-1",
            domain="Default",
        )
        assert auth["identity"]["application_credential"]["user"] == {
            "name": "demo",
            "domain": {"id": "d-1"},
        }

    def test_application_credential_without_user(self) -> None:
        """Test a named credential without a user is a configuration error."""
        with pytest.raises(ConfigurationError, match="UserID or Name should be provided"):
            _request(application_credential_name="backup", application_credential_secret="s3cr3t")

    def test_application_credential_without_domain(self) -> None:
        """Test a named credential needs the user's domain."""
        with pytest.raises(ConfigurationError, match="DomainID or Domain should be provided"):
            _request(
                application_credential_name="backup",
                application_credential_secret="s3cr3t",
                user_name="demo",
            )

    def test_trust_scope_wins(self) -> None:
        """Test trust scope takes precedence over project scope."""
        auth = _request(user_name="demo", api_key="secret", domain="Default", tenant="test", trust_id="t-1")
        assert auth["scope"] == {"OS-TRUST:trust": {"id": "t-1"}}

    @pytest.mark.parametrize(
        "options,expected",
        [
            ({"tenant_domain_id": "td-1", "domain": "Users"}, {"id": "td-1"}),
            ({"domain": "Users", "domain_id": "d-1"}, {"name": "Users"}),
            ({"domain_id": "d-1"}, {"id": "d-1"}),
            ({}, {"name": "Default"}),
        ],
    )
    def test_project_domain_precedence(self, options: dict, expected: dict) -> None:
        """Test how the project's domain is resolved."""
        auth = _request(user_name="demo", api_key="secret", tenant="test", **options)
        assert auth["scope"]["project"]["domain"] == expected


class TestV3Authenticator:
    """Test the v3 exchange."""

    @pytest.mark.asyncio
    async def test_authenticate_success(
        self, swift: FakeSwift, http_client: httpx.AsyncClient, v3_config: V3Config
    ) -> None:
        """Test a successful exchange."""
        result = await V3Authenticator(v3_config, http_client).authenticate()
        assert result.url == STORAGE_URL
        assert result.token == TOKEN

        request = swift.requests[0]
        assert str(request.url) == f"{AUTH_URL}/auth/tokens"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["User-Agent"].startswith("swiftstore/")

    @pytest.mark.asyncio
    async def test_internal_endpoint(self, http_client: httpx.AsyncClient) -> None:
        """Test the internal interface is selected."""
        config = V3Config(auth_url=AUTH_URL, user_name="demo", api_key="demo", domain="Default", internal=True)
        result = await V3Authenticator(config, http_client).authenticate()
        assert result.url == "http://swift.internal/v1/AUTH_test"

    @pytest.mark.asyncio
    async def test_region_filter(self, http_client: httpx.AsyncClient) -> None:
        """Test the configured region filters public endpoints."""
        config = V3Config(
            auth_url=AUTH_URL, user_name="demo", api_key="demo", region="Other", internal=False
        )
        result = await V3Authenticator(config, http_client).authenticate()
        assert result.url == "http://other.test/v1/AUTH_test"

    @pytest.mark.asyncio
    async def test_missing_subject_token(self, v3_config: V3Config) -> None:
        """Test a response without X-Subject-Token raises AuthError."""
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(201, json={"token": {"catalog": []}}))
        )
        with pytest.raises(AuthError, match="X-Subject-Token"):
            await V3Authenticator(v3_config, client).authenticate()

    @pytest.mark.asyncio
    async def test_rejected(self, v3_config: V3Config) -> None:
        """Test a non-2xx status raises AuthError."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(401)))
        with pytest.raises(AuthError) as exc_info:
            await V3Authenticator(v3_config, client).authenticate()
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_no_matching_endpoint(self, http_client: httpx.AsyncClient) -> None:
        """Test an unknown region raises AuthError."""
        config = V3Config(auth_url=AUTH_URL, user_name="demo", api_key="demo", region="Nowhere")
        with pytest.raises(AuthError, match="object-store"):
            await V3Authenticator(config, http_client).authenticate()
