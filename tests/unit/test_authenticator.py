"""Unit tests for authenticator dispatch and retry."""

import httpx
import pytest

from swiftstore.auth_v1 import V1Authenticator
from swiftstore.auth_v2 import V2Authenticator
from swiftstore.auth_v3 import V3Authenticator
from swiftstore.authenticator import (
    RetryingAuthenticator,
    UnsupportedAuthenticator,
    get_authenticator_for_version,
)
from swiftstore.config import UnsupportedConfig, V1Config, V2Config, V3Config
from swiftstore.exceptions import AuthError, ConfigurationError
from swiftstore.models import AuthResult

RESULT = AuthResult(url="http://swift.test/v1/AUTH_test", token="tk")


class TestDispatch:
    """Test get_authenticator_for_version."""

    def test_versions(
        self, http_client: httpx.AsyncClient, v1_config: V1Config, v2_config: V2Config, v3_config: V3Config
    ) -> None:
        """Test each config variant maps to its authenticator."""
        assert isinstance(get_authenticator_for_version(v1_config, http_client), V1Authenticator)
        assert isinstance(get_authenticator_for_version(v2_config, http_client), V2Authenticator)
        assert isinstance(get_authenticator_for_version(v3_config, http_client), V3Authenticator)

    @pytest.mark.asyncio
    async def test_unsupported_version(self, http_client: httpx.AsyncClient) -> None:
        """Test an unknown version yields an authenticator that always fails."""
        authenticator = get_authenticator_for_version(UnsupportedConfig(auth_version=7), http_client)
        assert isinstance(authenticator, UnsupportedAuthenticator)
        with pytest.raises(ConfigurationError, match="Auth version 7 not supported"):
            await authenticator.authenticate()


class TestRetryingAuthenticator:
    """Test cases for RetryingAuthenticator."""

    @pytest.mark.asyncio
    async def test_first_attempt_succeeds(self, mocker) -> None:
        """Test a successful exchange is not repeated."""
        inner = mocker.Mock()
        inner.authenticate = mocker.AsyncMock(return_value=RESULT)

        result = await RetryingAuthenticator(inner, delay=0).authenticate()
        assert result == RESULT
        assert inner.authenticate.await_count == 1

    @pytest.mark.asyncio
    async def test_recovers_after_failures(self, mocker) -> None:
        """Test two failures followed by a success."""
        inner = mocker.Mock()
        inner.authenticate = mocker.AsyncMock(side_effect=[AuthError(), AuthError(), RESULT])

        result = await RetryingAuthenticator(inner, delay=0).authenticate()
        assert result == RESULT
        assert inner.authenticate.await_count == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_three_attempts(self, mocker) -> None:
        """Test the last AuthError propagates once attempts run out."""
        inner = mocker.Mock()
        inner.authenticate = mocker.AsyncMock(
            side_effect=[AuthError("first"), AuthError("second"), AuthError("third"), RESULT]
        )

        with pytest.raises(AuthError, match="third"):
            await RetryingAuthenticator(inner, delay=0).authenticate()
        assert inner.authenticate.await_count == 3

    @pytest.mark.asyncio
    async def test_configuration_error_not_retried(self, mocker) -> None:
        """Test configuration errors fail immediately."""
        inner = mocker.Mock()
        inner.authenticate = mocker.AsyncMock(side_effect=ConfigurationError("bad options"))

        with pytest.raises(ConfigurationError):
            await RetryingAuthenticator(inner, delay=0).authenticate()
        assert inner.authenticate.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_wire_failures(self, swift, http_client: httpx.AsyncClient, v1_config: V1Config) -> None:
        """Test transient auth endpoint failures are retried end to end."""
        swift.auth_failures = 2
        authenticator = RetryingAuthenticator(V1Authenticator(v1_config, http_client), delay=0)

        result = await authenticator.authenticate()
        assert result.url == "http://swift.test/v1/AUTH_test"
        assert len(swift.requests) == 3

    @pytest.mark.asyncio
    async def test_results_not_cached(self, mocker) -> None:
        """Test every call runs a fresh exchange."""
        inner = mocker.Mock()
        inner.authenticate = mocker.AsyncMock(return_value=RESULT)
        authenticator = RetryingAuthenticator(inner, delay=0)

        await authenticator.authenticate()
        await authenticator.authenticate()
        assert inner.authenticate.await_count == 2
