"""Authenticator contract, version dispatch and authentication retry."""

import logging
from typing import Protocol

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from swiftstore.auth_v1 import V1Authenticator
from swiftstore.auth_v2 import V2Authenticator
from swiftstore.auth_v3 import V3Authenticator
from swiftstore.config import ConnectionConfig, V1Config, V2Config, V3Config
from swiftstore.exceptions import AuthError, ConfigurationError
from swiftstore.models import AuthResult

logger = logging.getLogger(__name__)

AUTH_ATTEMPTS = 3
AUTH_RETRY_DELAY = 0.5


class Authenticator(Protocol):
    """Produces a storage URL and token.

    Implementations may be called any number of times; each call may re-run
    the wire exchange and returns a fresh :class:`AuthResult`.
    """

    async def authenticate(self) -> AuthResult:
        ...


class UnsupportedAuthenticator:
    """Authenticator for an auth version this SDK does not implement."""

    def __init__(self, auth_version: object) -> None:
        self.auth_version = auth_version

    async def authenticate(self) -> AuthResult:
        raise ConfigurationError(f"Auth version {self.auth_version} not supported")


class RetryingAuthenticator:
    """Call an authenticator with a bounded number of fixed-delay retries.

    Only :class:`AuthError` is retried. Results are not cached.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        attempts: int = AUTH_ATTEMPTS,
        delay: float = AUTH_RETRY_DELAY,
    ) -> None:
        self.authenticator = authenticator
        self.attempts = attempts
        self.delay = delay

    async def authenticate(self) -> AuthResult:
        """Authenticate, retrying failed exchanges.

        Returns:
            AuthResult from the first successful attempt

        Raises:
            AuthError: The last failure once all attempts are exhausted
            ConfigurationError: Immediately, without retrying
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_fixed(self.delay),
            retry=retry_if_exception_type(AuthError),
            before_sleep=before_sleep_log(logger, logging.DEBUG),
            reraise=True,
        ):
            with attempt:
                result = await self.authenticator.authenticate()
        return result


def get_authenticator_for_version(
    config: ConnectionConfig, client: httpx.AsyncClient
) -> Authenticator:
    """Select the authenticator for a connection config.

    Every config maps to an authenticator; unknown versions get one that
    always fails.

    Args:
        config: Parsed connection config
        client: HTTP client used for the auth exchange

    Returns:
        The matching authenticator
    """
    if isinstance(config, V1Config):
        authenticator: Authenticator = V1Authenticator(config, client)
    elif isinstance(config, V2Config):
        authenticator = V2Authenticator(config, client)
    elif isinstance(config, V3Config):
        authenticator = V3Authenticator(config, client)
    else:
        authenticator = UnsupportedAuthenticator(config.auth_version)
    logger.debug("Using %s for auth version %s", type(authenticator).__name__, config.auth_version)
    return authenticator
