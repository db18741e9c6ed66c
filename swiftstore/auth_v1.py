"""Swift TempAuth (v1.0) authenticator."""

import httpx

from swiftstore.config import V1Config
from swiftstore.exceptions import AuthError
from swiftstore.models import AuthResult
from swiftstore.urls import normalize_storage_url


class V1Authenticator:
    """Authenticate with a single GET carrying ``X-Auth-User``/``X-Auth-Key``."""

    def __init__(self, config: V1Config, client: httpx.AsyncClient) -> None:
        self.config = config
        self.client = client

    def _user(self) -> str:
        if self.config.tenant:
            return f"{self.config.tenant}:{self.config.username}"
        return self.config.username

    async def authenticate(self) -> AuthResult:
        """Run the v1.0 exchange.

        Returns:
            AuthResult with the storage URL and token

        Raises:
            AuthError: On network failure, non-2xx status or missing headers
        """
        headers = {"X-Auth-User": self._user(), "X-Auth-Key": self.config.password}
        try:
            response = await self.client.get(self.config.auth_url, headers=headers)
        except httpx.HTTPError as e:
            raise AuthError(f"Authentication request failed: {str(e)}")

        if not response.is_success:
            raise AuthError(
                f"Authentication failed with status {response.status_code}",
                status_code=response.status_code,
            )

        url = response.headers.get("X-Storage-Url")
        token = response.headers.get("X-Auth-Token") or response.headers.get("X-Storage-Token")
        if not url or not token:
            raise AuthError("Authentication response is missing X-Storage-Url or X-Auth-Token")
        return AuthResult(url=normalize_storage_url(url), token=token)
