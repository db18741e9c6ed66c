"""Keystone v2.0 authenticator."""

import logging
from typing import Any, Dict, Optional

import httpx

from swiftstore.config import V2Config
from swiftstore.exceptions import AuthError
from swiftstore.models import AuthResult, EndpointType
from swiftstore.urls import join_url, normalize_storage_url

logger = logging.getLogger(__name__)

# Credentials at least this long are probably API keys rather than passwords.
API_KEY_MIN_LENGTH = 32


class V2Authenticator:
    """Authenticate against Keystone v2.0 ``/tokens``.

    Keystone v2 accepts either password credentials or Rackspace API-key
    credentials. The first request guesses the shape from the credential
    length; if that shape is rejected the other one is tried once. Whichever
    shape succeeds is used for every later call.
    """

    def __init__(self, config: V2Config, client: httpx.AsyncClient) -> None:
        self.config = config
        self.client = client
        self.use_api_key = len(config.api_key.encode("utf-8")) >= API_KEY_MIN_LENGTH
        self.shape_locked = False

    def _body(self, use_api_key: bool) -> Dict[str, Any]:
        auth: Dict[str, Any] = {}
        if use_api_key:
            auth["RAX-KSKEY:apiKeyCredentials"] = {
                "username": self.config.user_name,
                "apiKey": self.config.api_key,
            }
        else:
            auth["passwordCredentials"] = {
                "username": self.config.user_name,
                "password": self.config.api_key,
            }
        if self.config.tenant:
            auth["tenantName"] = self.config.tenant
        if self.config.tenant_id:
            auth["tenantId"] = self.config.tenant_id
        return {"auth": auth}

    async def _request(self, use_api_key: bool) -> httpx.Response:
        try:
            return await self.client.post(
                join_url(self.config.auth_url, "tokens"),
                json=self._body(use_api_key),
                headers={"Content-Type": "application/json", "User-Agent": self.config.user_agent},
            )
        except httpx.HTTPError as e:
            raise AuthError(f"Authentication request failed: {str(e)}")

    async def authenticate(self) -> AuthResult:
        """Run the v2.0 exchange.

        Returns:
            AuthResult with the object-store endpoint and token ID

        Raises:
            AuthError: If both credential shapes are rejected, or the catalog
                has no matching object-store endpoint
        """
        response = await self._request(self.use_api_key)
        if response.is_client_error and not self.shape_locked:
            self.use_api_key = not self.use_api_key
            logger.debug(
                "Keystone v2 rejected credentials (%s), retrying with %s",
                response.status_code,
                "API key" if self.use_api_key else "password",
            )
            response = await self._request(self.use_api_key)

        if not response.is_success:
            raise AuthError(
                f"Authentication request failed with status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            access = response.json()["access"]
        except (ValueError, KeyError, TypeError) as e:
            raise AuthError(f"Failed to parse authentication response: {str(e)}")
        self.shape_locked = True

        token = (access.get("token") or {}).get("id")
        if not token:
            raise AuthError("Authentication response has no token")

        url = self.endpoint_url(access, "object-store", self.config.resolved_endpoint_type())
        if not url:
            raise AuthError("No object-store endpoint found in the service catalog")
        return AuthResult(url=normalize_storage_url(url), token=token)

    def endpoint_url(
        self, access: Dict[str, Any], service_type: str, endpoint_type: EndpointType
    ) -> Optional[str]:
        """Find the first catalog URL of ``service_type`` in the configured region."""
        region = self.config.region
        for service in access.get("serviceCatalog") or []:
            if service.get("type") != service_type:
                continue
            for endpoint in service.get("endpoints") or []:
                if region and endpoint.get("region") != region:
                    continue
                # Both fooURL and fooUrl spellings exist in the wild.
                url = endpoint.get(f"{endpoint_type.value}URL") or endpoint.get(
                    f"{endpoint_type.value}Url"
                )
                if url:
                    return url
        return None
