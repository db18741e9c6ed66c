"""Keystone v3 authenticator.

The identity method is chosen by precedence:

1. application credential, when an ID or name is given together with a secret
2. token, when neither ``user_name`` nor ``user_id`` is set (``api_key`` is the token)
3. password, otherwise

Scope (trust, then project) is only attached to token and password requests;
application credentials carry their own scope.
"""

from typing import Any, Dict, Optional

import httpx

from swiftstore.config import V3Config
from swiftstore.exceptions import AuthError, ConfigurationError
from swiftstore.models import AuthResult, EndpointType
from swiftstore.urls import join_url, normalize_storage_url

METHOD_TOKEN = "token"
METHOD_PASSWORD = "password"
METHOD_APPLICATION_CREDENTIAL = "application_credential"

DEFAULT_DOMAIN = "Default"


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


class V3Authenticator:
    """Authenticate against Keystone v3 ``/auth/tokens``."""

    def __init__(self, config: V3Config, client: httpx.AsyncClient) -> None:
        self.config = config
        self.client = client

    def _application_credential_identity(self) -> Dict[str, Any]:
        config = self.config
        credential = _compact(
            {
                "id": config.application_credential_id,
                "name": config.application_credential_name,
                "secret": config.application_credential_secret,
            }
        )
        # A credential ID is globally unique; a name is only unique per user.
        if config.application_credential_id:
            return credential

        if config.user_id:
            credential["user"] = {"id": config.user_id}
        elif not config.user_name:
            raise ConfigurationError("UserID or Name should be provided")
        elif config.domain_id:
            credential["user"] = {"name": config.user_name, "domain": {"id": config.domain_id}}
        elif config.domain:
            credential["user"] = {"name": config.user_name, "domain": {"name": config.domain}}
        else:
            raise ConfigurationError("DomainID or Domain should be provided")
        return credential

    def _password_identity(self) -> Dict[str, Any]:
        config = self.config
        user = _compact({"name": config.user_name, "id": config.user_id, "password": config.api_key})
        if config.domain:
            user["domain"] = {"name": config.domain}
        elif config.domain_id:
            user["domain"] = {"id": config.domain_id}
        return {"user": user}

    def _project_domain(self) -> Dict[str, str]:
        config = self.config
        if config.tenant_domain:
            return {"name": config.tenant_domain}
        if config.tenant_domain_id:
            return {"id": config.tenant_domain_id}
        if config.domain:
            return {"name": config.domain}
        if config.domain_id:
            return {"id": config.domain_id}
        return {"name": DEFAULT_DOMAIN}

    def _scope(self) -> Optional[Dict[str, Any]]:
        config = self.config
        if config.trust_id:
            return {"OS-TRUST:trust": {"id": config.trust_id}}
        if config.tenant_id:
            return {"project": {"id": config.tenant_id}}
        if config.tenant:
            return {"project": {"name": config.tenant, "domain": self._project_domain()}}
        return None

    def build_request(self) -> Dict[str, Any]:
        """Build the ``auth`` request body.

        Raises:
            ConfigurationError: If the configured identity cannot be resolved
        """
        config = self.config
        identity: Dict[str, Any]
        if (
            config.application_credential_id or config.application_credential_name
        ) and config.application_credential_secret:
            identity = {
                "methods": [METHOD_APPLICATION_CREDENTIAL],
                METHOD_APPLICATION_CREDENTIAL: self._application_credential_identity(),
            }
        elif not config.user_name and not config.user_id:
            if not config.api_key:
                raise ConfigurationError("api_key is required for token authentication")
            identity = {"methods": [METHOD_TOKEN], METHOD_TOKEN: {"id": config.api_key}}
        else:
            identity = {"methods": [METHOD_PASSWORD], METHOD_PASSWORD: self._password_identity()}

        auth: Dict[str, Any] = {"identity": identity}
        if identity["methods"][0] != METHOD_APPLICATION_CREDENTIAL:
            scope = self._scope()
            if scope is not None:
                auth["scope"] = scope
        return {"auth": auth}

    async def authenticate(self) -> AuthResult:
        """Run the v3 exchange.

        Returns:
            AuthResult with the object-store endpoint and the X-Subject-Token

        Raises:
            ConfigurationError: If the identity options are incomplete
            AuthError: On network failure, non-2xx status or unusable response
        """
        body = self.build_request()
        try:
            response = await self.client.post(
                join_url(self.config.auth_url, "auth/tokens"),
                json=body,
                headers={"Content-Type": "application/json", "User-Agent": self.config.user_agent},
            )
        except httpx.HTTPError as e:
            raise AuthError(f"Authentication failed: {str(e)}")

        if not response.is_success:
            raise AuthError(
                f"Authentication failed: HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )

        token = response.headers.get("X-Subject-Token")
        if not token:
            raise AuthError("Authentication failed: response has no X-Subject-Token")

        try:
            catalog = response.json()["token"].get("catalog") or []
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise AuthError(f"Authentication failed: invalid response body: {str(e)}")

        url = self.storage_url(catalog, self.config.resolved_endpoint_type())
        if not url:
            raise AuthError("Authentication failed: no object-store endpoint in the catalog")
        return AuthResult(url=normalize_storage_url(url), token=token)

    def storage_url(self, catalog: Any, endpoint_type: EndpointType) -> Optional[str]:
        region = self.config.region
        for service in catalog:
            if service.get("type") != "object-store":
                continue
            for endpoint in service.get("endpoints") or []:
                if endpoint.get("interface") != endpoint_type.value:
                    continue
                if region and endpoint.get("region") != region:
                    continue
                return endpoint.get("url")
        return None
