"""Connection configuration for the swiftstore SDK.

Exactly one configuration variant is active per client, chosen by
``auth_version``. Any version other than 1, 2 or 3 yields an
:class:`UnsupportedConfig`, whose authenticator always fails.
"""

import os
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing_extensions import TypeAlias

from swiftstore import __version__
from swiftstore.exceptions import ConfigurationError
from swiftstore.models import EndpointType

DEFAULT_USER_AGENT = f"swiftstore/{__version__}"


def _internal_from_env() -> bool:
    return os.getenv("SWIFT_INTERNAL", "").lower() == "true"


class _BaseConfig(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class V1Config(_BaseConfig):
    """Swift TempAuth (v1.0) connection options."""

    auth_version: Literal[1] = 1
    auth_url: str = Field(..., description="Auth URL, e.g. http://host:8080/auth/v1.0")
    username: str = Field(..., description="User name")
    password: str = Field(..., description="User key")
    tenant: Optional[str] = Field(None, description="Account the user belongs to")


class _KeystoneConfig(_BaseConfig):
    auth_url: str = Field(..., description="Keystone URL")
    region: Optional[str] = Field(None, description="Region name; any region when unset")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="HTTP User-Agent")
    endpoint_type: Optional[EndpointType] = Field(None, description="Catalog interface to use")
    internal: bool = Field(
        default_factory=_internal_from_env,
        description="Use the internal endpoint when endpoint_type is unset",
    )

    user_name: Optional[str] = Field(None, description="User name")
    user_id: Optional[str] = Field(None, description="User ID")
    api_key: Optional[str] = Field(None, description="Password, API key or token")
    domain: Optional[str] = Field(None, description="User's domain name")
    domain_id: Optional[str] = Field(None, description="User's domain ID")

    tenant: Optional[str] = Field(None, description="Project (tenant) name")
    tenant_id: Optional[str] = Field(None, description="Project (tenant) ID")

    def resolved_endpoint_type(self) -> EndpointType:
        if self.endpoint_type is not None:
            return self.endpoint_type
        return EndpointType.INTERNAL if self.internal else EndpointType.PUBLIC


class V2Config(_KeystoneConfig):
    """Keystone v2.0 connection options."""

    auth_version: Literal[2] = 2
    user_name: str = Field(..., description="User name")
    api_key: str = Field(..., description="Password or API key")


class V3Config(_KeystoneConfig):
    """Keystone v3 connection options."""

    auth_version: Literal[3] = 3
    application_credential_id: Optional[str] = Field(None, description="Application credential ID")
    application_credential_name: Optional[str] = Field(None, description="Application credential name")
    application_credential_secret: Optional[str] = Field(None, description="Application credential secret")
    tenant_domain: Optional[str] = Field(None, description="Project domain name")
    tenant_domain_id: Optional[str] = Field(None, description="Project domain ID")
    trust_id: Optional[str] = Field(None, description="Trust ID")


class UnsupportedConfig(_BaseConfig):
    """Options naming an auth version this SDK does not speak."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel, extra="allow")

    auth_version: Any


ConnectionConfig: TypeAlias = Union[V1Config, V2Config, V3Config, UnsupportedConfig]

_CONFIG_TYPES = {1: V1Config, 2: V2Config, 3: V3Config}


def parse_connection_config(options: Union[ConnectionConfig, Mapping[str, Any]]) -> ConnectionConfig:
    """Build the configuration variant selected by ``auth_version``.

    Args:
        options: A config model, or a mapping using snake_case or camelCase keys

    Returns:
        The matching config model; UnsupportedConfig for any version other than 1, 2 or 3,
        including non-numeric ones

    Raises:
        ConfigurationError: If the version is missing or required fields are invalid
    """
    if isinstance(options, (V1Config, V2Config, V3Config, UnsupportedConfig)):
        return options

    version = options.get("auth_version", options.get("authVersion"))
    if version is None:
        raise ConfigurationError("auth_version is required")
    try:
        version = int(version)
    except (TypeError, ValueError):
        # Non-numeric versions select UnsupportedConfig below.
        pass

    config_type = _CONFIG_TYPES.get(version, UnsupportedConfig)
    data = {k: v for k, v in options.items() if k not in ("auth_version", "authVersion")}
    try:
        return config_type(auth_version=version, **data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid connection options: {e}")
