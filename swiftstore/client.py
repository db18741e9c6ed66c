"""Swift account client."""

from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import urlsplit

import httpx
from pydantic import ValidationError

from swiftstore.authenticator import (
    AUTH_ATTEMPTS,
    AUTH_RETRY_DELAY,
    Authenticator,
    RetryingAuthenticator,
    get_authenticator_for_version,
)
from swiftstore.config import ConnectionConfig, parse_connection_config
from swiftstore.container import Container
from swiftstore.exceptions import CreateError, ListError, SwiftError
from swiftstore.models import ContainerRecord
from swiftstore.resource import Headers, Resource, reason


class SwiftClient:
    """Client for an OpenStack Swift compatible account.

    Example:
        async with SwiftClient({
            "auth_version": 3,
            "auth_url": "http://127.0.0.1:5000/v3",
            "user_name": "demo",
            "api_key": "secret",
            "tenant": "demo",
            "domain": "Default",
        }) as swift:
            await swift.create_container("docs")
            container = swift.get_container("docs")
            await container.put_object("hello.txt", b"Hello, Swift!")
            async for record in container.iterate_objects():
                print(record.name)
    """

    def __init__(
        self,
        config: Union[ConnectionConfig, Mapping[str, Any]],
        timeout: float = 30,
        http_client: Optional[httpx.AsyncClient] = None,
        auth_attempts: int = AUTH_ATTEMPTS,
        auth_retry_delay: float = AUTH_RETRY_DELAY,
    ) -> None:
        """Initialize SwiftClient.

        Args:
            config: Connection config model, or a mapping with ``auth_version``
            timeout: Request timeout in seconds (ignored when ``http_client`` is given)
            http_client: HTTP client to use instead of creating one
            auth_attempts: Authentication attempts before giving up
            auth_retry_delay: Seconds to wait between authentication attempts

        Raises:
            ConfigurationError: If the connection options are invalid
        """
        self.config = parse_connection_config(config)
        self.timeout = timeout
        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient(timeout=timeout)
        self.authenticator: Authenticator = RetryingAuthenticator(
            get_authenticator_for_version(self.config, self.client),
            attempts=auth_attempts,
            delay=auth_retry_delay,
        )
        self.resource = Resource("Container", self.authenticator, self.client)

    async def create_container(
        self,
        name: str,
        public_read: bool = False,
        meta: Headers = None,
        extra_headers: Headers = None,
    ) -> None:
        """Create a container.

        Args:
            name: Container name
            public_read: Allow anonymous reads (``X-Container-Read: .r:*``)
            meta: Custom container metadata
            extra_headers: Additional request headers

        Raises:
            CreateError: On a non-2xx response
        """
        headers = dict(extra_headers or {})
        if public_read:
            headers["X-Container-Read"] = ".r:*"

        auth = await self.authenticator.authenticate()
        response = await self.resource.request(
            "PUT",
            self.resource.url(auth, name),
            headers=self.resource.build_headers(meta, headers, auth.token),
        )
        if not response.is_success:
            raise CreateError(name, reason(response), status_code=response.status_code)

    async def list_all_containers(
        self, query: Optional[Mapping[str, Any]] = None, extra_headers: Headers = None
    ) -> List[ContainerRecord]:
        """List the account's containers."""
        raw_records = await self.resource.list(query, extra_headers)
        try:
            return [ContainerRecord.model_validate(raw) for raw in raw_records]
        except ValidationError as e:
            raise ListError(f"Error fetching list: invalid entry: {e.error_count()} validation errors")

    async def get_container_meta(self, name: str) -> Dict[str, str]:
        """Read a container's custom metadata."""
        return await self.resource.get_meta(name)

    async def patch_container_meta(
        self, name: str, meta: Headers = None, extra_headers: Headers = None
    ) -> None:
        """Set a container's custom metadata."""
        await self.resource.update(name, meta, extra_headers)

    async def delete_container(self, name: str) -> None:
        """Delete an empty container."""
        await self.resource.delete(name)

    def get_container(self, name: str) -> Container:
        """Return a handle on a container sharing this client's authenticator."""
        return Container(name, self.authenticator, self.client)

    async def get_client_info(self) -> Dict[str, Any]:
        """Fetch the cluster's ``/info`` capabilities document."""
        auth = await self.authenticator.authenticate()
        parts = urlsplit(auth.url)
        url = f"{parts.scheme}://{parts.netloc}/info"
        response = await self.resource.request("GET", url, headers={"X-Auth-Token": auth.token})
        if not response.is_success:
            raise SwiftError(
                f"Error fetching cluster info: {reason(response)}", status_code=response.status_code
            )
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "SwiftClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
