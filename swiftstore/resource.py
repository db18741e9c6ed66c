"""Generic HTTP access to a Swift account or container.

A :class:`Resource` turns logical operations (list, update, get_meta,
delete) into requests against ``{storage_url}[/{parent}]/{name}``. The
``namespace`` selects the metadata header family: ``Container`` for the
account's containers, ``Object`` for a container's objects.
"""

import re
from typing import Any, Dict, List, Mapping, Optional

import httpx

from swiftstore.authenticator import Authenticator
from swiftstore.dates import get_server_datetime_offset, parse_date_with_server_timezone
from swiftstore.exceptions import (
    ConnectionError,
    DeleteError,
    ListError,
    MetadataError,
    TimeoutError,
    UpdateError,
)
from swiftstore.models import AuthResult
from swiftstore.urls import quote_name

Headers = Optional[Mapping[str, str]]


def reason(response: httpx.Response) -> str:
    """HTTP status text of a response."""
    return response.reason_phrase or str(response.status_code)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Resource:
    """Operations shared by the account and container levels."""

    def __init__(
        self,
        namespace: str,
        authenticator: Authenticator,
        client: httpx.AsyncClient,
        parent: Optional[str] = None,
    ) -> None:
        """Initialize Resource.

        Args:
            namespace: Metadata header namespace, e.g. ``Container`` or ``Object``
            authenticator: Source of storage URL and token for every request
            client: HTTP client
            parent: Container name for object-level resources
        """
        self.namespace = namespace
        self.authenticator = authenticator
        self.client = client
        self.parent = parent
        self.suffix = f"/{quote_name(parent)}" if parent else ""
        self._meta_pattern = re.compile(rf"^X-{re.escape(namespace)}-Meta-(.+)$", re.IGNORECASE)

    def url(self, auth: AuthResult, name: Optional[str] = None) -> str:
        base = auth.url + self.suffix
        if name is None:
            return base
        return f"{base}/{quote_name(name)}"

    def build_headers(self, meta: Headers, extra: Headers, token: str) -> httpx.Headers:
        """Merge base, extra and metadata headers.

        Later layers replace earlier ones case-insensitively: metadata
        headers win over extra headers, which win over the base headers.
        """
        headers = httpx.Headers({"Accept": "application/json", "X-Auth-Token": token})
        if extra:
            headers.update(extra)
        if meta:
            headers.update({f"X-{self.namespace}-Meta-{key}": value for key, value in meta.items()})
        return headers

    def decode_meta(self, headers: httpx.Headers) -> Dict[str, str]:
        """Collect ``X-<namespace>-Meta-*`` headers.

        Keys are returned lowercased; Swift title-cases stored header names,
        so the casing sent on write is not preserved.
        """
        meta: Dict[str, str] = {}
        for key, value in headers.multi_items():
            match = self._meta_pattern.match(key)
            if match:
                meta[match.group(1)] = value
        return meta

    async def request(self, method: str, url: str, stream: bool = False, **kwargs: Any) -> httpx.Response:
        """Send one request, mapping transport failures to SDK errors.

        With ``stream=True`` the body is left unread; the caller must close
        the response.
        """
        try:
            if stream:
                return await self.client.send(self.client.build_request(method, url, **kwargs), stream=True)
            return await self.client.request(method, url, **kwargs)
        except httpx.TimeoutException:
            raise TimeoutError("Request timed out")
        except httpx.TransportError as e:
            raise ConnectionError(f"Connection failed: {str(e)}")

    async def list(
        self, query: Optional[Mapping[str, Any]] = None, extra_headers: Headers = None
    ) -> List[Dict[str, Any]]:
        """List the resource's children.

        Args:
            query: Query parameters; ``format=json`` is always added
            extra_headers: Additional request headers

        Returns:
            Raw listing entries with ``last_modified`` parsed to aware datetimes

        Raises:
            ListError: On a non-2xx response
        """
        params = {key: _query_value(value) for key, value in (query or {}).items()}
        params["format"] = "json"

        auth = await self.authenticator.authenticate()
        response = await self.request(
            "GET",
            self.url(auth),
            params=params,
            headers=self.build_headers(None, extra_headers, auth.token),
        )
        if not response.is_success:
            raise ListError(f"Error fetching list: {reason(response)}", status_code=response.status_code)
        if not response.content:
            return []

        try:
            records = response.json()
        except ValueError:
            raise ListError("Error fetching list: response is not valid JSON", status_code=response.status_code)
        if not isinstance(records, list):
            raise ListError("Error fetching list: response is not a JSON array", status_code=response.status_code)

        offset = get_server_datetime_offset(response)
        for record in records:
            if not isinstance(record, dict):
                continue
            last_modified = record.get("last_modified")
            if isinstance(last_modified, str):
                try:
                    record["last_modified"] = parse_date_with_server_timezone(last_modified, offset)
                except ValueError:
                    raise ListError(f"Error fetching list: invalid last_modified {last_modified!r}")
        return records

    async def update(self, name: str, meta: Headers = None, extra_headers: Headers = None) -> None:
        """POST metadata to a child.

        Raises:
            UpdateError: On a non-2xx response
        """
        auth = await self.authenticator.authenticate()
        response = await self.request(
            "POST", self.url(auth, name), headers=self.build_headers(meta, extra_headers, auth.token)
        )
        if not response.is_success:
            raise UpdateError(f"Error updating {name}: {reason(response)}", status_code=response.status_code)

    async def head(self, name: str) -> httpx.Response:
        """HEAD a child, raising MetadataError on a non-2xx response."""
        auth = await self.authenticator.authenticate()
        response = await self.request(
            "HEAD", self.url(auth, name), headers=self.build_headers(None, None, auth.token)
        )
        if not response.is_success:
            raise MetadataError(
                f"Error fetching metadata for {name}: {reason(response)}",
                status_code=response.status_code,
            )
        return response

    async def get_meta(self, name: str) -> Dict[str, str]:
        """Read a child's custom metadata."""
        response = await self.head(name)
        return self.decode_meta(response.headers)

    async def delete(self, name: str) -> None:
        """Delete a child.

        Raises:
            DeleteError: On a non-2xx response
        """
        auth = await self.authenticator.authenticate()
        response = await self.request(
            "DELETE", self.url(auth, name), headers=self.build_headers(None, None, auth.token)
        )
        if not response.is_success:
            raise DeleteError(name, reason(response), status_code=response.status_code)
