"""Object operations within one Swift container."""

import logging
from datetime import datetime, timedelta, timezone
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
    Union,
)

import httpx
from pydantic import ValidationError

from swiftstore.authenticator import Authenticator
from swiftstore.dates import get_server_datetime_offset, parse_date_with_server_timezone
from swiftstore.exceptions import ConfigurationError, DeleteError, DownloadError, ListError, UploadError
from swiftstore.models import (
    FolderFilter,
    FolderRecord,
    ListingRecord,
    ObjectFilter,
    ObjectInfo,
    ObjectRecord,
    PrefixFilter,
    RangeFilter,
)
from swiftstore.resource import Headers, Resource, reason
from swiftstore.streams import ByteSource, response_to_stream, stream_to_buffer, to_stream

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = "/"
DEFAULT_BATCH_SIZE = 10000
# Number of leading names compared to detect a server that ignores the marker.
FINGERPRINT_SIZE = 10

DELIMITER_REQUIRES_PREFIX = (
    "A delimiter requires a prefix; use list_object_folders to group without a prefix"
)
FOLDER_FORMAT_MISMATCH = "Listing did not return folder entries"

R = TypeVar("R", ObjectRecord, FolderRecord, ListingRecord)


def _has_text(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def _with_trailing_delimiter(value: str, delimiter: str) -> str:
    value = value.strip()
    while value.endswith(delimiter):
        value = value[: -len(delimiter)]
    return value + delimiter


def _limit(value: float) -> int:
    return int(round(value))


def _to_record(raw: Mapping[str, Any]) -> ListingRecord:
    try:
        if isinstance(raw, Mapping) and "subdir" in raw:
            return FolderRecord.model_validate(raw)
        return ObjectRecord.model_validate(raw)
    except ValidationError as e:
        raise ListError(f"Error fetching list: invalid entry {raw!r}: {e.error_count()} validation errors")


def _to_folders(raw_records: Sequence[Mapping[str, Any]]) -> List[FolderRecord]:
    if any(not isinstance(raw, Mapping) or not isinstance(raw.get("subdir"), str) for raw in raw_records):
        raise ListError(FOLDER_FORMAT_MISMATCH)
    return [FolderRecord.model_validate(raw) for raw in raw_records]


def object_query(
    filter: Optional[ObjectFilter] = None, extra_query: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Translate an object filter into listing query parameters.

    Raises:
        ConfigurationError: If a delimiter is given without a prefix
    """
    query: Dict[str, Any] = dict(extra_query or {})
    if isinstance(filter, PrefixFilter):
        if _has_text(filter.prefix):
            delimiter = filter.delimiter or DEFAULT_DELIMITER
            query["prefix"] = _with_trailing_delimiter(filter.prefix, delimiter)  # type: ignore[arg-type]
            query["delimiter"] = delimiter
        elif filter.delimiter:
            raise ConfigurationError(DELIMITER_REQUIRES_PREFIX)
    elif isinstance(filter, RangeFilter):
        if filter.marker:
            query["marker"] = filter.marker
        if filter.end_marker:
            query["end_marker"] = filter.end_marker
        if filter.reverse is not None:
            query["reverse"] = filter.reverse
    if filter is not None and filter.limit is not None:
        query["limit"] = _limit(filter.limit)
    return query


def folder_query(filter: Optional[FolderFilter] = None) -> Dict[str, Any]:
    """Translate a folder filter into listing query parameters."""
    filter = filter or FolderFilter()
    delimiter = filter.delimiter or DEFAULT_DELIMITER
    query: Dict[str, Any] = {"delimiter": delimiter}
    if _has_text(filter.prefix):
        query["prefix"] = _with_trailing_delimiter(filter.prefix, delimiter)  # type: ignore[arg-type]
    if filter.marker:
        query["marker"] = _with_trailing_delimiter(filter.marker, delimiter)
    if filter.end_marker:
        query["end_marker"] = filter.end_marker
    if filter.limit is not None:
        query["limit"] = _limit(filter.limit)
    return query


class ListingCursor(Generic[R]):
    """Marker-based cursor over successive listing pages.

    Iteration stops on an empty page, on a page whose leading names repeat
    the previous page (a server ignoring the marker), or after a page shorter
    than ``batch_size``. The scan is not a snapshot: concurrent writes may
    cause entries to be skipped or repeated.
    """

    def __init__(
        self,
        fetch: Callable[[Optional[str], int], Awaitable[List[R]]],
        batch_size: int = DEFAULT_BATCH_SIZE,
        marker: Optional[str] = None,
    ) -> None:
        if batch_size < 1:
            raise ConfigurationError("batch_size must be a positive integer")
        self.fetch = fetch
        self.batch_size = batch_size
        self.marker = marker
        self.fingerprint: Optional[str] = None
        self.exhausted = False

    async def next_batch(self) -> List[R]:
        """Fetch the next page, or an empty list once the listing is exhausted."""
        if self.exhausted:
            return []

        batch = await self.fetch(self.marker, self.batch_size)
        if not batch:
            self.exhausted = True
            return []

        fingerprint = "".join(record.key for record in batch[:FINGERPRINT_SIZE])
        if fingerprint == self.fingerprint:
            logger.debug("Listing repeated the page after marker %r, stopping", self.marker)
            self.exhausted = True
            return []
        self.fingerprint = fingerprint

        self.marker = batch[-1].key
        if len(batch) < self.batch_size:
            self.exhausted = True
        return batch

    async def __aiter__(self) -> AsyncIterator[R]:
        while True:
            batch = await self.next_batch()
            if not batch:
                return
            for record in batch:
                yield record


class Container:
    """Objects of one container.

    Instances share the authenticator and HTTP client of the
    :class:`~swiftstore.client.SwiftClient` that created them.
    """

    def __init__(self, name: str, authenticator: Authenticator, client: httpx.AsyncClient) -> None:
        self.name = name
        self.resource = Resource("Object", authenticator, client, parent=name)

    async def list_objects(
        self,
        filter: Optional[ObjectFilter] = None,
        query: Optional[Mapping[str, Any]] = None,
        extra_headers: Headers = None,
    ) -> List[ListingRecord]:
        """List objects in the container.

        Args:
            filter: A :class:`PrefixFilter` or a :class:`RangeFilter`
            query: Additional query parameters
            extra_headers: Additional request headers

        Returns:
            Object records, plus folder records when listing with a delimiter

        Raises:
            ConfigurationError: If a delimiter is given without a prefix
            ListError: On failure
        """
        raw_records = await self.resource.list(object_query(filter, query), extra_headers)
        return [_to_record(raw) for raw in raw_records]

    async def list_object_folders(
        self, filter: Optional[FolderFilter] = None, extra_headers: Headers = None
    ) -> List[FolderRecord]:
        """List pseudo-directories.

        Raises:
            ListError: On failure, or if the listing holds object entries
        """
        raw_records = await self.resource.list(folder_query(filter), extra_headers)
        return _to_folders(raw_records)

    async def iterate_objects(
        self, filter: Optional[ObjectFilter] = None, batch_size: int = DEFAULT_BATCH_SIZE
    ) -> AsyncIterator[ListingRecord]:
        """Lazily iterate over every matching object, one page at a time.

        Pages are requested strictly one after another; ``batch_size``
        replaces any ``limit`` set on the filter.
        """
        base = object_query(filter)
        marker = filter.marker if isinstance(filter, RangeFilter) else None

        async def fetch(marker: Optional[str], limit: int) -> List[ListingRecord]:
            query = dict(base, limit=limit)
            if marker:
                query["marker"] = marker
            return [_to_record(raw) for raw in await self.resource.list(query)]

        async for record in ListingCursor(fetch, batch_size, marker):
            yield record

    async def iterate_object_folders(
        self, filter: Optional[FolderFilter] = None, batch_size: int = DEFAULT_BATCH_SIZE
    ) -> AsyncIterator[FolderRecord]:
        """Lazily iterate over every matching pseudo-directory."""
        filter = filter or FolderFilter()
        base = folder_query(filter)

        async def fetch(marker: Optional[str], limit: int) -> List[FolderRecord]:
            query = dict(base, limit=limit)
            if marker:
                query["marker"] = marker
            return _to_folders(await self.resource.list(query))

        async for folder in ListingCursor(fetch, batch_size, base.get("marker")):
            yield folder

    async def get_object_meta(self, name: str) -> Dict[str, str]:
        """Read an object's custom metadata."""
        return await self.resource.get_meta(name)

    async def patch_object_meta(
        self, name: str, meta: Headers = None, extra_headers: Headers = None
    ) -> None:
        """Set an object's custom metadata."""
        await self.resource.update(name, meta, extra_headers)

    async def put_object(
        self,
        name: str,
        source: ByteSource,
        meta: Headers = None,
        extra_headers: Headers = None,
    ) -> None:
        """Upload an object.

        The body is streamed; file objects and iterables are never read into
        memory as a whole.

        Args:
            name: Object name
            source: Bytes, a binary file object, or an (async) iterable of bytes
            meta: Custom metadata
            extra_headers: Additional request headers, e.g. ``Content-Type``

        Raises:
            UploadError: On a non-2xx response
        """
        body = to_stream(source)
        auth = await self.resource.authenticator.authenticate()
        response = await self.resource.request(
            "PUT",
            self.resource.url(auth, name),
            content=body,
            headers=self.resource.build_headers(meta, extra_headers, auth.token),
        )
        if not response.is_success:
            raise UploadError(name, reason(response), status_code=response.status_code)

    async def get_object(self, name: str) -> AsyncIterator[bytes]:
        """Download an object as a stream of chunks.

        Raises:
            DownloadError: On a non-2xx response
        """
        auth = await self.resource.authenticator.authenticate()
        response = await self.resource.request(
            "GET",
            self.resource.url(auth, name),
            stream=True,
            headers={"X-Auth-Token": auth.token},
        )
        if not response.is_success:
            await response.aclose()
            raise DownloadError(name, reason(response), status_code=response.status_code)
        return response_to_stream(response)

    async def get_object_as_buffer(self, name: str) -> bytes:
        """Download an object into memory."""
        return await stream_to_buffer(await self.get_object(name))

    async def get_object_info(self, name: str) -> ObjectInfo:
        """Read an object's size, type, hash, modification time and metadata.

        ``last_modified`` is the current time when the server omits the header.
        """
        response = await self.resource.head(name)
        headers = response.headers

        raw_modified = headers.get("Last-Modified")
        if raw_modified:
            last_modified = parse_date_with_server_timezone(
                raw_modified, get_server_datetime_offset(response)
            )
        else:
            last_modified = datetime.now(timezone.utc)

        etag = headers.get("ETag")
        return ObjectInfo(
            name=name,
            content_length=int(headers.get("Content-Length", 0)),
            content_type=headers.get("Content-Type"),
            hash=etag.strip('"') if etag else None,
            last_modified=last_modified,
            metadata=self.resource.decode_meta(headers),
        )

    async def delete_object(
        self, name: str, when: Optional[Union[datetime, timedelta, int, float]] = None
    ) -> None:
        """Delete an object now, or ask the server to delete it later.

        Args:
            name: Object name
            when: ``None`` or a zero delay to delete immediately, a datetime for ``X-Delete-At``
                (naive values are UTC), or a timedelta/number of seconds for
                ``X-Delete-After``

        Raises:
            ConfigurationError: If ``when`` has an unsupported type
            DeleteError: On a non-2xx response
        """
        if not when:
            await self.resource.delete(name)
            return

        if isinstance(when, datetime):
            if when.tzinfo is None:
                when = when.replace(tzinfo=timezone.utc)
            headers = {"X-Delete-At": str(int(when.timestamp()))}
        elif isinstance(when, timedelta):
            headers = {"X-Delete-After": str(int(when.total_seconds()))}
        elif isinstance(when, (int, float)) and not isinstance(when, bool):
            headers = {"X-Delete-After": str(int(when))}
        else:
            raise ConfigurationError(
                "Expected `when` to be a datetime, a timedelta or a number of seconds"
            )

        auth = await self.resource.authenticator.authenticate()
        response = await self.resource.request(
            "POST",
            self.resource.url(auth, name),
            headers=self.resource.build_headers(None, headers, auth.token),
        )
        if not response.is_success:
            raise DeleteError(name, reason(response), status_code=response.status_code)
