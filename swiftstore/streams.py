"""Adapters between byte buffers and async byte streams."""

from typing import AsyncIterable, AsyncIterator, BinaryIO, Iterable, Union

import httpx

CHUNK_SIZE = 65536

ByteSource = Union[bytes, bytearray, memoryview, BinaryIO, Iterable[bytes], AsyncIterable[bytes]]


async def buffer_to_stream(buffer: Union[bytes, bytearray, memoryview]) -> AsyncIterator[bytes]:
    """Expose a buffer as a single-chunk stream."""
    yield bytes(buffer)


async def file_to_stream(fileobj: BinaryIO, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    while True:
        chunk = fileobj.read(chunk_size)
        if not chunk:
            break
        yield chunk


async def iterable_to_stream(chunks: Iterable[bytes]) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk


def to_stream(source: ByteSource) -> AsyncIterator[bytes]:
    """Adapt any supported upload source into an async byte stream.

    Args:
        source: Bytes-like buffer, binary file object, or (async) iterable of bytes

    Returns:
        Async iterator over the source's chunks

    Raises:
        TypeError: If the source type is not supported
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return buffer_to_stream(source)
    if hasattr(source, "__aiter__"):
        return source.__aiter__()  # type: ignore[union-attr]
    if hasattr(source, "read"):
        return file_to_stream(source)  # type: ignore[arg-type]
    if hasattr(source, "__iter__"):
        return iterable_to_stream(source)  # type: ignore[arg-type]
    raise TypeError(f"Unsupported upload source: {type(source).__name__}")


async def response_to_stream(response: httpx.Response, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield the body of a streamed response, closing it when done."""
    try:
        async for chunk in response.aiter_bytes(chunk_size=chunk_size):
            if chunk:
                yield chunk
    finally:
        await response.aclose()


async def stream_to_buffer(stream: AsyncIterable[bytes]) -> bytes:
    """Drain a stream into a single bytes object."""
    chunks = []
    async for chunk in stream:
        chunks.append(chunk)
    return b"".join(chunks)
