#!/usr/bin/env python3
"""
Basic usage examples for the swiftstore Python SDK.

This script demonstrates the SDK with each authentication version:
- TempAuth (v1)
- Keystone v2.0
- Keystone v3

Connection options are read from SWIFT_* environment variables.
"""

import asyncio
import io
import os
from datetime import timedelta

from swiftstore import FolderFilter, PrefixFilter, RangeFilter, SwiftClient
from swiftstore.exceptions import ConfigurationError, DownloadError, SwiftError


def v1_options():
    return {
        "auth_version": 1,
        "auth_url": os.getenv("SWIFT_AUTH_URL", "http://127.0.0.1:8080/auth/v1.0"),
        "username": os.getenv("SWIFT_USER", "tester"),
        "password": os.getenv("SWIFT_KEY", "testing"),
        "tenant": os.getenv("SWIFT_TENANT", "test"),
    }


def v2_options():
    return {
        "auth_version": 2,
        "auth_url": os.getenv("SWIFT_AUTH_URL", "http://127.0.0.1:5000/v2.0"),
        "user_name": os.getenv("SWIFT_USER", "demo"),
        "api_key": os.getenv("SWIFT_KEY", "secret"),
        "tenant": os.getenv("SWIFT_TENANT", "demo"),
        "region": os.getenv("SWIFT_REGION"),
    }


def v3_options():
    return {
        "auth_version": 3,
        "auth_url": os.getenv("SWIFT_AUTH_URL", "http://127.0.0.1:5000/v3"),
        "user_name": os.getenv("SWIFT_USER", "demo"),
        "api_key": os.getenv("SWIFT_KEY", "secret"),
        "tenant": os.getenv("SWIFT_TENANT", "demo"),
        "domain": os.getenv("SWIFT_DOMAIN", "Default"),
    }


async def objects_example(client: SwiftClient):
    """Example of container and object operations."""
    print("=== Objects Example ===")

    print("Creating container...")
    await client.create_container("example", meta={"Owner": "examples"})
    container = client.get_container("example")

    # Upload from bytes and from a file object
    print("Uploading objects...")
    await container.put_object(
        "docs/hello.txt", b"Hello, Swift!", extra_headers={"Content-Type": "text/plain"}
    )
    await container.put_object("docs/big.bin", io.BytesIO(b"x" * (1024 * 1024)))

    # Download
    print("Downloading object...")
    data = await container.get_object_as_buffer("docs/hello.txt")
    print(f"Downloaded: {data.decode()}")

    # Stream download
    size = 0
    async for chunk in await container.get_object("docs/big.bin"):
        size += len(chunk)
    print(f"Streamed {size} bytes")

    # Info
    info = await container.get_object_info("docs/hello.txt")
    print(f"Size: {info.content_length} bytes, modified {info.last_modified.isoformat()}")

    # List objects
    print("Listing objects...")
    for record in await container.list_objects(PrefixFilter(prefix="docs")):
        print(f"  - {record.key}")

    print()


async def metadata_example(client: SwiftClient):
    """Example using metadata."""
    print("=== Metadata Example ===")

    container = client.get_container("example")
    await container.patch_object_meta("docs/hello.txt", {"Author": "John Doe", "Version": "2.0"})
    print(f"Object metadata: {await container.get_object_meta('docs/hello.txt')}")
    print(f"Container metadata: {await client.get_container_meta('example')}")

    print()


async def iteration_example(client: SwiftClient):
    """Example iterating over a large container page by page."""
    print("=== Iteration Example ===")

    container = client.get_container("example")
    for i in range(5):
        await container.put_object(f"logs/2024-01-0{i + 1}.log", b"entry")

    async for record in container.iterate_objects(RangeFilter(marker="logs/"), batch_size=2):
        print(f"  - {record.key}")

    async for folder in container.iterate_object_folders(FolderFilter()):
        print(f"  [{folder.key}]")

    print()


async def cleanup_example(client: SwiftClient):
    """Example deleting objects now and later."""
    print("=== Cleanup Example ===")

    container = client.get_container("example")
    await container.delete_object("docs/big.bin", timedelta(minutes=5))
    print("Scheduled docs/big.bin for deletion in 5 minutes")

    async for record in container.iterate_objects():
        await container.delete_object(record.key)
    await client.delete_container("example")
    print("Deleted container")

    print()


async def error_handling_example(client: SwiftClient):
    """Example demonstrating error handling."""
    print("=== Error Handling Example ===")

    container = client.get_container("example")
    try:
        await container.get_object_as_buffer("nonexistent/file.txt")
    except DownloadError as e:
        print(f"Caught DownloadError ({e.status_code}): {e}")

    try:
        await container.list_objects(PrefixFilter(delimiter="/"))
    except ConfigurationError as e:
        print(f"Caught ConfigurationError: {e}")

    print()


async def main():
    """Run all examples."""
    version = os.getenv("SWIFT_AUTH_VERSION", "1")
    options = {"1": v1_options, "2": v2_options, "3": v3_options}[version]()

    async with SwiftClient(options) as client:
        try:
            print(f"Cluster info: {sorted(await client.get_client_info())}")
            await objects_example(client)
            await metadata_example(client)
            await iteration_example(client)
            await error_handling_example(client)
            await cleanup_example(client)
        except SwiftError as e:
            print(f"Error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
