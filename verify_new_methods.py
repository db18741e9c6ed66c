#!/usr/bin/env python3
"""Verify that all public operations are present in the SDK."""

import inspect

from swiftstore.client import SwiftClient
from swiftstore.container import Container

REQUIRED_METHODS = {
    SwiftClient: [
        "create_container",
        "list_all_containers",
        "get_container_meta",
        "patch_container_meta",
        "delete_container",
        "get_container",
        "get_client_info",
        "close",
    ],
    Container: [
        "list_objects",
        "list_object_folders",
        "iterate_objects",
        "iterate_object_folders",
        "get_object_meta",
        "patch_object_meta",
        "put_object",
        "get_object",
        "get_object_as_buffer",
        "get_object_info",
        "delete_object",
    ],
}


def check_methods(client_class, required):
    """Check if all required methods are present on a class."""
    print(f"\nChecking {client_class.__name__}...")
    missing = []

    for method in required:
        member = getattr(client_class, method, None)
        if member is None or not callable(member):
            missing.append(method)
        else:
            kind = "async" if inspect.iscoroutinefunction(member) or inspect.isasyncgenfunction(member) else "sync"
            print(f"  ✓ {method} ({kind})")

    if missing:
        print(f"  ✗ Missing methods: {', '.join(missing)}")
        return False

    return True


def main():
    """Main verification function."""
    print("Verifying Python SDK has all required methods...")
    print("=" * 60)

    all_present = True
    for client_class, required in REQUIRED_METHODS.items():
        all_present &= check_methods(client_class, required)

    print("\n" + "=" * 60)

    if all_present:
        print("✓ All required methods are present!")
        return 0
    else:
        print("✗ Some methods are missing!")
        return 1


if __name__ == "__main__":
    exit(main())
