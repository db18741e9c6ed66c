"""URL helpers shared by the authenticators and resources."""

import re
from urllib.parse import quote, urlsplit, urlunsplit

_REPEATED_SLASHES = re.compile(r"/{2,}")


def normalize_storage_url(url: str) -> str:
    """Collapse doubled path separators and drop a trailing slash.

    The scheme separator (``https://``) is left untouched.
    """
    parts = urlsplit(url.strip())
    path = _REPEATED_SLASHES.sub("/", parts.path).rstrip("/")
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


def join_url(base: str, path: str) -> str:
    """Append ``path`` to ``base`` with exactly one separator between them."""
    if not base.endswith("/"):
        base += "/"
    return base + path.lstrip("/")


def quote_name(name: str) -> str:
    """Percent-encode a container or object name, keeping ``/``."""
    return quote(name, safe="/")
