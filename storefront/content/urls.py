"""URL builder utilities for images, PDFs and other static resources."""

from typing import Any

from storefront.config import get_server_base_url


API_SUFFIX = "/api"


def asset_base_url(base: str | None = None) -> str:
    """Strip a trailing "/api" from the backend base URL.

    Static files are served from the server root, not from the API prefix.
    """
    if base is None:
        base = get_server_base_url()
    if base.endswith(API_SUFFIX):
        return base[: -len(API_SUFFIX)]
    return base


def resolve_resource_url(path: str | None, base: str | None = None) -> str:
    """
    Build an absolute URL for a resource path.

    Args:
        path: Absolute URL or server-relative path (with or without leading "/")
        base: Backend base URL (uses SERVER_BASE_URL if not provided)

    Returns:
        The absolute URL, or "" for empty input

    Examples:
        ("https://x/y.png", "https://api.site/api") -> "https://x/y.png"
        ("/img/a.png", "https://api.site/api") -> "https://api.site/img/a.png"
        ("img/a.png", "https://api.site") -> "https://api.site/img/a.png"
    """
    if not path or not path.strip():
        return ""
    if path.startswith("http://") or path.startswith("https://"):
        return path

    separator = "" if path.startswith("/") else "/"
    return f"{asset_base_url(base)}{separator}{path}"


def resolve_first_resource_url(
    record: dict[str, Any], *fields: str, base: str | None = None
) -> str:
    """Resolve the first non-empty string field of a record, e.g. thumbnail then image."""
    for name in fields:
        value = record.get(name)
        if isinstance(value, str) and value.strip():
            return resolve_resource_url(value, base)
    return ""
