"""
Unwrap backend response envelopes into flat record lists.

The backend wraps list responses differently per endpoint:

    [...]                                            bare array
    {"success": true, "data": [...]}                 wrapped
    {"success": true, "data": {"data": [...],
        "current_page": 1, "last_page": 3}}          paginated
    {"data": {"data": [...]}}                        nested, no success flag

Rules are evaluated top to bottom and the first match wins, so an envelope
matching several rules is handled by the earliest one. Shapes matching no
rule produce an empty list rather than an error.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass
class PageMeta:
    """Pagination info from a paginated envelope."""

    current_page: int
    last_page: int

    @property
    def has_more(self) -> bool:
        return self.current_page < self.last_page


@dataclass
class Normalized:
    """Records extracted from an envelope, plus pagination if present."""

    items: list[dict] = field(default_factory=list)
    page_meta: PageMeta | None = None

    @property
    def has_more(self) -> bool:
        return self.page_meta.has_more if self.page_meta else False


def first_key(record: dict, *keys: str) -> Any:
    """Return the first non-None value among snake_case/camelCase spellings."""
    if not isinstance(record, dict):
        return None
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _page_meta(page: dict) -> PageMeta | None:
    last_page = _to_int(first_key(page, "last_page", "lastPage"))
    if last_page is None:
        return None
    current_page = _to_int(first_key(page, "current_page", "currentPage"))
    if current_page is None:
        current_page = 1
    return PageMeta(current_page=current_page, last_page=last_page)


def _has_nested_list(envelope: Any) -> bool:
    return (
        isinstance(envelope, dict)
        and isinstance(envelope.get("data"), dict)
        and isinstance(envelope["data"].get("data"), list)
    )


def _extract_nested(envelope: dict) -> Normalized:
    page = envelope["data"]
    return Normalized(items=list(page["data"]), page_meta=_page_meta(page))


# (name, matcher, extractor), evaluated in order
EnvelopeRule = tuple[str, Callable[[Any], bool], Callable[[Any], Normalized]]

ENVELOPE_RULES: list[EnvelopeRule] = [
    (
        "bare_list",
        lambda env: isinstance(env, list),
        lambda env: Normalized(items=list(env)),
    ),
    (
        "wrapped_list",
        lambda env: isinstance(env, dict)
        and bool(env.get("success"))
        and isinstance(env.get("data"), list),
        lambda env: Normalized(items=list(env["data"])),
    ),
    (
        "paginated",
        lambda env: isinstance(env, dict)
        and bool(env.get("success"))
        and _has_nested_list(env),
        _extract_nested,
    ),
    (
        "nested",
        _has_nested_list,
        _extract_nested,
    ),
]


def match_rule(envelope: Any) -> str | None:
    """Name of the first rule matching the envelope, or None."""
    for name, matches, _extract in ENVELOPE_RULES:
        if matches(envelope):
            return name
    return None


def normalize(envelope: Any) -> Normalized:
    """
    Extract records and pagination info from a response envelope.

    Args:
        envelope: Decoded JSON body of any shape

    Returns:
        Normalized with the record list (empty when the shape is not
        recognized) and page meta for paginated responses
    """
    for _name, matches, extract in ENVELOPE_RULES:
        if matches(envelope):
            return extract(envelope)

    logger.warning(
        f"Unrecognized response envelope ({type(envelope).__name__}), using empty list"
    )
    return Normalized()


def normalize_one(envelope: Any) -> dict | None:
    """Unwrap a single-record response such as {"success": true, "data": {...}}.

    A bare record (no "data" or "success" key) is returned as is. Anything
    else, including {"success": false, ...}, is None.
    """
    if not isinstance(envelope, dict):
        return None
    if "success" in envelope and not envelope["success"]:
        return None
    if "data" in envelope:
        data = envelope["data"]
        return data if isinstance(data, dict) else None
    if "success" in envelope:
        return None
    return envelope or None


def _timestamp(value: Any) -> float:
    """Epoch seconds for a created_at value; missing or invalid -> 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str) or not value:
        return 0.0
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def sort_records(items: list[dict]) -> list[dict]:
    """Order entity records for display.

    Ascending by sort_order when every record has one, otherwise newest
    first by created_at. Returns a new list.
    """
    orders = [first_key(item, "sort_order", "sortOrder") for item in items]
    numeric = [
        order
        for order in orders
        if isinstance(order, (int, float)) and not isinstance(order, bool)
    ]
    if items and len(numeric) == len(items):
        return sorted(items, key=lambda item: first_key(item, "sort_order", "sortOrder"))

    return sorted(
        items,
        key=lambda item: _timestamp(first_key(item, "created_at", "createdAt")),
        reverse=True,
    )
