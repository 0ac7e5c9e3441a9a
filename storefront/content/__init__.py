"""Normalization of backend content: envelopes, localized fields, resource URLs."""

from .envelope import (
    Normalized,
    PageMeta,
    normalize,
    normalize_one,
    sort_records,
)
from .localization import locale_key, resolve_localized
from .urls import asset_base_url, resolve_first_resource_url, resolve_resource_url

__all__ = [
    "Normalized",
    "PageMeta",
    "normalize",
    "normalize_one",
    "sort_records",
    "locale_key",
    "resolve_localized",
    "asset_base_url",
    "resolve_first_resource_url",
    "resolve_resource_url",
]
