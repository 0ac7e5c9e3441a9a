"""Tests for resource URL resolution."""

from storefront.content.urls import (
    asset_base_url,
    resolve_first_resource_url,
    resolve_resource_url,
)


BASE = "https://api.site/api"


class TestResolveResourceUrl:
    """Test resolve_resource_url()."""

    def test_none_returns_empty(self):
        assert resolve_resource_url(None, BASE) == ""

    def test_empty_and_blank_return_empty(self):
        assert resolve_resource_url("", BASE) == ""
        assert resolve_resource_url("   ", BASE) == ""

    def test_absolute_https_unchanged(self):
        assert resolve_resource_url("https://x/y.png", BASE) == "https://x/y.png"

    def test_absolute_http_unchanged(self):
        assert resolve_resource_url("http://cdn.example.com/a.pdf", BASE) == (
            "http://cdn.example.com/a.pdf"
        )

    def test_leading_slash_path_strips_api_suffix(self):
        assert resolve_resource_url("/img/a.png", BASE) == "https://api.site/img/a.png"

    def test_relative_path_gets_one_separator(self):
        assert resolve_resource_url("storage/a.png", BASE) == (
            "https://api.site/storage/a.png"
        )

    def test_base_without_api_suffix_kept(self):
        assert resolve_resource_url("/img/a.png", "https://static.site") == (
            "https://static.site/img/a.png"
        )

    def test_only_trailing_api_is_stripped(self):
        """An "/api" in the middle of the base is left alone."""
        assert resolve_resource_url("a.png", "https://site/api/v2") == (
            "https://site/api/v2/a.png"
        )

    def test_no_double_slash_collapsing_beyond_separator_rule(self):
        """A base with a trailing slash is joined as is."""
        assert resolve_resource_url("a.png", "https://site/") == "https://site//a.png"

    def test_no_percent_encoding(self):
        assert resolve_resource_url("/img/my file.png", BASE) == (
            "https://api.site/img/my file.png"
        )

    def test_default_base_from_environment(self, monkeypatch):
        monkeypatch.setenv("SERVER_BASE_URL", "https://backend.example.com/api")
        assert resolve_resource_url("/covers/1.webp") == (
            "https://backend.example.com/covers/1.webp"
        )


class TestAssetBaseUrl:
    """Test asset_base_url()."""

    def test_strips_api_suffix(self):
        assert asset_base_url("https://api.site/api") == "https://api.site"

    def test_keeps_other_suffixes(self):
        assert asset_base_url("https://api.site/apis") == "https://api.site/apis"


class TestResolveFirstResourceUrl:
    """Test resolve_first_resource_url() card image fallback."""

    def test_prefers_first_field(self):
        record = {"thumbnail_url": "/t.png", "image_url": "/i.png"}
        url = resolve_first_resource_url(record, "thumbnail_url", "image_url", base=BASE)
        assert url == "https://api.site/t.png"

    def test_falls_back_to_later_field(self):
        record = {"thumbnail_url": "", "image_url": "/i.png"}
        url = resolve_first_resource_url(record, "thumbnail_url", "image_url", base=BASE)
        assert url == "https://api.site/i.png"

    def test_no_fields_set(self):
        assert resolve_first_resource_url({}, "thumbnail_url", base=BASE) == ""
