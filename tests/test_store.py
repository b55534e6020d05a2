import logging

import pytest

from envindicator.resolver import DEFAULT_COLORS, Domain
from envindicator.schemas.settings import EnvironmentOptions
from envindicator.store import (
    SETTINGS_KEY,
    field_values,
    register_saved_settings,
    sanitize_settings,
    save_settings,
    saved_colors_layer,
)


@pytest.fixture
def submitted():
    return {
        "local": {"color": "#6c757d", "url": ""},
        "development": {"color": "#abc", "url": "  https://dev.example.com  "},
        "staging": {"color": "#ffaa00", "url": "https://staging.example.com"},
        "production": {"color": "red", "url": "not a url"},
        "custom": {"color": "#111111", "url": "https://custom.example.com"},
    }


class TestEnvironmentOptions:
    @pytest.mark.parametrize("color, expected", [
        ("#fff", "#fff"),
        ("#A1B2C3", "#A1B2C3"),
        (" #a1b2c3 ", "#a1b2c3"),
        ("a1b2c3", None),
        ("#abcd", None),
        ("red", None),
        (None, None),
    ])
    def test_color(self, color, expected):
        assert EnvironmentOptions(color=color).color == expected

    @pytest.mark.parametrize("url, expected", [
        ("https://example.com", "https://example.com"),
        ("http://localhost:8888", "http://localhost:8888"),
        ("", None),
        ("staging.example.com", "http://staging.example.com"),
        ("staging.example.com/blog", "http://staging.example.com/blog"),
        ("not a url", None),
        ("javascript:alert(1)", None),
    ])
    def test_url_normalised_or_dropped(self, url, expected):
        assert EnvironmentOptions(url=url).url == expected


class TestSanitizeSettings:
    def test_keeps_only_meaningful_values(self, submitted):
        assert sanitize_settings(submitted) == {
            "development": {"color": "#abc", "url": "https://dev.example.com"},
            "staging": {"color": "#ffaa00", "url": "https://staging.example.com"},
        }

    def test_bare_host_gets_scheme(self):
        raw = {"staging": {"url": " staging.example.com "}}
        assert sanitize_settings(raw) == {"staging": {"url": "http://staging.example.com"}}

    def test_default_colour_case_insensitive(self):
        raw = {"production": {"color": "#DC3545"}}
        assert sanitize_settings(raw) == {}

    def test_unknown_environments_ignored(self, submitted):
        assert "custom" not in sanitize_settings(submitted)

    @pytest.mark.parametrize("raw", [None, "junk", ["local"], {"local": "junk"}])
    def test_garbage_payload(self, raw):
        assert sanitize_settings(raw) == {}

    def test_custom_defaults(self):
        raw = {"local": {"color": "#000000"}}
        assert sanitize_settings(raw, default_colors={"local": "#000000"}) == {}


class TestSavedLayers:
    def test_no_saved_settings_keeps_defaults(self, resolver):
        register_saved_settings(resolver, {})
        assert resolver.resolve(Domain.COLORS) == DEFAULT_COLORS
        assert resolver.resolve(Domain.URLS) == {}

    def test_save_is_visible_without_reregistering(self, resolver, submitted):
        store = {}
        register_saved_settings(resolver, store)
        save_settings(store, submitted)

        colors = resolver.resolve(Domain.COLORS)
        assert colors["staging"] == "#ffaa00"
        assert colors["local"] == DEFAULT_COLORS["local"]
        assert resolver.resolve(Domain.URLS) == {
            "development": "https://dev.example.com",
            "staging": "https://staging.example.com",
        }

    def test_saved_values_override_earlier_layers(self, resolver):
        store = {SETTINGS_KEY: {"staging": {"url": "https://stg.example.com"}}}
        resolver.register(Domain.URLS, lambda u: {**u, "staging": "staging.internal"})
        register_saved_settings(resolver, store)
        assert resolver.resolve(Domain.URLS)["staging"] == "https://stg.example.com"

    def test_corrupt_store_value(self, resolver, caplog):
        register_saved_settings(resolver, {SETTINGS_KEY: "garbage"})
        with caplog.at_level(logging.WARNING):
            assert resolver.resolve(Domain.COLORS) == DEFAULT_COLORS
        assert "Ignoring saved settings" in caplog.text

    def test_invalid_stored_colour_skipped_individually(self):
        store = {SETTINGS_KEY: {"staging": {"color": "green"}, "production": {"color": "#000"}}}
        colors = saved_colors_layer(store)(dict(DEFAULT_COLORS))
        assert colors["staging"] == DEFAULT_COLORS["staging"]
        assert colors["production"] == "#000"


class TestFieldValues:
    def test_defaults_when_nothing_saved(self):
        assert field_values({}, "staging") == ("#28a745", "")

    def test_saved_values(self):
        store = {SETTINGS_KEY: {"staging": {"color": "#ffaa00", "url": "https://stg.example.com"}}}
        assert field_values(store, "staging") == ("#ffaa00", "https://stg.example.com")
