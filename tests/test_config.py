"""Tests for Settings (tracescope.config)."""

import pytest
from pydantic import ValidationError

from tracescope.config import Settings, get_settings
from tracescope.utils.request_context import X_CLOUD_TRACE, RequestContextScope


class TestSettings:
    def test_defaults(self, clean_settings):
        settings = Settings()
        assert settings.app_env == "local"
        assert settings.log_format == "console"
        assert settings.trace_header == X_CLOUD_TRACE
        assert settings.trace_attribute == X_CLOUD_TRACE
        assert settings.strict_scopes is False
        assert settings.google_cloud_project is None

    def test_reads_environment(self, clean_settings, monkeypatch):
        monkeypatch.setenv("TRACE_HEADER", "X-Trace")
        monkeypatch.setenv("STRICT_SCOPES", "true")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        settings = Settings()
        assert settings.trace_header == "X-Trace"
        assert settings.strict_scopes is True
        assert settings.log_format == "json"

    def test_invalid_app_env(self, clean_settings):
        with pytest.raises(ValidationError):
            Settings(app_env="moon")

    def test_invalid_log_format(self, clean_settings):
        with pytest.raises(ValidationError):
            Settings(log_format="xml")

    def test_get_settings_is_cached(self, clean_settings):
        assert get_settings() is get_settings()


class TestTrackerFromSettings:
    def test_builds_tracker(self, clean_settings):
        tracker = RequestContextScope.from_settings(
            Settings(trace_header="X-Trace", trace_attribute="trace", strict_scopes=True)
        )
        assert tracker.header_name == "X-Trace"
        assert tracker.attribute_key == "trace"
        assert tracker.strict is True

    def test_uses_cached_settings_by_default(self, clean_settings, monkeypatch):
        monkeypatch.setenv("TRACE_HEADER", "X-From-Env")
        tracker = RequestContextScope.from_settings()
        assert tracker.header_name == "X-From-Env"
