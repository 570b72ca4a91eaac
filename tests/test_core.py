"""Tests for the ambient stack: settings, structlog and Sentry wiring."""

import logging
from unittest.mock import MagicMock, patch

import structlog

from buildinfo.core.config import Settings
from buildinfo.core.logging import configure_structlog
from buildinfo.core.sentry import SentryReporter, _scrub_secrets, init_sentry


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("BUILDINFO_CATALOG_URL", raising=False)
        monkeypatch.delenv("BUILDINFO_OFFLINE", raising=False)
        settings = Settings(_env_file=None)
        assert settings.catalog_url == ""
        assert settings.offline is False
        assert settings.catalog_cache_ttl == 3600

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("BUILDINFO_CATALOG_URL", "https://catalog.example.test/")
        monkeypatch.setenv("BUILDINFO_OFFLINE", "true")

        settings = Settings(_env_file=None)

        assert settings.catalog_url == "https://catalog.example.test"
        assert settings.offline is True


class TestConfigureStructlog:
    def test_configure_does_not_raise_in_debug_mode(self) -> None:
        configure_structlog(debug=True)

    def test_configure_does_not_raise_in_prod_mode(self) -> None:
        configure_structlog(debug=False, base_directory="/repo")

    def test_base_directory_is_bound(self) -> None:
        configure_structlog(debug=False, base_directory="/repo/site")
        assert structlog.contextvars.get_contextvars() == {"base_directory": "/repo/site"}
        configure_structlog(debug=False)
        assert structlog.contextvars.get_contextvars() == {}

    def test_stdlib_logger_usable_after_configure(self) -> None:
        configure_structlog(debug=True)
        logging.getLogger("buildinfo.test").info("stdlib message")
        structlog.get_logger("test").info("structured", key="value")


class TestSentry:
    def test_init_skipped_without_dsn(self):
        with patch("buildinfo.core.sentry.sentry_sdk") as sdk:
            assert init_sentry("") is False
            assert init_sentry("   ") is False
        sdk.init.assert_not_called()

    def test_init_with_dsn(self):
        with patch("buildinfo.core.sentry.sentry_sdk") as sdk:
            assert init_sentry("https://key@o0.ingest.example.test/1", "ci") is True
        kwargs = sdk.init.call_args.kwargs
        assert kwargs["environment"] == "ci"
        assert kwargs["send_default_pii"] is False
        assert kwargs["before_send"] is _scrub_secrets

    def test_scrub_secrets(self):
        event = {
            "extra": {"api_token": "abc", "path": "/repo"},
            "contexts": {"build": {"base_directory": "/repo", "auth": {"password": "x"}}},
        }

        scrubbed = _scrub_secrets(event, None)

        assert scrubbed["extra"] == {"api_token": "[REDACTED]", "path": "/repo"}
        assert scrubbed["contexts"]["build"]["auth"]["password"] == "[REDACTED]"
        assert scrubbed["contexts"]["build"]["base_directory"] == "/repo"

    def test_reporter_sets_contexts(self):
        error = RuntimeError("boom")
        scope = MagicMock()
        with patch("buildinfo.core.sentry.sentry_sdk") as sdk:
            sdk.new_scope.return_value.__enter__.return_value = scope
            SentryReporter().report(error, {"build": {"base_directory": "/repo", "root": None}})

        scope.set_context.assert_called_once_with("build", {"base_directory": "/repo", "root": None})
        scope.capture_exception.assert_called_once_with(error)

    def test_reporter_never_raises(self):
        with patch(
            "buildinfo.core.sentry.sentry_sdk.new_scope",
            side_effect=RuntimeError("sdk broken"),
        ):
            SentryReporter().report(ValueError("x"), {})
