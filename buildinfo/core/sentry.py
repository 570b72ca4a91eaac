"""Sentry error reporting for detection failures.

Stage failures are reported with a `build` context holding the base
directory and repository root. Reporting is fire-and-forget: a reporter
never raises into the detection pipeline.

Key decisions:
  - `send_default_pii=False`: no user data sent by default.
  - `before_send` hook scrubs any event field whose key contains a
    sensitive keyword (api_key, secret, password, token, dsn).
  - No-op when the DSN is empty so local runs and CI are unaffected.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import sentry_sdk

logger = logging.getLogger(__name__)

_SENSITIVE_KEYS = frozenset({"api_key", "secret", "password", "token", "dsn"})


class ErrorReporter(Protocol):
    def report(self, error: BaseException, metadata: dict[str, Any]) -> None: ...


def _scrub_secrets(event: dict[str, Any], hint: Any) -> dict[str, Any]:
    """Sentry before_send hook: redact values for sensitive keys."""
    _scrub_dict(event.get("extra", {}))
    _scrub_dict(event.get("contexts", {}))
    return event


def _scrub_dict(d: dict[str, Any]) -> None:
    """Recursively redact sensitive values in-place."""
    for key in list(d.keys()):
        if any(sensitive in key.lower() for sensitive in _SENSITIVE_KEYS):
            d[key] = "[REDACTED]"
        elif isinstance(d[key], dict):
            _scrub_dict(d[key])


def init_sentry(dsn: str, environment: str = "development") -> bool:
    """Initialise the Sentry SDK. Returns False when the DSN is empty."""
    if not dsn or not dsn.strip():
        logger.debug("Sentry DSN not configured, skipping initialisation")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        send_default_pii=False,
        before_send=_scrub_secrets,
    )
    logger.info("Sentry initialised (environment=%s)", environment)
    return True


class SentryReporter:
    """Reports errors to Sentry with detection metadata as contexts."""

    def report(self, error: BaseException, metadata: Optional[dict[str, Any]] = None) -> None:
        try:
            with sentry_sdk.new_scope() as scope:
                for name, context in (metadata or {}).items():
                    scope.set_context(name, context)
                scope.capture_exception(error)
        except Exception as exc:
            logger.warning("Failed to report error to Sentry: %s", exc)
