"""Structured logging via structlog.

The detectors log through the standard library (`logging.getLogger`).
Hosts embedding build-info call `configure_structlog()` once at startup to
get structured output for both structlog and stdlib loggers.

Renderer selection:
  debug=True:  `ConsoleRenderer` with colours for local development.
  debug=False: `JSONRenderer` for machine-parseable logs.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog


def configure_structlog(debug: bool = False, base_directory: Optional[str] = None) -> None:
    """Configure structlog and the stdlib bridge.

    `base_directory`, when given, is bound into every structlog event so
    logs from concurrent detections can be told apart. Calling this more
    than once replaces the previous configuration.
    """
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )

    structlog.contextvars.clear_contextvars()
    if base_directory:
        structlog.contextvars.bind_contextvars(base_directory=base_directory)

    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
        force=True,
    )
