"""Observer channel for detection progress.

Listeners are notified synchronously in registration order. A listener that
raises is logged and skipped; coroutine listeners are scheduled on the
running loop and never awaited by the emitter.
"""

import asyncio
import inspect
import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

Listener = Callable[[Any], Any]

DETECT_PACKAGE_MANAGER = "detect_package_manager"
DETECTED_WORKSPACE_GLOBS = "detected_workspace_globs"
DETECT_WORKSPACES = "detect_workspaces"
DETECT_BUILD_SYSTEMS = "detect_build_systems"
DETECT_FRAMEWORKS = "detect_frameworks"
DETECT_SETTINGS = "detect_settings"


class EventEmitter:
    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)
        self._pending: set[asyncio.Task] = set()

    def on(self, event: str, listener: Listener) -> Listener:
        self._listeners[event].append(listener)
        return listener

    def once(self, event: str, listener: Listener) -> Listener:
        """Register a listener that is removed after its first call."""

        def _wrapper(payload: Any) -> Any:
            self.off(event, _wrapper)
            return listener(payload)

        return self.on(event, _wrapper)

    def off(self, event: str, listener: Listener) -> None:
        if listener in self._listeners.get(event, []):
            self._listeners[event].remove(listener)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def emit(self, event: str, payload: Any = None) -> None:
        for listener in list(self._listeners.get(event, [])):
            try:
                result = listener(payload)
            except Exception:
                logger.exception("Listener for %s failed", event)
                continue
            if inspect.isawaitable(result):
                self._schedule(event, result)

    def _schedule(self, event: str, awaitable: Any) -> None:
        task = asyncio.ensure_future(awaitable)
        self._pending.add(task)

        def _done(finished: asyncio.Task) -> None:
            self._pending.discard(finished)
            if not finished.cancelled() and finished.exception() is not None:
                logger.error(
                    "Async listener for %s failed: %s", event, finished.exception()
                )

        task.add_done_callback(_done)
