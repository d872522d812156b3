"""
Notification registry: one list of callbacks per event name.

The engine stays free of Qt, so notifications are plain callbacks here; the
Qt canvas re-emits them as signals.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

NODE_SELECTED = "nodeSelected"
CANVAS_CLICKED = "canvasClicked"

Callback = Callable[[Any], None]


class EventRegistry:
    def __init__(self) -> None:
        self._callbacks: defaultdict[str, list[Callback]] = defaultdict(list)

    def on(self, event_name: str, callback: Callback) -> Callback:
        """Register `callback`; it is returned so this can be used as a decorator."""
        self._callbacks[event_name].append(callback)
        return callback

    def off(self, event_name: str, callback: Callback) -> None:
        try:
            self._callbacks[event_name].remove(callback)
        except ValueError:
            logger.debug(f"Callback {callback!r} was not registered for '{event_name}'.")

    def emit(self, event_name: str, detail: Any) -> None:
        # Copy, so a callback may unsubscribe itself
        for callback in list(self._callbacks.get(event_name, ())):
            callback(detail)
