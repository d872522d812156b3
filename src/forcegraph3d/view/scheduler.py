"""
QTimer based tick source for GraphVisualizer.start().
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

from forcegraph3d.config import DEFAULT_TICK_INTERVAL_MS

logger = logging.getLogger(__name__)


class QtTimerScheduler:
    """
    Calls the tick callback from the Qt event loop every `interval_ms`.
    Ticks never overlap because they all run on the GUI thread.
    """
    def __init__(self, parent: Optional[QObject] = None, interval_ms: int = DEFAULT_TICK_INTERVAL_MS) -> None:
        self._timer = QTimer(parent)
        self._timer.setInterval(interval_ms)
        self._callback: Optional[Callable[[], None]] = None

    def start(self, callback: Callable[[], None]) -> None:
        if self._callback is not None:
            self._timer.timeout.disconnect(self._callback)
        self._callback = callback
        self._timer.timeout.connect(callback)
        self._timer.start()
        logger.debug(f"Tick timer started ({self._timer.interval()} ms).")

    def stop(self) -> None:
        self._timer.stop()
        if self._callback is not None:
            self._timer.timeout.disconnect(self._callback)
            self._callback = None
