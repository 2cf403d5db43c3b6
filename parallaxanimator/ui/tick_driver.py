"""QTimer-backed tick source for PyQt6 hosts.

The parallax core counts ticks, not milliseconds. Hosts without their own
frame loop can use QtTickDriver to emit one ``tick`` per frame and bind it
to ``ParallaxDirector.update``.
"""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from PyQt6.QtCore import QObject, Qt, QTimer, pyqtSignal

if TYPE_CHECKING:
    from ..scene.director import ParallaxDirector

logger = logging.getLogger(__name__)


class QtTickDriver(QObject):
    """Emits ``tick`` once per frame at a fixed target FPS."""

    tick = pyqtSignal()

    def __init__(self, fps: int = 60, parent: Optional[QObject] = None):
        super().__init__(parent)
        fps_frames = int(fps)
        if fps_frames <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self._fps = fps_frames
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(self.interval_ms)
        self._timer.timeout.connect(self.tick.emit)

    @property
    def fps(self) -> int:
        return self._fps

    @property
    def interval_ms(self) -> int:
        return max(1, round(1000 / self._fps))

    def bind(self, director: ParallaxDirector) -> None:
        """Advance *director* on every tick."""
        self.tick.connect(director.update)

    def start(self) -> None:
        if not self._timer.isActive():
            self._timer.start()
            logger.debug(f"[tick] Started at {self._fps} fps ({self.interval_ms} ms)")

    def stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
            logger.debug("[tick] Stopped")

    def is_running(self) -> bool:
        return self._timer.isActive()
