"""Scene lifecycle event bus.

The host emits lifecycle events here. Subscribers (the parallax director, debug overlays, tests) react
to the events they care about.

Usage:
    emitter = SceneEventEmitter()
    emitter.subscribe(SceneEventType.SCENE_SETUP, lambda evt: print(evt.data["note"]))
    emitter.emit(SceneEvent(SceneEventType.SCENE_SETUP, data={"note": "<ParallaxDelay: 30>"}))
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Any, Optional
import logging
import time


class SceneEventType(Enum):
    """Lifecycle points a host exposes to the parallax layer."""

    SCENE_SETUP = auto()      # Scene loaded; data["note"] holds its notes text
    SCENE_UPDATE = auto()     # One render-frame tick
    INITIAL_DRAW = auto()     # Lower layer created, before the first frame is shown
    SCENE_UNLOAD = auto()     # Scene discarded


@dataclass
class SceneEvent:
    """Represents a scene event with optional payload data.

    Attributes:
        event_type: Type of event that occurred
        data: Optional dictionary with event-specific data
        timestamp: Optional timestamp (set by emitter if missing)
    """
    event_type: SceneEventType
    data: Optional[dict[str, Any]] = None
    timestamp: Optional[float] = None

    def __str__(self) -> str:
        if self.data:
            data_str = ", ".join(f"{k}={v!r}" for k, v in self.data.items())
            return f"SceneEvent({self.event_type.name}, {data_str})"
        return f"SceneEvent({self.event_type.name})"


class SceneEventEmitter:
    """Event bus for scene lifecycle hooks.

    Supports multiple subscribers per event type. A failing subscriber is
    logged and skipped so the host's frame loop keeps running.
    """

    def __init__(self):
        self._subscribers: dict[SceneEventType, list[Callable[[SceneEvent], None]]] = {}
        self.logger = logging.getLogger(__name__)

    def subscribe(
        self,
        event_type: SceneEventType,
        callback: Callable[[SceneEvent], None]
    ) -> None:
        """Subscribe to a specific event type.

        Args:
            event_type: Type of event to listen for
            callback: Function to call when event occurs (receives SceneEvent)
        """
        callbacks = self._subscribers.setdefault(event_type, [])
        if callback not in callbacks:
            callbacks.append(callback)
            self.logger.debug(f"[events] Subscribed to {event_type.name} (total={len(callbacks)})")

    def unsubscribe(
        self,
        event_type: SceneEventType,
        callback: Callable[[SceneEvent], None]
    ) -> None:
        """Unsubscribe from a specific event type."""
        callbacks = self._subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)
            self.logger.debug(f"[events] Unsubscribed from {event_type.name} (total={len(callbacks)})")

    def subscriber_count(self, event_type: SceneEventType) -> int:
        return len(self._subscribers.get(event_type, []))

    def emit(self, event: SceneEvent) -> None:
        """Emit an event to all subscribed callbacks.

        Args:
            event: The event to emit
        """
        if event.timestamp is None:
            event.timestamp = time.time()

        # Updates fire every frame; keep them out of normal debug output
        if event.event_type is SceneEventType.SCENE_UPDATE:
            self.logger.debug(f"[parallax.trace] Emitting: {event}")
        else:
            self.logger.debug(f"[events] Emitting: {event}")

        for callback in list(self._subscribers.get(event.event_type, [])):
            try:
                callback(event)
            except Exception as e:
                self.logger.error(f"[events] Callback error for {event.event_type.name}: {e}", exc_info=True)

    def clear_all(self) -> None:
        """Remove all event subscribers (useful for testing/cleanup)."""
        self._subscribers.clear()
        self.logger.debug("[events] Cleared all subscribers")
