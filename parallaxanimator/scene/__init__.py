"""
Scene integration for ParallaxAnimator.

Hosts emit lifecycle events (setup, per-tick update, initial draw, unload)
on a SceneEventEmitter; ParallaxDirector subscribes to them and owns the
per-scene config and CycleState.
"""

from .events import (
    SceneEventType,
    SceneEvent,
    SceneEventEmitter
)

from .director import ParallaxDirector

__all__ = [
    # Event system
    'SceneEventType',
    'SceneEvent',
    'SceneEventEmitter',

    # Integration
    'ParallaxDirector',
]
