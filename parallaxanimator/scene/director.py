"""Parallax Director - connects scene lifecycle hooks to the cycle state.

Manages:
- Building a fresh config + CycleState on every scene setup
- Advancing the state once per tick
- Pushing the active image name to the renderer on rotation and first draw
- Rotation callbacks for anything else that wants to follow the cycle
"""

from __future__ import annotations
from pathlib import Path
from typing import Callable, Optional
import logging

from ..content.notes import MapParallaxConfig, build_config
from ..content.settings import ParallaxSettings
from ..logging_utils import BurstSampler
from ..loom.cyclers import CycleState
from .events import SceneEvent, SceneEventEmitter, SceneEventType


class ParallaxDirector:
    """Owns the per-scene parallax config and rotation state.

    Config and state belong to the current scene only. They are rebuilt on
    every setup and dropped on unload, never carried across scenes.
    """

    def __init__(
        self,
        settings: Optional[ParallaxSettings] = None,
        renderer: Optional[Callable[[str], None]] = None,
    ):
        """Initialize parallax director.

        Args:
            settings: Process-wide settings (default delay, image dir)
            renderer: Sink that receives the image name to draw as parallax
        """
        self.settings = settings or ParallaxSettings()
        self.renderer = renderer

        self.config: Optional[MapParallaxConfig] = None
        self.state: Optional[CycleState] = None

        self._rotation_callbacks: list[Callable[[str], None]] = []
        self._handlers: dict[SceneEventType, Callable[[SceneEvent], None]] = {
            SceneEventType.SCENE_SETUP: self._on_setup_event,
            SceneEventType.SCENE_UPDATE: self._on_update_event,
            SceneEventType.INITIAL_DRAW: self._on_initial_draw_event,
            SceneEventType.SCENE_UNLOAD: self._on_unload_event,
        }

        self.logger = logging.getLogger(__name__)
        self._rotation_sampler = BurstSampler(interval_s=5.0)

    # ===== Scene lifecycle =====

    def on_scene_setup(self, note_text: Optional[str]) -> CycleState:
        """Rebuild config and state from the new scene's notes."""
        self.config = build_config(note_text, self.settings.default_delay)
        self.state = CycleState(self.config)
        self._rotation_sampler.flush()
        if self.config.images:
            self.logger.info(
                f"[parallax] Scene setup: images={list(self.config.images)} delay={self.config.delay_frames}"
            )
        else:
            self.logger.debug("[parallax] Scene setup: no parallax images")
        return self.state

    def update(self) -> None:
        """Advance the cycle by one tick and refresh the renderer on rotation."""
        if self.state is None:
            return

        before = self.state.rotation_count
        self.state.advance()
        if self.state.rotation_count == before:
            return

        image = self.state.active_image()
        self._refresh_renderer(image)
        for callback in list(self._rotation_callbacks):
            try:
                callback(image)
            except Exception as e:
                self.logger.error(f"[parallax] Rotation callback error: {e}", exc_info=True)

        total = self._rotation_sampler.record()
        if total:
            self.logger.info(f"[parallax] {total} rotation(s) in the last {self._rotation_sampler.interval_s:.0f}s (now {image})")

    def on_initial_draw(self) -> None:
        """Prime the renderer with the current image before the first frame."""
        if self.config is None or not self.config.images:
            return
        self._refresh_renderer(self.active_image())

    def on_scene_unload(self) -> None:
        """Drop the scene-owned config and state."""
        if self.state is not None:
            self.logger.debug(f"[parallax] Scene unload after {self.state.rotation_count} rotation(s)")
        self.config = None
        self.state = None

    def active_image(self) -> str:
        """Image to draw now, or "" if there is no scene or no images."""
        if self.state is None:
            return ""
        return self.state.active_image()

    def resolve_image_path(self, name: str) -> Path:
        """Map an image identifier to its expected file under the image dir."""
        return self.settings.image_dir / f"{name}{self.settings.image_suffix}"

    def _refresh_renderer(self, image: str) -> None:
        if self.renderer is None:
            return
        try:
            self.renderer(image or "")
        except Exception as e:
            self.logger.error(f"[parallax] Renderer refresh error: {e}", exc_info=True)

    # ===== Event wiring =====

    def attach(self, emitter: SceneEventEmitter) -> None:
        """Subscribe lifecycle handlers to a host's event emitter."""
        for event_type, handler in self._handlers.items():
            emitter.subscribe(event_type, handler)

    def detach(self, emitter: SceneEventEmitter) -> None:
        """Remove lifecycle handlers from a host's event emitter."""
        for event_type, handler in self._handlers.items():
            emitter.unsubscribe(event_type, handler)

    def _on_setup_event(self, event: SceneEvent) -> None:
        note = (event.data or {}).get("note")
        self.on_scene_setup(note)

    def _on_update_event(self, event: SceneEvent) -> None:
        self.update()

    def _on_initial_draw_event(self, event: SceneEvent) -> None:
        self.on_initial_draw()

    def _on_unload_event(self, event: SceneEvent) -> None:
        self.on_scene_unload()

    # ===== Rotation callbacks =====

    def register_rotation_callback(self, callback: Callable[[str], None]) -> None:
        """Register callback fired with the new image name after each rotation."""
        if callback not in self._rotation_callbacks:
            self._rotation_callbacks.append(callback)
            self.logger.debug(f"[parallax] Registered rotation callback (total={len(self._rotation_callbacks)})")

    def unregister_rotation_callback(self, callback: Callable[[str], None]) -> None:
        """Unregister a previously registered rotation callback."""
        if callback in self._rotation_callbacks:
            self._rotation_callbacks.remove(callback)
            self.logger.debug(f"[parallax] Unregistered rotation callback (total={len(self._rotation_callbacks)})")
