"""Scene note parsing for parallax cycling.

A scene carries a free-text "notes" field. Two optional directives in it
configure the background cycle::

    <ParallaxImages: forest1, forest2, forest3>
    <ParallaxDelay: 45>

Parsing is total: any missing or malformed directive degrades to the
defaults (no images, default delay) and is only reported at DEBUG level.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from .settings import DEFAULT_DELAY_FRAMES

logger = logging.getLogger(__name__)

# Contents run up to the next '>' and must not be empty.
PARALLAX_IMAGES_PATTERN = re.compile(r"<ParallaxImages:\s*([^>]+)>", re.IGNORECASE)
# ASCII digits only; other Unicode digits are malformed.
PARALLAX_DELAY_PATTERN = re.compile(r"<ParallaxDelay:\s*([0-9]+)>", re.IGNORECASE)

_DELAY_TAG = re.compile(r"<ParallaxDelay:", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class MapParallaxConfig:
    """Ordered image list plus rotation delay for one scene.

    ``images`` is copied into a tuple on construction so the cycle order
    cannot change once built, whatever sequence the caller passed in.
    """

    images: Tuple[str, ...] = ()
    delay_frames: int = DEFAULT_DELAY_FRAMES

    def __post_init__(self) -> None:
        object.__setattr__(self, "images", tuple(self.images))
        for idx, name in enumerate(self.images):
            if not isinstance(name, str) or not name:
                raise ValueError(f"images[{idx}] must be a non-empty string, got {name!r}")
        if isinstance(self.delay_frames, bool) or not isinstance(self.delay_frames, int) or self.delay_frames < 1:
            raise ValueError(f"delay_frames must be positive, got {self.delay_frames!r}")

    @property
    def is_animated(self) -> bool:
        return len(self.images) > 1


def parse_image_list(note_text: Optional[str]) -> Tuple[str, ...]:
    """Extract the ``ParallaxImages`` list, first directive wins."""
    if not note_text:
        return ()
    match = PARALLAX_IMAGES_PATTERN.search(note_text)
    if match is None:
        return ()
    images = tuple(piece.strip() for piece in match.group(1).split(","))
    kept = tuple(name for name in images if name)
    if len(kept) != len(images):
        logger.debug("[parallax] Dropped %d blank ParallaxImages entries", len(images) - len(kept))
    return kept


def parse_delay(note_text: Optional[str], default_delay: int) -> int:
    """Extract the ``ParallaxDelay`` value, falling back to *default_delay*."""
    if not note_text:
        return default_delay
    match = PARALLAX_DELAY_PATTERN.search(note_text)
    if match is None:
        if _DELAY_TAG.search(note_text):
            logger.debug("[parallax] Malformed ParallaxDelay directive; using default %d", default_delay)
        return default_delay
    try:
        delay = int(match.group(1))
    except ValueError:
        # Digit runs past the interpreter's int conversion limit
        logger.debug("[parallax] ParallaxDelay has too many digits (%d); using default %d",
                     len(match.group(1)), default_delay)
        return default_delay
    if delay < 1:
        logger.debug("[parallax] ParallaxDelay %d is below 1; using default %d", delay, default_delay)
        return default_delay
    return delay


def build_config(note_text: Optional[str], default_delay: int = DEFAULT_DELAY_FRAMES) -> MapParallaxConfig:
    """Build a :class:`MapParallaxConfig` from a scene's notes.

    Never raises. A *default_delay* that is not a positive int is replaced by
    the built-in default so the resulting delay is always at least 1.

    Args:
        note_text: Scene notes (may be empty or None)
        default_delay: Delay used when no valid ``ParallaxDelay`` is present

    Returns:
        Immutable config for the scene
    """
    if isinstance(default_delay, bool) or not isinstance(default_delay, int) or default_delay < 1:
        logger.debug("[parallax] Invalid default delay %r; using %d", default_delay, DEFAULT_DELAY_FRAMES)
        default_delay = DEFAULT_DELAY_FRAMES

    if note_text is not None and not isinstance(note_text, str):
        note_text = str(note_text)

    config = MapParallaxConfig(
        images=parse_image_list(note_text),
        delay_frames=parse_delay(note_text, default_delay),
    )
    logger.debug("[parallax] Built config images=%d delay=%d", len(config.images), config.delay_frames)
    return config
