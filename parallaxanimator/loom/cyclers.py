"""
Frame-accurate timing for background image rotation.

A cycler is advanced once per logical frame by its owner. ``CycleState``
is the one concrete cycler here: it steps through a scene's parallax
images, holding each for ``delay_frames`` ticks and wrapping forever.
"""

from abc import ABC, abstractmethod
import logging

from ..content.notes import MapParallaxConfig

logger = logging.getLogger(__name__)


class Cycler(ABC):
    """
    Base class for frame-driven cyclers.

    Cyclers never look at wall-clock time; the owner calls ``advance()``
    exactly once per tick, so behavior is independent of frame-rate jitter.
    """

    @abstractmethod
    def advance(self) -> None:
        """Advance cycler by one logical frame."""
        pass

    @abstractmethod
    def complete(self) -> bool:
        """Check if cycler has finished execution."""
        pass

    @abstractmethod
    def length(self) -> int:
        """Total number of frames in one pass of this cycler."""
        pass

    @abstractmethod
    def index(self) -> int:
        """Current frame index within this cycler."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Reset cycler to initial state."""
        pass

    def progress(self) -> float:
        """
        Calculate progress through cycler [0.0 - 1.0].

        Returns:
            Progress ratio, where 0.0 = start, 1.0 = complete
        """
        total = self.length()
        if total == 0:
            return 1.0
        return min(1.0, self.index() / total)


class CycleState(Cycler):
    """
    Rotation state for one scene's parallax images.

    Two effective states:
    - inactive: zero or one image, ``advance()`` is a no-op
    - cycling: two or more images, one rotation every ``delay_frames`` ticks

    The first active image is always ``images[0]``. There is no terminal
    state; ``complete()`` is always False.

    Example:
        state = CycleState(build_config("<ParallaxImages: a, b>", 60))
        for _ in range(60):
            state.advance()
        state.active_image()  # "b"

    Args:
        config: Parsed scene config (shared, never mutated)
    """

    def __init__(self, config: MapParallaxConfig):
        self.config = config
        self.current_index = 0
        self.elapsed_ticks = 0
        self.rotation_count = 0

    @property
    def is_cycling(self) -> bool:
        """True when there is more than one image to rotate through."""
        return len(self.config.images) > 1

    def advance(self) -> None:
        """Count one tick; rotate to the next image when the delay is reached."""
        if not self.is_cycling:
            return

        self.elapsed_ticks += 1
        if self.elapsed_ticks >= self.config.delay_frames:
            self.elapsed_ticks = 0
            self.current_index = (self.current_index + 1) % len(self.config.images)
            self.rotation_count += 1
            logger.debug(
                "[parallax.trace] rotated to %s (index=%d rotations=%d)",
                self.config.images[self.current_index],
                self.current_index,
                self.rotation_count,
            )

    def active_image(self) -> str:
        """
        Image identifier to draw right now.

        Returns:
            ``images[current_index]``, or "" when there is nothing to draw
        """
        if not self.config.images:
            return ""
        return self.config.images[self.current_index]

    def complete(self) -> bool:
        """Background cycling loops for the lifetime of the scene."""
        return False

    def length(self) -> int:
        """Frames in one full loop over the images, 0 when not cycling."""
        if not self.is_cycling:
            return 0
        return self.config.delay_frames * len(self.config.images)

    def index(self) -> int:
        """Frame position within the current loop."""
        return self.current_index * self.config.delay_frames + self.elapsed_ticks

    def reset(self) -> None:
        """Return to the first image with no elapsed ticks."""
        self.current_index = 0
        self.elapsed_ticks = 0
        self.rotation_count = 0

    def __repr__(self) -> str:
        return (
            f"CycleState(images={len(self.config.images)}, "
            f"delay_frames={self.config.delay_frames}, "
            f"current_index={self.current_index}, "
            f"elapsed_ticks={self.elapsed_ticks})"
        )
