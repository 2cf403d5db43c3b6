"""ParallaxAnimator: per-scene background image cycling driven by frame ticks."""

from .content.notes import MapParallaxConfig, build_config
from .content.settings import ParallaxSettings, load_settings
from .loom.cyclers import CycleState

__all__ = [
    "MapParallaxConfig",
    "build_config",
    "ParallaxSettings",
    "load_settings",
    "CycleState",
]

__version__ = "0.1.0"
