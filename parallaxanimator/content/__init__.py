"""Scene notes parsing and parallax settings."""

from .notes import MapParallaxConfig, build_config  # convenience re-export
from .settings import ParallaxSettings, load_settings

__all__ = ["MapParallaxConfig", "build_config", "ParallaxSettings", "load_settings"]
