"""Process-wide parallax settings.

``DefaultDelay`` (number, min 1, default 60) and the image directory
(``img/parallaxes``) are resolved from an explicit parameter mapping, then the environment,
then built-in defaults. Invalid values fall through to the next source.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_DELAY_FRAMES = 60
DEFAULT_IMAGE_DIR = Path("img") / "parallaxes"
DEFAULT_IMAGE_SUFFIX = ".png"

DELAY_ENV_VAR = "PARALLAXANIMATOR_DEFAULT_DELAY"
IMAGE_DIR_ENV_VAR = "PARALLAXANIMATOR_IMAGE_DIR"


@dataclass(frozen=True, slots=True)
class ParallaxSettings:
    """Settings shared by every scene in the process."""

    default_delay: int = DEFAULT_DELAY_FRAMES
    image_dir: Path = DEFAULT_IMAGE_DIR
    image_suffix: str = DEFAULT_IMAGE_SUFFIX

    def __post_init__(self) -> None:
        if isinstance(self.default_delay, bool) or not isinstance(self.default_delay, int) or self.default_delay < 1:
            raise ValueError(f"default_delay must be a positive int, got {self.default_delay!r}")


def coerce_delay(value: Any) -> Optional[int]:
    """Return *value* as a positive int, or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        delay = int(str(value).strip())
    except ValueError:
        return None
    return delay if delay >= 1 else None


def load_settings(
    parameters: Optional[Mapping[str, Any]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ParallaxSettings:
    """Resolve :class:`ParallaxSettings`.

    Args:
        parameters: Host plugin parameters (``DefaultDelay``, ``ImageDir``)
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        Settings with a guaranteed positive ``default_delay``
    """
    params = parameters or {}
    environ = os.environ if env is None else env

    delay = coerce_delay(params.get("DefaultDelay"))
    if delay is None:
        if params.get("DefaultDelay") not in (None, ""):
            logger.debug("[parallax] Ignoring invalid DefaultDelay parameter %r", params.get("DefaultDelay"))
        delay = coerce_delay(environ.get(DELAY_ENV_VAR))
    if delay is None:
        if environ.get(DELAY_ENV_VAR):
            logger.debug("[parallax] Ignoring invalid %s=%r", DELAY_ENV_VAR, environ.get(DELAY_ENV_VAR))
        delay = DEFAULT_DELAY_FRAMES

    raw_dir = params.get("ImageDir") or environ.get(IMAGE_DIR_ENV_VAR)
    image_dir = Path(str(raw_dir)) if raw_dir else DEFAULT_IMAGE_DIR

    return ParallaxSettings(default_delay=delay, image_dir=image_dir)
