"""Qt helpers for hosting the parallax cycle."""

from .tick_driver import QtTickDriver

__all__ = ["QtTickDriver"]
