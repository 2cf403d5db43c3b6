"""Frame-driven cyclers for parallax rotation.

Exports: Cycler, CycleState.
"""
from .cyclers import Cycler, CycleState

__all__ = ["Cycler", "CycleState"]
