"""Wash cycle engine.

Public API:
- DishWasher: Runs one wash cycle per start() call
- MAXIMAL_FILTER_CAPACITY: Filter fouling limit for cycles with tablets
"""

from dishwasher.engine.orchestrator import MAXIMAL_FILTER_CAPACITY, DishWasher

__all__ = [
    "MAXIMAL_FILTER_CAPACITY",
    "DishWasher",
]
