"""
Orderly — Priority-Ordered Listener Registration
==================================================
Register values at a priority or before/after another value.
Read them back in resolved order.
"""

from orderly.config import DEFAULT_SETTINGS, OrderlySettings
from orderly.events import (
    Dispatcher,
    InMemoryContainer,
    ListenerProvider,
    dispatch,
)
from orderly.ordering import (
    MissingItemError,
    OrderedCollection,
    OrderingError,
    PivotCycleError,
)

__version__ = "1.0.0"

__all__ = [
    "OrderedCollection",
    "OrderingError",
    "MissingItemError",
    "PivotCycleError",
    "ListenerProvider",
    "InMemoryContainer",
    "Dispatcher",
    "dispatch",
    "OrderlySettings",
    "DEFAULT_SETTINGS",
]
