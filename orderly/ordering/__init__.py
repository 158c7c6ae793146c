"""
Orderly Ordering — Public API
===============================
Priority-ordered collection with before/after registration.
"""

from orderly.ordering.collection import Direction, OrderedCollection, OrderedItem
from orderly.ordering.errors import (
    MissingItemError,
    OrderingError,
    PivotCycleError,
)
from orderly.ordering.ids import enforce_unique_id, random_id

__all__ = [
    "OrderedCollection",
    "OrderedItem",
    "Direction",
    "enforce_unique_id",
    "random_id",
    "OrderingError",
    "MissingItemError",
    "PivotCycleError",
]
