"""
Orderly Ordering — Errors
===========================
Raised while resolving relative (before/after) registrations.
Never raised by the add_* calls themselves; resolution is deferred
to the first read after a mutation.
"""


class OrderingError(Exception):
    """Base error for ordered collection operations."""
    pass


class MissingItemError(OrderingError):
    """A pending item references a pivot id that was never registered."""

    def __init__(self, item_id: str, pivot_id: str, direction: str):
        self.item_id = item_id
        self.pivot_id = pivot_id
        self.direction = direction
        super().__init__(
            f"Cannot add item '{item_id}' {direction} "
            f"non-existent item '{pivot_id}'."
        )


class PivotCycleError(OrderingError):
    """Pending items pivot on each other and can never be resolved."""

    def __init__(self, item_ids: list[str]):
        self.item_ids = list(item_ids)
        super().__init__(
            f"Cannot resolve items {', '.join(repr(i) for i in item_ids)}: "
            f"their before/after pivots form a cycle."
        )
