"""
Orderly Ordering — Ordered Collection
=======================================
An orderable collection of arbitrary values.

Values may be added at an absolute priority, or relative to an
existing value (before/after its id). Iteration returns values in
priority order, higher priority first.

The order of values sharing one priority is explicitly undefined.
In practice it is FIFO, but callers must not rely on it.

Lifecycle:
    1. add_item / add_item_before / add_item_after (marks dirty)
    2. First read after a mutation resolves pending relative items
       and sorts the priority buckets
    3. Later reads reuse the sorted view until the next mutation

Single writer. No internal locking. A cursor obtained before a write
keeps walking the view it started on; the write forces the next read
to resolve and sort again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Iterator, Optional, TypeVar

from orderly.ordering.errors import MissingItemError, PivotCycleError
from orderly.ordering.ids import IdFactory, enforce_unique_id, random_id

logger = logging.getLogger("orderly.ordering")

T = TypeVar("T")


# ══════════════════════════════════════════════════════════════
# ITEM RECORD
# ══════════════════════════════════════════════════════════════

class Direction(Enum):
    """Relative position of a pending item against its pivot."""
    BEFORE = "before"
    AFTER = "after"

    @property
    def offset(self) -> int:
        # Higher priorities come first, so "before" means one higher.
        return 1 if self is Direction.BEFORE else -1


@dataclass(eq=False)
class OrderedItem:
    """
    One registered value plus its ordering data.

    Exactly one of:
    - resolved: `priority` is set
    - pending:  `pivot_id` and `direction` are set
    """

    item: Any
    id: str
    priority: Optional[int] = None
    pivot_id: Optional[str] = None
    direction: Optional[Direction] = None

    def __post_init__(self) -> None:
        has_priority = self.priority is not None
        has_relation = self.pivot_id is not None and self.direction is not None
        partial_relation = (self.pivot_id is None) != (self.direction is None)

        if partial_relation or has_priority == has_relation:
            raise ValueError(
                f"Item '{self.id}' must carry either a priority or a "
                f"before/after relation, not both and not neither."
            )

    @classmethod
    def with_priority(cls, item: Any, priority: int, id: str) -> OrderedItem:
        return cls(item=item, id=id, priority=priority)

    @classmethod
    def before(cls, item: Any, pivot_id: str, id: str) -> OrderedItem:
        return cls(item=item, id=id, pivot_id=pivot_id,
                   direction=Direction.BEFORE)

    @classmethod
    def after(cls, item: Any, pivot_id: str, id: str) -> OrderedItem:
        return cls(item=item, id=id, pivot_id=pivot_id,
                   direction=Direction.AFTER)

    @property
    def is_pending(self) -> bool:
        return self.priority is None

    def resolve(self, priority: int) -> None:
        """Pending → resolved. Happens at most once."""
        if not self.is_pending:
            raise ValueError(f"Item '{self.id}' is already resolved.")
        self.priority = priority
        self.pivot_id = None
        self.direction = None


# ══════════════════════════════════════════════════════════════
# ORDERED COLLECTION
# ══════════════════════════════════════════════════════════════

class OrderedCollection(Generic[T]):
    """
    Priority-ordered, append-only collection.

    Usage:
        collection = OrderedCollection()
        a = collection.add_item("A")                  # priority 0
        collection.add_item("C", priority=100)
        collection.add_item_before(a, "B")            # priority 1
        list(collection)                              # ["C", "B", "A"]
    """

    def __init__(self, id_factory: Optional[IdFactory] = None):
        self._id_factory: IdFactory = id_factory or random_id
        self._items: dict[int, list[OrderedItem]] = {}
        self._lookup: dict[str, OrderedItem] = {}
        self._pending: list[OrderedItem] = []
        self._ordered: tuple[tuple[OrderedItem, ...], ...] = ()
        self._dirty: bool = False

    # ══════════════════════════════════════════════════════════
    # REGISTRATION
    # ══════════════════════════════════════════════════════════

    def add_item(
        self, item: T, priority: int = 0, id: Optional[str] = None
    ) -> str:
        """
        Add an item at a given priority. Higher numbers come first.

        Args:
            item:     Any value.
            priority: Any int, negative allowed.
            id:       Requested id. Suffixed with -1, -2, ... if taken.

        Returns:
            The opaque id actually assigned.
        """
        return self._add_resolved(item, priority, self._unique_id(id))

    def add_item_before(
        self, pivot_id: str, item: T, id: Optional[str] = None
    ) -> str:
        """
        Add an item that must come before the item `pivot_id`.

        Only the order relative to the pivot is guaranteed, not the
        order relative to any other item.

        An unknown pivot is not an error here; it is reported by
        MissingItemError on the next read.
        """
        return self._add_relative(pivot_id, item, id, Direction.BEFORE)

    def add_item_after(
        self, pivot_id: str, item: T, id: Optional[str] = None
    ) -> str:
        """
        Add an item that must come after the item `pivot_id`.

        Same guarantees and deferred validation as add_item_before.
        """
        return self._add_relative(pivot_id, item, id, Direction.AFTER)

    def _add_resolved(self, item: T, priority: int, id: str) -> str:
        entry = OrderedItem.with_priority(item, priority, id)

        self._items.setdefault(priority, []).append(entry)
        self._lookup[id] = entry
        self._dirty = True

        return id

    def _add_relative(
        self,
        pivot_id: str,
        item: T,
        id: Optional[str],
        direction: Direction,
    ) -> str:
        id = self._unique_id(id)

        pivot = self._lookup.get(pivot_id)
        if pivot is not None and not pivot.is_pending:
            return self._add_resolved(
                item, pivot.priority + direction.offset, id
            )

        if direction is Direction.BEFORE:
            entry = OrderedItem.before(item, pivot_id, id)
        else:
            entry = OrderedItem.after(item, pivot_id, id)

        self._pending.append(entry)
        self._lookup[id] = entry
        self._dirty = True

        return id

    def _unique_id(self, id: Optional[str]) -> str:
        return enforce_unique_id(id, self._lookup, self._id_factory)

    # ══════════════════════════════════════════════════════════
    # READING
    # ══════════════════════════════════════════════════════════

    def __iter__(self) -> Iterator[T]:
        """
        Fresh cursor over all values, highest priority first.

        Raises:
            MissingItemError: A pending item's pivot was never added.
            PivotCycleError:  Pending items pivot on each other.
        """
        if self._dirty:
            self._sort()
        return self._walk(self._ordered)

    def iterate(self) -> Iterator[T]:
        """Alias of iter(collection)."""
        return iter(self)

    def __len__(self) -> int:
        return len(self._lookup)

    def __contains__(self, id: object) -> bool:
        return id in self._lookup

    def priority_of(self, id: str) -> Optional[int]:
        """Resolved priority of an item, or None while still pending."""
        return self._lookup[id].priority

    @staticmethod
    def _walk(
        ordered: tuple[tuple[OrderedItem, ...], ...]
    ) -> Iterator[T]:
        for bucket in ordered:
            for entry in bucket:
                yield entry.item

    def _sort(self) -> None:
        self._prioritize_pending_items()
        self._ordered = tuple(
            tuple(self._items[priority])
            for priority in sorted(self._items, reverse=True)
        )
        self._dirty = False

        logger.debug(
            f"Collection sorted: {len(self._lookup)} items in "
            f"{len(self._ordered)} priority buckets"
        )

    def _prioritize_pending_items(self) -> None:
        """
        Resolve pending items against their pivots.

        Multi-pass: an item whose pivot is itself pending waits for a
        later pass. Passes repeat while at least one item resolves.
        Unresolved items stay queued when an error is raised.
        """
        pending = self._pending
        passes = 0

        while pending:
            passes += 1
            waiting: list[OrderedItem] = []

            for index, entry in enumerate(pending):
                pivot = self._lookup.get(entry.pivot_id)

                if pivot is None:
                    self._pending = waiting + pending[index:]
                    raise MissingItemError(
                        entry.id, entry.pivot_id, entry.direction.value
                    )

                if pivot.is_pending:
                    waiting.append(entry)
                    continue

                priority = pivot.priority + entry.direction.offset
                entry.resolve(priority)
                self._items.setdefault(priority, []).append(entry)

            if len(waiting) == len(pending):
                self._pending = waiting
                raise PivotCycleError([entry.id for entry in waiting])

            pending = waiting

        if passes:
            logger.debug(f"Pending items resolved in {passes} pass(es)")

        # Drained items are never reprocessed.
        self._pending = []
