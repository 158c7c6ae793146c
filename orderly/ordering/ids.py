"""
Orderly Ordering — Identifier Assignment
==========================================
Every item in a collection is addressable by an opaque string id.

Rules:
- A caller-supplied id is used as-is when free
- On collision a counter suffix is appended: id, id-1, id-2, ...
- An omitted id is generated by the id factory, then runs through
  the same collision loop
"""

from __future__ import annotations

import uuid
from typing import Callable, Container, Optional

IdFactory = Callable[[], str]

ID_SEPARATOR = "-"


def random_id() -> str:
    """Default id factory: 32 hex characters from a random UUID."""
    return uuid.uuid4().hex


def enforce_unique_id(
    proposed: Optional[str],
    taken: Container[str],
    id_factory: IdFactory = random_id,
) -> str:
    """
    Return an id guaranteed absent from `taken`.

    Args:
        proposed:   Caller-requested id, or None to generate one.
        taken:      Ids already issued (anything supporting `in`).
        id_factory: Source of fresh ids when none was proposed.

    Returns:
        `proposed` itself, or the first free `proposed-N` variant.
    """
    base = proposed if proposed is not None else id_factory()

    candidate = base
    counter = 1
    while candidate in taken:
        candidate = f"{base}{ID_SEPARATOR}{counter}"
        counter += 1

    return candidate
