"""
Orderly Event Bus — Dispatcher
================================
Routes an event to its listeners in resolved priority order.

Dispatch behavior:
1. Ask the provider for the event's listeners (ordering resolved here)
2. Before each listener, stop if the event's propagation was stopped
3. Execute the listener
4. On listener failure: log it, then re-raise or record and continue,
   depending on settings.propagate_listener_errors

Ordering failures (MissingItemError, PivotCycleError) always propagate:
a registry that cannot be ordered must not be half-dispatched.

This module does NOT:
- Register listeners
- Instantiate services (the container does, via ServiceListener)
- Modify events
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from orderly.config.settings import OrderlySettings
from orderly.events.registry import ListenerProvider

logger = logging.getLogger("orderly.events")


# ══════════════════════════════════════════════════════════════
# STOPPABLE EVENTS
# ══════════════════════════════════════════════════════════════

class StoppableEvent(Protocol):
    """An event that can tell the dispatcher to skip remaining listeners."""

    def is_propagation_stopped(self) -> bool:
        ...  # pragma: no cover


class StoppableEventMixin:
    """Adds stop_propagation() / is_propagation_stopped() to an event."""

    _propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        self._propagation_stopped = True

    def is_propagation_stopped(self) -> bool:
        return self._propagation_stopped


def _is_stopped(event: Any) -> bool:
    check = getattr(event, "is_propagation_stopped", None)
    return callable(check) and bool(check())


def _listener_name(listener: Any) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)


# ══════════════════════════════════════════════════════════════
# DISPATCH
# ══════════════════════════════════════════════════════════════

@dataclass
class DispatchResult:
    """Outcome of one dispatch() call."""

    event: Any
    listeners_notified: int = 0
    listeners_failed: int = 0
    failures: list[dict] = field(default_factory=list)
    stopped: bool = False


def dispatch(
    event: Any,
    provider: ListenerProvider,
    settings: Optional[OrderlySettings] = None,
) -> DispatchResult:
    """
    Dispatch an event to every listener the provider returns for it.

    Args:
        event:    Any object; listeners are matched by isinstance.
        provider: ListenerProvider holding the listeners.
        settings: Overrides provider.settings for this call.

    Returns:
        DispatchResult with counts, recorded failures and stop flag.

    Raises:
        MissingItemError / PivotCycleError: Listener order unresolvable.
        Exception: A listener failed and propagate_listener_errors is set.
    """
    settings = settings or provider.settings
    event_name = type(event).__qualname__
    result = DispatchResult(event=event)

    for listener in provider.get_listeners_for_event(event):
        if _is_stopped(event):
            result.stopped = True
            logger.debug(f"Propagation stopped for {event_name}")
            break

        listener_name = _listener_name(listener)

        try:
            listener(event)
            result.listeners_notified += 1
            logger.debug(f"Dispatched {event_name} → {listener_name}")

        except Exception as exc:
            logger.error(
                f"Listener failed: {listener_name} for {event_name}: {exc}",
                exc_info=True,
            )
            if settings.propagate_listener_errors:
                raise

            result.listeners_failed += 1
            result.failures.append({
                "listener": listener_name,
                "error": str(exc),
                "error_type": type(exc).__name__,
            })

    logger.info(
        f"Dispatch complete: {event_name} — "
        f"{result.listeners_notified} notified, "
        f"{result.listeners_failed} failed"
        f"{', stopped' if result.stopped else ''}"
    )

    return result


class Dispatcher:
    """
    Object form of dispatch() bound to one provider.

    dispatch() returns the event itself, so listeners can use it to
    collect results.
    """

    def __init__(
        self,
        provider: ListenerProvider,
        settings: Optional[OrderlySettings] = None,
    ):
        self._provider = provider
        self._settings = settings

    @property
    def provider(self) -> ListenerProvider:
        return self._provider

    def dispatch(self, event: Any) -> Any:
        dispatch(event, self._provider, self._settings)
        return event
