"""
Orderly Event Bus — Listener Provider
=======================================
Controls which listeners receive which events, and in what order.

Every listener lives in ONE OrderedCollection per provider, so a
listener for one event class can be ordered before/after a listener
for another. Filtering by event class happens at lookup time.

Rules:
- Listeners are callables taking the event as first argument
- Event class defaults to the first parameter's annotation
- Ids default to the listener's dotted name; duplicates get -1, -2, ...
- Service listeners are resolved from the container at dispatch time
- In-memory only, single writer, no removal
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from orderly.config.settings import DEFAULT_SETTINGS, OrderlySettings
from orderly.events.container import ServiceContainer
from orderly.events.errors import ContainerMissingError, InvalidListenerError
from orderly.events.proxy import ListenerProxy
from orderly.events.types import derive_method_type, derive_parameter_type
from orderly.ordering.collection import OrderedCollection
from orderly.ordering.ids import IdFactory

logger = logging.getLogger("orderly.events")

Listener = Callable[[Any], Any]


# ══════════════════════════════════════════════════════════════
# LISTENER RECORDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ListenerEntry:
    """A listener and the event class it accepts."""

    listener: Listener
    event_type: type

    def accepts(self, event: object) -> bool:
        return isinstance(event, self.event_type)


class ServiceListener:
    """
    Deferred `container.get(service_name).method_name`.

    The service is not touched until the first event arrives.
    """

    def __init__(
        self, container: ServiceContainer, service_name: str, method_name: str
    ):
        self.container = container
        self.service_name = service_name
        self.method_name = method_name

    def __call__(self, event: Any) -> Any:
        service = self.container.get(self.service_name)
        return getattr(service, self.method_name)(event)

    def __repr__(self) -> str:
        return f"ServiceListener({self.service_name!r}, {self.method_name!r})"


def derive_listener_id(listener: Listener) -> Optional[str]:
    """
    Stable id for named functions and bound methods.

    Lambdas, locally defined functions and callable instances have
    no stable name; None lets the collection generate one.
    """
    if inspect.ismethod(listener):
        owner = listener.__self__
        owner_class = owner if inspect.isclass(owner) else type(owner)
        return (
            f"{owner_class.__module__}.{owner_class.__qualname__}."
            f"{listener.__name__}"
        )

    if inspect.isfunction(listener):
        if "<" in listener.__qualname__:
            return None
        return f"{listener.__module__}.{listener.__qualname__}"

    return None


# ══════════════════════════════════════════════════════════════
# LISTENER PROVIDER
# ══════════════════════════════════════════════════════════════

class ListenerProvider:
    """
    Ordered registry of event listeners.

    Usage:
        provider = ListenerProvider(container)

        provider.add_listener(audit_order, priority=100)
        provider.add_listener_before("app.audit_order", validate_order)
        provider.add_listener_service("mailer", "on_order", OrderPlaced)

        for listener in provider.get_listeners_for_event(event):
            listener(event)
    """

    def __init__(
        self,
        container: Optional[ServiceContainer] = None,
        settings: Optional[OrderlySettings] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        self._container = container
        self._settings = settings or DEFAULT_SETTINGS
        self._listeners: OrderedCollection[ListenerEntry] = OrderedCollection(
            id_factory=id_factory
        )

    @property
    def settings(self) -> OrderlySettings:
        return self._settings

    # ══════════════════════════════════════════════════════════
    # CALLABLE LISTENERS
    # ══════════════════════════════════════════════════════════

    def add_listener(
        self,
        listener: Listener,
        priority: Optional[int] = None,
        id: Optional[str] = None,
        event_type: Optional[type] = None,
    ) -> str:
        """
        Register a listener at a numeric priority.

        Args:
            listener:   Callable taking the event.
            priority:   Higher runs earlier. Defaults to settings.
            id:         Requested id. Defaults to the listener's name.
            event_type: Event class. Defaults to the derived type.

        Returns:
            Opaque listener id, usable as a pivot by later listeners.

        Raises:
            InvalidListenerError: listener is not callable.
            InvalidTypeError:     event_type omitted and not derivable.
        """
        entry = self._entry(listener, event_type)
        if priority is None:
            priority = self._settings.default_priority

        listener_id = self._listeners.add_item(
            entry, priority, self._default_id(listener, id)
        )
        self._log_registered(listener_id, entry, f"priority {priority}")
        return listener_id

    def add_listener_before(
        self,
        pivot_id: str,
        listener: Listener,
        id: Optional[str] = None,
        event_type: Optional[type] = None,
    ) -> str:
        """
        Register a listener that runs before `pivot_id`.

        Only the order relative to the pivot is guaranteed. An unknown
        pivot surfaces as MissingItemError at lookup time.
        """
        entry = self._entry(listener, event_type)
        listener_id = self._listeners.add_item_before(
            pivot_id, entry, self._default_id(listener, id)
        )
        self._log_registered(listener_id, entry, f"before '{pivot_id}'")
        return listener_id

    def add_listener_after(
        self,
        pivot_id: str,
        listener: Listener,
        id: Optional[str] = None,
        event_type: Optional[type] = None,
    ) -> str:
        """Register a listener that runs after `pivot_id`."""
        entry = self._entry(listener, event_type)
        listener_id = self._listeners.add_item_after(
            pivot_id, entry, self._default_id(listener, id)
        )
        self._log_registered(listener_id, entry, f"after '{pivot_id}'")
        return listener_id

    # ══════════════════════════════════════════════════════════
    # SERVICE LISTENERS (lazy)
    # ══════════════════════════════════════════════════════════

    def add_listener_service(
        self,
        service_name: str,
        method_name: str,
        event_type: type,
        priority: Optional[int] = None,
        id: Optional[str] = None,
    ) -> str:
        """
        Register `service_name.method_name` from the container.

        The service is fetched only when an event reaches it.
        Default id: "{service_name}-{method_name}".

        Raises:
            ContainerMissingError: Provider has no container.
        """
        entry = self._service_entry(service_name, method_name, event_type)
        if priority is None:
            priority = self._settings.default_priority

        listener_id = self._listeners.add_item(
            entry, priority, id or f"{service_name}-{method_name}"
        )
        self._log_registered(listener_id, entry, f"priority {priority}")
        return listener_id

    def add_listener_service_before(
        self,
        pivot_id: str,
        service_name: str,
        method_name: str,
        event_type: type,
        id: Optional[str] = None,
    ) -> str:
        entry = self._service_entry(service_name, method_name, event_type)
        listener_id = self._listeners.add_item_before(
            pivot_id, entry, id or f"{service_name}-{method_name}"
        )
        self._log_registered(listener_id, entry, f"before '{pivot_id}'")
        return listener_id

    def add_listener_service_after(
        self,
        pivot_id: str,
        service_name: str,
        method_name: str,
        event_type: type,
        id: Optional[str] = None,
    ) -> str:
        entry = self._service_entry(service_name, method_name, event_type)
        listener_id = self._listeners.add_item_after(
            pivot_id, entry, id or f"{service_name}-{method_name}"
        )
        self._log_registered(listener_id, entry, f"after '{pivot_id}'")
        return listener_id

    def add_subscriber(self, service_class: type, service_name: str) -> list[str]:
        """
        Register every listener method of a subscriber class.

        1. If the class defines register_listeners(proxy), it is called
           with a ListenerProxy for explicit priorities/pivots.
        2. Every remaining public method starting with the configured
           prefix ("on" by default) is registered at default priority,
           event class derived from its signature.

        Returns:
            Ids of all listeners registered, explicit ones first.
        """
        proxy = ListenerProxy(self, service_name, service_class)

        register = getattr(service_class, "register_listeners", None)
        if callable(register):
            register(proxy)

        ids = list(proxy.registered_ids)
        prefix = self._settings.subscriber_prefix

        for method_name in self._public_method_names(service_class):
            if not method_name.startswith(prefix):
                continue
            if method_name in proxy.registered_methods:
                continue
            event_type = derive_method_type(service_class, method_name)
            ids.append(
                self.add_listener_service(service_name, method_name, event_type)
            )

        logger.info(
            f"Subscriber registered: {service_class.__qualname__} as "
            f"'{service_name}' ({len(ids)} listeners)"
        )
        return ids

    # ══════════════════════════════════════════════════════════
    # LOOKUP
    # ══════════════════════════════════════════════════════════

    def get_listeners_for_event(self, event: object) -> Iterator[Listener]:
        """
        Listeners accepting `event`, in resolved priority order.

        Raises:
            MissingItemError: A before/after pivot was never registered.
            PivotCycleError:  Before/after pivots form a cycle.
        """
        entries = iter(self._listeners)
        return (entry.listener for entry in entries if entry.accepts(event))

    def has_listener(self, listener_id: str) -> bool:
        return listener_id in self._listeners

    def listener_count(self) -> int:
        return len(self._listeners)

    # ══════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════

    @staticmethod
    def _entry(listener: Listener, event_type: Optional[type]) -> ListenerEntry:
        if not callable(listener):
            raise InvalidListenerError(listener)
        return ListenerEntry(
            listener=listener,
            event_type=event_type or derive_parameter_type(listener),
        )

    def _service_entry(
        self, service_name: str, method_name: str, event_type: type
    ) -> ListenerEntry:
        if self._container is None:
            raise ContainerMissingError()
        return ListenerEntry(
            listener=ServiceListener(self._container, service_name, method_name),
            event_type=event_type,
        )

    @staticmethod
    def _default_id(listener: Listener, id: Optional[str]) -> Optional[str]:
        return id if id is not None else derive_listener_id(listener)

    @staticmethod
    def _public_method_names(service_class: type) -> list[str]:
        names: dict[str, None] = {}
        for klass in service_class.__mro__:
            if klass is object:
                continue
            for name in vars(klass):
                if name.startswith("_") or name == "register_listeners":
                    continue
                if callable(getattr(service_class, name, None)):
                    names.setdefault(name)
        return list(names)

    @staticmethod
    def _log_registered(
        listener_id: str, entry: ListenerEntry, position: str
    ) -> None:
        logger.info(
            f"Listener registered: {listener_id} → "
            f"{entry.event_type.__qualname__} ({position})"
        )
