"""
Orderly Event Bus — Public API
================================
Listeners register in order. Events are heard in that order.
"""

from orderly.events.container import InMemoryContainer, ServiceContainer
from orderly.events.dispatcher import (
    DispatchResult,
    Dispatcher,
    StoppableEvent,
    StoppableEventMixin,
    dispatch,
)
from orderly.events.errors import (
    ContainerMissingError,
    EventBusError,
    InvalidListenerError,
    InvalidTypeError,
    ServiceNotFoundError,
)
from orderly.events.proxy import ListenerProxy
from orderly.events.registry import (
    ListenerEntry,
    ListenerProvider,
    ServiceListener,
    derive_listener_id,
)
from orderly.events.types import derive_method_type, derive_parameter_type

__all__ = [
    "dispatch",
    "Dispatcher",
    "DispatchResult",
    "StoppableEvent",
    "StoppableEventMixin",
    "ListenerProvider",
    "ListenerEntry",
    "ListenerProxy",
    "ServiceListener",
    "derive_listener_id",
    "derive_parameter_type",
    "derive_method_type",
    "ServiceContainer",
    "InMemoryContainer",
    "EventBusError",
    "ContainerMissingError",
    "ServiceNotFoundError",
    "InvalidTypeError",
    "InvalidListenerError",
]
