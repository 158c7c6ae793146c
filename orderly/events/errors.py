"""
Orderly Event Bus — Errors
============================
Error types for listener registration and dispatch.
Separate from ordering errors: the bus routes, the collection orders.
"""

from typing import Optional


class EventBusError(Exception):
    """Base error for event bus operations."""
    pass


class InvalidListenerError(EventBusError):
    """Registered listener is not callable."""

    def __init__(self, listener: object):
        self.listener = listener
        super().__init__(
            f"Listener must be callable, got {type(listener).__name__}."
        )


class ContainerMissingError(EventBusError):
    """Service listener registered on a provider without a container."""

    def __init__(self):
        super().__init__(
            "Cannot register a service listener: the provider was "
            "created without a service container."
        )


class ServiceNotFoundError(EventBusError):
    """Container has no service under the requested name."""

    def __init__(self, service_name: str):
        self.service_name = service_name
        super().__init__(
            f"Service '{service_name}' is not defined in the container."
        )


class InvalidTypeError(EventBusError):
    """Event type of a listener cannot be derived from its signature."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)

    @classmethod
    def from_callable(
        cls, listener: object, cause: Optional[Exception] = None
    ) -> "InvalidTypeError":
        name = getattr(listener, "__qualname__", type(listener).__qualname__)
        detail = f": {cause}" if cause else ""
        return cls(
            f"Cannot derive the event type of listener '{name}'. "
            f"Annotate its first parameter with an event class{detail}",
            cause,
        )

    @classmethod
    def from_class_method(
        cls, service_class: type, method_name: str,
        cause: Optional[Exception] = None,
    ) -> "InvalidTypeError":
        detail = f": {cause}" if cause else ""
        return cls(
            f"Cannot derive the event type of "
            f"'{service_class.__qualname__}.{method_name}'. "
            f"Annotate its first parameter with an event class{detail}",
            cause,
        )
