"""
Orderly Event Bus — Service Containers
========================================
Service listeners are registered by name and only looked up in a
container when an event is dispatched to them. The container is the
only place listener objects get instantiated.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from orderly.events.errors import ServiceNotFoundError

logger = logging.getLogger("orderly.events")


class ServiceContainer(Protocol):
    """Minimal container contract used by ListenerProvider."""

    def has(self, name: str) -> bool:
        ...  # pragma: no cover

    def get(self, name: str) -> Any:
        ...  # pragma: no cover


class InMemoryContainer:
    """
    Dictionary-backed container.

    Services are either registered as ready instances or as
    factories. A factory runs once, on first get(), and its result
    is reused afterwards.
    """

    def __init__(self) -> None:
        self._instances: dict[str, Any] = {}
        self._factories: dict[str, Callable[[], Any]] = {}

    def add_service(self, name: str, service: Any) -> None:
        self._factories.pop(name, None)
        self._instances[name] = service

    def add_factory(self, name: str, factory: Callable[[], Any]) -> None:
        if not callable(factory):
            raise TypeError(
                f"Factory for '{name}' must be callable, "
                f"got {type(factory).__name__}."
            )
        self._instances.pop(name, None)
        self._factories[name] = factory

    def has(self, name: str) -> bool:
        return name in self._instances or name in self._factories

    def get(self, name: str) -> Any:
        if name in self._instances:
            return self._instances[name]

        factory = self._factories.pop(name, None)
        if factory is None:
            raise ServiceNotFoundError(name)

        logger.debug(f"Building service '{name}' on first use")
        service = factory()
        self._instances[name] = service
        return service
