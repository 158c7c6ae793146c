"""
Orderly Event Bus — Listener Proxy
====================================
Registration helper bound to one service. A subscriber class uses it
to register its methods with explicit priorities or pivots, without
knowing its own service name or the provider's API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from orderly.events.types import derive_method_type

if TYPE_CHECKING:
    from orderly.events.registry import ListenerProvider


class ListenerProxy:
    """
    Forwards `method_name` registrations to the provider as service
    listeners of `service_name`.

    Usage:
        class OrderSubscriber:
            @classmethod
            def register_listeners(cls, proxy: ListenerProxy) -> None:
                proxy.add_listener("audit", priority=100)
                proxy.add_listener_before("mailer-send", "validate")
    """

    def __init__(
        self,
        provider: ListenerProvider,
        service_name: str,
        service_class: type,
    ):
        self._provider = provider
        self._service_name = service_name
        self._service_class = service_class
        self._registered_methods: list[str] = []
        self._registered_ids: list[str] = []

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def registered_methods(self) -> list[str]:
        """Method names registered through this proxy, in order."""
        return list(self._registered_methods)

    @property
    def registered_ids(self) -> list[str]:
        return list(self._registered_ids)

    def add_listener(
        self,
        method_name: str,
        priority: Optional[int] = None,
        id: Optional[str] = None,
        event_type: Optional[type] = None,
    ) -> str:
        """
        Register a method of the service at a numeric priority.

        Raises:
            InvalidTypeError: event_type omitted and the method's first
                              parameter has no usable annotation.
        """
        event_type = event_type or self._method_type(method_name)
        listener_id = self._provider.add_listener_service(
            self._service_name, method_name, event_type, priority, id
        )
        return self._record(method_name, listener_id)

    def add_listener_before(
        self,
        pivot_id: str,
        method_name: str,
        id: Optional[str] = None,
        event_type: Optional[type] = None,
    ) -> str:
        """Register a method of the service to run before `pivot_id`."""
        event_type = event_type or self._method_type(method_name)
        listener_id = self._provider.add_listener_service_before(
            pivot_id, self._service_name, method_name, event_type, id
        )
        return self._record(method_name, listener_id)

    def add_listener_after(
        self,
        pivot_id: str,
        method_name: str,
        id: Optional[str] = None,
        event_type: Optional[type] = None,
    ) -> str:
        """Register a method of the service to run after `pivot_id`."""
        event_type = event_type or self._method_type(method_name)
        listener_id = self._provider.add_listener_service_after(
            pivot_id, self._service_name, method_name, event_type, id
        )
        return self._record(method_name, listener_id)

    def _method_type(self, method_name: str) -> type:
        return derive_method_type(self._service_class, method_name)

    def _record(self, method_name: str, listener_id: str) -> str:
        self._registered_methods.append(method_name)
        self._registered_ids.append(listener_id)
        return listener_id
