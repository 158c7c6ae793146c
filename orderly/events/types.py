"""
Orderly Event Bus — Listener Type Inference
=============================================
A listener declares the event it handles through the annotation of
its first positional parameter:

    def on_order_placed(event: OrderPlaced) -> None: ...

The derived class is only a default for the registry's event_type
argument; it never affects ordering.
"""

from __future__ import annotations

import inspect
import typing
from typing import Any, Callable

from orderly.events.errors import InvalidTypeError

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _first_parameter_type(func: Callable[..., Any], skip_first: bool) -> type:
    """Resolve the annotation of the first (or second) positional param."""
    signature = inspect.signature(func)
    params = [p for p in signature.parameters.values() if p.kind in _POSITIONAL]
    if skip_first:
        params = params[1:]
    if not params:
        raise ValueError("listener takes no positional parameter")

    param = params[0]
    target = getattr(func, "__func__", func)
    try:
        hints = typing.get_type_hints(target)
    except NameError as exc:
        raise ValueError(f"unresolvable annotation ({exc})") from exc

    annotation = hints.get(param.name, inspect.Parameter.empty)
    if annotation is inspect.Parameter.empty:
        raise ValueError(f"parameter '{param.name}' has no annotation")
    if not isinstance(annotation, type):
        raise ValueError(
            f"annotation of '{param.name}' is {annotation!r}, not a class"
        )
    return annotation


def derive_parameter_type(listener: Callable[..., Any]) -> type:
    """
    Event class a callable listener accepts.

    Works for functions, bound methods and instances defining __call__.

    Raises:
        InvalidTypeError: No usable annotation on the first parameter.
    """
    if not callable(listener):
        raise InvalidTypeError.from_callable(listener)

    func = listener
    if not (inspect.isroutine(listener) or inspect.isclass(listener)):
        func = listener.__call__

    try:
        return _first_parameter_type(func, skip_first=False)
    except (TypeError, ValueError) as exc:
        raise InvalidTypeError.from_callable(listener, exc) from exc


def derive_method_type(service_class: type, method_name: str) -> type:
    """
    Event class accepted by `service_class.method_name`.

    The method is inspected on the class, without an instance, so
    `self` is skipped for plain methods.

    Raises:
        InvalidTypeError: Missing method or no usable annotation.
    """
    try:
        raw = inspect.getattr_static(service_class, method_name)
    except AttributeError as exc:
        raise InvalidTypeError.from_class_method(
            service_class, method_name, exc
        ) from exc

    # Plain functions looked up on the class still expect self;
    # static methods take no receiver, class methods come back bound.
    skip_self = not isinstance(raw, (staticmethod, classmethod))
    method = getattr(service_class, method_name)

    try:
        return _first_parameter_type(method, skip_first=skip_self)
    except (TypeError, ValueError) as exc:
        raise InvalidTypeError.from_class_method(
            service_class, method_name, exc
        ) from exc
