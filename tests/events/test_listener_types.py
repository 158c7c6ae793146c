"""
Tests for orderly.events.types — event class inference from signatures.
"""

from typing import Optional

import pytest

from orderly.events import InvalidTypeError, derive_method_type, derive_parameter_type


class PingEvent:
    pass


def typed(event: PingEvent):
    pass


def string_annotated(event: "PingEvent"):
    pass


def untyped(event):
    pass


def no_params():
    pass


def optional_typed(event: Optional[PingEvent]):
    pass


def keyword_only(*, event: PingEvent):
    pass


class Service:
    def handle(self, event: PingEvent):
        pass

    def untyped(self, event):
        pass

    @staticmethod
    def static_handle(event: PingEvent):
        pass

    @classmethod
    def class_handle(cls, event: PingEvent):
        pass

    not_a_method = 42


class CallableListener:
    def __call__(self, event: PingEvent):
        pass


# ── derive_parameter_type ────────────────────────────────────

class TestDeriveParameterType:
    def test_function(self):
        assert derive_parameter_type(typed) is PingEvent

    def test_string_annotation_resolved(self):
        assert derive_parameter_type(string_annotated) is PingEvent

    def test_bound_method(self):
        assert derive_parameter_type(Service().handle) is PingEvent

    def test_callable_instance(self):
        assert derive_parameter_type(CallableListener()) is PingEvent

    def test_static_method(self):
        assert derive_parameter_type(Service.static_handle) is PingEvent

    def test_missing_annotation(self):
        with pytest.raises(InvalidTypeError, match="no annotation"):
            derive_parameter_type(untyped)

    def test_no_parameter(self):
        with pytest.raises(InvalidTypeError, match="no positional parameter"):
            derive_parameter_type(no_params)

    def test_keyword_only_parameter_not_used(self):
        with pytest.raises(InvalidTypeError):
            derive_parameter_type(keyword_only)

    def test_non_class_annotation(self):
        with pytest.raises(InvalidTypeError, match="not a class"):
            derive_parameter_type(optional_typed)

    def test_non_callable(self):
        with pytest.raises(InvalidTypeError):
            derive_parameter_type(42)

    def test_error_names_listener(self):
        with pytest.raises(InvalidTypeError, match="untyped"):
            derive_parameter_type(untyped)


# ── derive_method_type ───────────────────────────────────────

class TestDeriveMethodType:
    def test_plain_method_skips_self(self):
        assert derive_method_type(Service, "handle") is PingEvent

    def test_static_method(self):
        assert derive_method_type(Service, "static_handle") is PingEvent

    def test_class_method(self):
        assert derive_method_type(Service, "class_handle") is PingEvent

    def test_untyped_method(self):
        with pytest.raises(InvalidTypeError, match="Service.untyped"):
            derive_method_type(Service, "untyped")

    def test_missing_method(self):
        with pytest.raises(InvalidTypeError, match="Service.nope"):
            derive_method_type(Service, "nope")

    def test_attribute_that_is_not_callable(self):
        with pytest.raises(InvalidTypeError):
            derive_method_type(Service, "not_a_method")

    def test_cause_preserved(self):
        with pytest.raises(InvalidTypeError) as exc_info:
            derive_method_type(Service, "nope")
        assert isinstance(exc_info.value.cause, AttributeError)
