"""Tests for the exception hierarchy and error edge cases."""

from __future__ import annotations

import pytest

from restrictstore import (
    BaseStore,
    ConfigurationError,
    Permission,
    PermissionDenied,
    Store,
    StoreError,
)


class TestExceptionHierarchy:
    """Codes, messages and details."""

    def test_base_defaults(self) -> None:
        error = StoreError()
        assert error.code == "STORE_ERROR"
        assert error.message == "A store error occurred"
        assert error.details == {}
        assert str(error) == "A store error occurred"

    def test_base_custom_message_and_details(self) -> None:
        error = StoreError("boom", code="CUSTOM", store="x")
        assert error.code == "CUSTOM"
        assert error.details == {"store": "x"}

    def test_permission_denied_attributes(self) -> None:
        error = PermissionDenied("write", "name", "user:name")
        assert isinstance(error, StoreError)
        assert error.code == "PERMISSION_DENIED"
        assert error.operation == "write"
        assert error.field == "name"
        assert error.path == "user:name"
        assert error.details == {"operation": "write", "field": "name", "path": "user:name"}
        assert str(error) == "Not allowed to write 'name' (path 'user:name')"

    def test_configuration_error_code(self) -> None:
        assert ConfigurationError().code == "CONFIGURATION_ERROR"


class TestAbsentVersusDenied:
    """Missing data is a None result; only permissions raise."""

    def test_missing_readable_field_is_none(self) -> None:
        assert Store(default_policy=Permission.READ).read("nope") is None

    def test_missing_unreadable_field_raises(self) -> None:
        with pytest.raises(PermissionDenied):
            Store(default_policy=Permission.WRITE).read("nope")

    def test_denied_read_inside_delegated_store(self) -> None:
        inner = Store(default_policy=Permission.NONE)
        outer = Store()
        outer.define("inner", inner)
        with pytest.raises(PermissionDenied) as exc_info:
            outer.read("inner:anything:deeper")
        assert exc_info.value.field == "anything"
        assert exc_info.value.path == "inner:anything:deeper"

    def test_bulk_write_never_raises(self) -> None:
        store = Store(default_policy=Permission.NONE)
        store.write_entries({"a": 1, "default_policy": "rw"})
        assert store.default_policy is Permission.NONE

    def test_entries_of_unreadable_store_is_empty(self) -> None:
        store = Store({"a": 1})
        store.default_policy = Permission.WRITE
        assert store.entries() == {}


class TestInterface:
    def test_store_implements_base_store(self) -> None:
        assert isinstance(Store(), BaseStore)

    def test_base_store_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            BaseStore()  # type: ignore[abstract]
