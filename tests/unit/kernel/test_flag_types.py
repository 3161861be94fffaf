"""Unit tests for kernel flag types, value equality and errors."""

from __future__ import annotations

import copy
from datetime import UTC, datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fflags.kernel.errors import (
    FilterHookError,
    FlagDecodeError,
    FlagsError,
    InfrastructureError,
    StoreQueryError,
)
from fflags.kernel.flags import FlagKind, FlagRecord, values_equal

flag_values = st.one_of(
    st.text(),
    st.integers(),
    st.floats(allow_nan=False),
    st.booleans(),
    st.lists(st.text(), max_size=6),
)


# ---------------------------------------------------------------------------
# FlagRecord
# ---------------------------------------------------------------------------


class TestFlagRecord:
    def test_from_document_minimal(self) -> None:
        record = FlagRecord.from_document({"_id": "dark_mode", "type": "fast", "value": True})
        assert record.id == "dark_mode"
        assert record.kind is FlagKind.FAST
        assert record.value is True
        assert record.attributes == {}
        assert record.tags == ()

    def test_from_document_with_metadata(self) -> None:
        created = datetime(2026, 1, 1, tzinfo=UTC)
        record = FlagRecord.from_document(
            {
                "_id": "regions",
                "type": "dynamic",
                "value": ["eu", "us"],
                "createdAt": created,
                "env": ["prod", "staging"],
                "tags": ["geo"],
                "description": "Enabled regions",
                "attributes": {"owner": "payments"},
            }
        )
        assert record.kind is FlagKind.DYNAMIC
        assert record.created_at == created
        assert record.env == ["prod", "staging"]
        assert record.tags == ("geo",)
        assert record.description == "Enabled regions"
        assert record.attributes == {"owner": "payments"}

    @pytest.mark.parametrize("missing", ["_id", "type", "value"])
    def test_missing_required_field_raises(self, missing: str) -> None:
        doc = {"_id": "x", "type": "fast", "value": 1}
        del doc[missing]
        with pytest.raises(FlagDecodeError, match=missing):
            FlagRecord.from_document(doc)

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(FlagDecodeError, match="Unknown flag type"):
            FlagRecord.from_document({"_id": "x", "type": "slow", "value": 1})

    def test_to_document_omits_unset_metadata(self) -> None:
        doc = FlagRecord(id="limit", kind=FlagKind.DYNAMIC, value=5).to_document()
        assert doc == {"_id": "limit", "type": "dynamic", "value": 5, "attributes": {}}

    def test_document_round_trip_keeps_metadata(self) -> None:
        record = FlagRecord(
            id="limit",
            kind=FlagKind.FAST,
            value=5,
            tags=("a",),
            description="d",
            attributes={"k": 1},
        )
        assert FlagRecord.from_document(record.to_document()) == record

    def test_frozen(self) -> None:
        record = FlagRecord(id="x", kind=FlagKind.FAST, value=1)
        with pytest.raises((AttributeError, TypeError)):
            record.value = 2  # type: ignore[misc]


# ---------------------------------------------------------------------------
# values_equal
# ---------------------------------------------------------------------------


class TestValuesEqual:
    def test_scalars(self) -> None:
        assert values_equal(5, 5)
        assert not values_equal(5, 7)
        assert values_equal("on", "on")

    def test_int_and_float_are_numerically_equal(self) -> None:
        assert values_equal(1, 1.0)

    def test_bool_never_equals_number(self) -> None:
        assert not values_equal(True, 1)
        assert not values_equal(0, False)

    def test_lists_compare_structurally(self) -> None:
        assert values_equal(["a", "b"], ["a", "b"])
        assert not values_equal(["a", "b"], ["b", "a"])
        assert not values_equal(["a"], ["a", "b"])

    def test_list_never_equals_scalar(self) -> None:
        assert not values_equal(["a"], "a")
        assert not values_equal("ab", ["a", "b"])

    @given(flag_values)
    def test_value_equals_its_deep_copy(self, value: object) -> None:
        assert values_equal(value, copy.deepcopy(value))

    @given(flag_values, flag_values)
    def test_symmetric(self, a: object, b: object) -> None:
        assert values_equal(a, b) == values_equal(b, a)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_store_query_error_detail(self) -> None:
        cause = RuntimeError("socket closed")
        err = StoreQueryError("dynamic", filter={"type": "dynamic"}, cause=cause)
        assert isinstance(err, InfrastructureError)
        assert err.code == "store_query_error"
        assert err.detail == {"kind": "dynamic", "filter": {"type": "dynamic"}}
        assert err.__cause__ is cause
        assert "socket closed" in err.to_dict()["cause"]

    def test_filter_hook_error(self) -> None:
        err = FilterHookError(["not", "a", "mapping"])
        assert isinstance(err, FlagsError)
        assert err.code == "invalid_filter_hook_result"
        assert "list" in err.message

    def test_str_is_json(self) -> None:
        import json

        payload = json.loads(str(FlagsError("boom", code="custom")))
        assert payload == {"code": "custom", "message": "boom", "detail": {}}
