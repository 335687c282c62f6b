"""Tests for encoding error trees into tagged documents."""

from __future__ import annotations

import json

import pytest

from faultline.codec.encoder import ErrorEncoder, encode_node
from faultline.domain.exceptions import ErrorRecord, format_timestamp
from faultline.domain.foreign import AggregateError, RangeError


class TestEncodeNode:
    """Tests for the per-node transform."""

    @pytest.mark.parametrize("value", [None, 1, 1.5, "text", True, [1], {"k": "v"}])
    def test_non_errors_pass_through(self, value) -> None:
        assert encode_node(value) is value

    def test_record_is_shallow(self) -> None:
        cause = ValueError("inner")
        document = encode_node(ErrorRecord("outer", cause=cause))
        assert document["type"] == "ErrorRecord"
        assert document["data"]["cause"] is cause

    def test_foreign_error(self) -> None:
        assert encode_node(TypeError("t")) == {"type": "TypeError", "data": {"message": "t"}}

    def test_include_stack_false_drops_record_stack(self) -> None:
        error = ErrorRecord("x")
        document = encode_node(error, include_stack=False)
        assert "stack" not in document["data"]
        assert error.stack


class TestErrorEncoder:
    """Tests for whole-structure encoding."""

    def test_record_document(self) -> None:
        error = ErrorRecord("msg", data={"k": [1, 2]})
        document = ErrorEncoder().encode(error)
        assert document == {
            "type": "ErrorRecord",
            "data": {
                "message": "msg",
                "timestamp": format_timestamp(error.timestamp),
                "data": {"k": [1, 2]},
                "cause": None,
                "stack": error.stack,
            },
        }

    def test_nested_causes_are_encoded(self) -> None:
        error = ErrorRecord("msg1", cause=ErrorRecord("msg2", cause=RangeError("msg3")))
        document = ErrorEncoder(include_stack=False).encode(error)
        middle = document["data"]["cause"]
        assert middle["type"] == "ErrorRecord"
        assert middle["data"]["message"] == "msg2"
        assert middle["data"]["cause"] == {"type": "RangeError", "data": {"message": "msg3"}}

    def test_non_error_cause_untouched(self) -> None:
        document = ErrorEncoder().encode(ErrorRecord("msg1", cause="something random"))
        assert document["data"]["cause"] == "something random"

    def test_aggregate_members_are_encoded(self) -> None:
        lookalike = {"type": "ErrorRecord", "data": {}}
        error = AggregateError("agg", [lookalike, KeyError("k")])
        document = ErrorEncoder().encode(error)
        assert document["type"] == "AggregateError"
        assert document["data"]["errors"] == [
            lookalike,
            {"type": "KeyError", "data": {"message": "k"}},
        ]

    def test_exception_group_members_are_encoded(self) -> None:
        document = ErrorEncoder(include_stack=False).encode(ExceptionGroup("g", [ErrorRecord("inner")]))
        assert document["data"]["errors"][0]["type"] == "ErrorRecord"

    def test_errors_inside_plain_containers(self) -> None:
        value = {"results": [ValueError("a"), ({"nested": ErrorRecord("b")},)]}
        document = ErrorEncoder(include_stack=False).encode(value)
        assert document["results"][0] == {"type": "ValueError", "data": {"message": "a"}}
        assert document["results"][1][0]["nested"]["type"] == "ErrorRecord"

    def test_errors_inside_data_bag(self) -> None:
        error = ErrorRecord("outer", data={"attempts": [TypeError("first")]})
        document = ErrorEncoder(include_stack=False).encode(error)
        assert document["data"]["data"]["attempts"] == [{"type": "TypeError", "data": {"message": "first"}}]

    def test_output_is_json_serializable(self) -> None:
        error = ErrorRecord("msg", cause=ExceptionGroup("g", [ValueError("v")]))
        json.dumps(ErrorEncoder().encode(error))

    def test_input_is_not_mutated(self) -> None:
        data = {"inner": ValueError("v")}
        error = ErrorRecord("msg", data=data)
        ErrorEncoder().encode(error)
        assert isinstance(data["inner"], ValueError)

    def test_deterministic(self) -> None:
        error = ErrorRecord("msg", data={"b": 1, "a": 2}, cause=ValueError("v"))
        encoder = ErrorEncoder()
        assert json.dumps(encoder.encode(error)) == json.dumps(encoder.encode(error))

    def test_shared_cause_is_not_a_cycle(self) -> None:
        shared = ValueError("shared")
        document = ErrorEncoder().encode([ErrorRecord("a", cause=shared), ErrorRecord("b", cause=shared)])
        assert document[0]["data"]["cause"] == document[1]["data"]["cause"]

    def test_cause_cycle_detected(self) -> None:
        first = ErrorRecord("first")
        second = ErrorRecord("second", cause=first)
        first.cause = second
        with pytest.raises(ValueError, match="Circular reference detected"):
            ErrorEncoder().encode(first)

    def test_container_cycle_detected(self) -> None:
        items: list = []
        items.append(items)
        with pytest.raises(ValueError, match="Circular reference detected"):
            ErrorEncoder().encode(items)
