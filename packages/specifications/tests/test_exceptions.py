"""Tests for exceptions module."""

from __future__ import annotations

from gridfilter_core.primitives.exceptions import GridFilterError
from gridfilter_specifications.exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    SpecificationError,
    ValidationError,
)

# -- OperatorNotFoundError ---------------------------------------------------


def test_operator_not_found_fuzzy_suggestion():
    err = OperatorNotFoundError("contians", ["contains", "=", "!="])
    assert "contians" in str(err)
    assert "Did you mean: contains" in str(err)


def test_operator_not_found_no_matches():
    err = OperatorNotFoundError("zzzzz", ["=", ">", "<"])
    d = err.to_dict()
    assert d["error"] == "OPERATOR_NOT_FOUND"
    assert d["suggestions"] == []
    assert d["valid_operators"] == ["<", "=", ">"]


# -- FieldNotFoundError ------------------------------------------------------


def test_field_not_found_fuzzy():
    err = FieldNotFoundError(
        invalid_field="Mesage",
        model_name="LogEntry",
        available_fields=["Id", "Message", "TimeStamp"],
    )
    message = str(err)
    assert "Invalid field 'Mesage' on 'LogEntry'." in message
    assert "• Message" in message
    assert err.to_dict()["suggestions"] == ["Message"]


def test_field_not_found_long_field_list_is_truncated():
    fields = [f"field_{i:02d}" for i in range(20)]
    err = FieldNotFoundError("zzz", "Wide", fields)
    assert str(err).endswith(", ...")
    assert err.to_dict()["available_fields"] == fields


# -- hierarchy ---------------------------------------------------------------


def test_hierarchy():
    assert issubclass(ValidationError, SpecificationError)
    assert issubclass(SpecificationError, GridFilterError)


def test_validation_error_to_dict():
    err = ValidationError("bad", path="<root>.conditions[0]")
    assert err.to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "bad",
        "path": "<root>.conditions[0]",
    }


def test_base_to_dict():
    err = SpecificationError("boom")
    assert err.to_dict() == {"error": "SpecificationError", "message": "boom"}
