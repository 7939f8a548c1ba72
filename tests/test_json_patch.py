"""
JSON Patch tests - operation semantics on a flat record.
"""

import pytest

from app.services.json_patch import (
    MalformedPatchError,
    PatchError,
    apply_patch,
    parse_patch_document,
)


@pytest.fixture
def record() -> dict:
    return {"first_name": "John", "last_name": "Doe", "login": "jdoe"}


def ops(*items: dict):
    return parse_patch_document(list(items))


def test_replace_by_camel_case_path(record):
    result = apply_patch(record, ops({"op": "replace", "path": "/firstName", "value": "Ann"}))
    assert result["first_name"] == "Ann"


def test_paths_match_case_insensitively_and_snake_case(record):
    result = apply_patch(
        record,
        ops(
            {"op": "replace", "path": "/LOGIN", "value": "ann"},
            {"op": "add", "path": "/last_name", "value": "Lee"},
        ),
    )
    assert result == {"first_name": "John", "last_name": "Lee", "login": "ann"}


def test_remove_resets_to_none(record):
    result = apply_patch(record, ops({"op": "remove", "path": "/lastName"}))
    assert result["last_name"] is None
    assert "last_name" in result


def test_replace_with_explicit_null(record):
    result = apply_patch(record, ops({"op": "replace", "path": "/firstName", "value": None}))
    assert result["first_name"] is None


def test_copy_and_move(record):
    copied = apply_patch(record, ops({"op": "copy", "from": "/login", "path": "/firstName"}))
    assert copied["first_name"] == "jdoe"
    assert copied["login"] == "jdoe"

    moved = apply_patch(record, ops({"op": "move", "from": "/firstName", "path": "/lastName"}))
    assert moved["last_name"] == "John"
    assert moved["first_name"] is None


def test_move_onto_itself_keeps_value(record):
    result = apply_patch(record, ops({"op": "move", "from": "/login", "path": "/login"}))
    assert result["login"] == "jdoe"


def test_test_operation(record):
    assert apply_patch(record, ops({"op": "test", "path": "/login", "value": "jdoe"})) == record
    with pytest.raises(PatchError, match="not equal to the test value"):
        apply_patch(record, ops({"op": "test", "path": "/login", "value": "other"}))


def test_operations_apply_in_order(record):
    result = apply_patch(
        record,
        ops(
            {"op": "replace", "path": "/login", "value": "first"},
            {"op": "test", "path": "/login", "value": "first"},
            {"op": "replace", "path": "/login", "value": "second"},
        ),
    )
    assert result["login"] == "second"


def test_input_record_is_not_mutated(record):
    apply_patch(record, ops({"op": "replace", "path": "/login", "value": "changed"}))
    assert record["login"] == "jdoe"


@pytest.mark.parametrize(
    "operation, message",
    [
        ({"op": "frobnicate", "path": "/login", "value": "x"}, "Invalid JsonPatch operation"),
        ({"op": "replace", "path": "/email", "value": "x"}, "path segment 'email' was not found"),
        ({"op": "replace", "path": "/login/0", "value": "x"}, "was not found"),
        ({"op": "replace", "path": "/", "value": "x"}, "was not found"),
        ({"op": "replace", "path": "/login"}, "'value' property is required"),
        ({"op": "copy", "path": "/login"}, "'from' property is required"),
        ({"op": "move", "from": "/nope", "path": "/login"}, "path segment 'nope' was not found"),
    ],
)
def test_invalid_operations(record, operation, message):
    with pytest.raises(PatchError, match=message):
        apply_patch(record, ops(operation))


@pytest.mark.parametrize("payload", [{"op": "replace"}, "replace", [{"path": "/login"}], [42]])
def test_malformed_documents(payload):
    with pytest.raises(MalformedPatchError):
        parse_patch_document(payload)


def test_empty_document_is_a_no_op(record):
    assert apply_patch(record, parse_patch_document([])) == record
