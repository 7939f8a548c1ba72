"""
JSON Patch (RFC 6902 operation set) applied to a flat record of known fields.

Paths address a single top-level field, e.g. "/login" or "/firstName".
Field names match case-insensitively, in camelCase or snake_case.
"""

from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

OPERATIONS = ("add", "remove", "replace", "move", "copy", "test")


class MalformedPatchError(Exception):
    """The patch document is not a list of operation objects."""


class PatchError(Exception):
    """An operation could not be applied to the target record."""


class PatchOperation(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    op: str
    path: str
    value: Any = None
    from_: str | None = Field(default=None, alias="from")

    @property
    def has_value(self) -> bool:
        return "value" in self.model_fields_set


def parse_patch_document(payload: Any) -> list[PatchOperation]:
    if not isinstance(payload, list):
        raise MalformedPatchError("A JSON Patch document must be an array of operations")
    try:
        return [PatchOperation.model_validate(item) for item in payload]
    except ValidationError as exc:
        raise MalformedPatchError(str(exc)) from exc


def _field_index(fields: Iterable[str]) -> dict[str, str]:
    index = {}
    for name in fields:
        index[name.lower()] = name
        index[to_camel(name).lower()] = name
    return index


def _resolve(index: dict[str, str], path: str | None) -> str:
    segments = (path or "").strip("/").split("/")
    if len(segments) != 1 or not segments[0]:
        raise PatchError(f"The target location specified by path '{path}' was not found.")
    name = index.get(segments[0].lower())
    if name is None:
        raise PatchError(f"The target location specified by path segment '{segments[0]}' was not found.")
    return name


def _require_value(operation: PatchOperation) -> Any:
    if not operation.has_value:
        raise PatchError(f"The 'value' property is required for '{operation.op}' operations.")
    return operation.value


def apply_patch(target: dict[str, Any], operations: Iterable[PatchOperation]) -> dict[str, Any]:
    """Apply operations in order to a copy of target. Raises PatchError on the first failure."""
    result = dict(target)
    index = _field_index(result)
    for operation in operations:
        op = operation.op.lower()
        if op not in OPERATIONS:
            raise PatchError(f"Invalid JsonPatch operation '{operation.op}'.")
        name = _resolve(index, operation.path)
        if op in ("add", "replace"):
            result[name] = _require_value(operation)
        elif op == "remove":
            # Fields cannot disappear from a fixed record; removal resets to null
            result[name] = None
        elif op == "test":
            expected = _require_value(operation)
            if result[name] != expected:
                raise PatchError(
                    f"The current value '{result[name]}' at path '{operation.path}' "
                    f"is not equal to the test value '{expected}'."
                )
        else:
            if operation.from_ is None:
                raise PatchError(f"The 'from' property is required for '{operation.op}' operations.")
            source = _resolve(index, operation.from_)
            value = result[source]
            if op == "move" and source != name:
                result[source] = None
            result[name] = value
    return result
