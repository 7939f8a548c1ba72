"""
Explicit payload validation: parse a raw JSON value into a DTO or collect field errors.
Error keys are PascalCase field names, messages are human readable.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.errors import FieldErrors, UnprocessableEntityError, add_error, pascal_case

ModelT = TypeVar("ModelT", bound=BaseModel)


def _message(error: dict) -> str:
    field = pascal_case(str(error["loc"][0])) if error.get("loc") else "Value"
    if error["type"] in ("missing", "none_required") or (error["type"] == "string_type" and error.get("input") is None):
        return f"The {field} field is required."
    if error["type"] == "value_error":
        # pydantic prefixes messages raised from validators
        return str(error["ctx"]["error"]) if "ctx" in error else error["msg"]
    return error["msg"]


def field_errors(exc: ValidationError) -> FieldErrors:
    errors: FieldErrors = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        key = pascal_case(str(loc[0])) if loc else "Body"
        add_error(errors, key, _message(error))
    return errors


def validate_payload(model: type[ModelT], payload: Any) -> ModelT:
    """Validate a decoded JSON body against model. Raises UnprocessableEntityError."""
    if not isinstance(payload, dict):
        raise UnprocessableEntityError({"Body": [f"Expected a JSON object for {model.__name__}."]})
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise UnprocessableEntityError(field_errors(exc)) from exc
