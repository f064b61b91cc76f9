"""
crudkit — Validator Helpers
=============================

What:  The validator calling convention plus two ready-made validators.
How:   A validator is a synchronous callable ``(data) -> issue | None``.
       describe_issue() normalizes whatever a validator returned into a
       ValidationIssue (or None when the data is acceptable).

Accepted issue shapes:
    - ValidationIssue(message, field)
    - an exception instance (its str() is the message)
    - any object with a ``message`` attribute
    - a mapping with a "message" key
    - a non-empty string (used as the message)
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

Validator = Callable[[Any], Any]


@dataclass(frozen=True)
class ValidationIssue:
    """Why a validator rejected its input."""

    message: str
    field: Optional[str] = None


def describe_issue(result: Any) -> Optional[ValidationIssue]:
    """
    Normalize a validator's return value.

    Returns:
        None when the validator reported no error, a ValidationIssue otherwise.

    Raises:
        TypeError: The validator returned something that is not an issue shape.
    """
    if not result:
        return None
    if isinstance(result, ValidationIssue):
        return result
    if isinstance(result, str):
        return ValidationIssue(result)
    if isinstance(result, Mapping):
        if "message" not in result:
            raise TypeError("Validator returned a mapping without a 'message' key")
        return ValidationIssue(str(result["message"]), result.get("field"))
    if isinstance(result, BaseException):
        return ValidationIssue(str(result), getattr(result, "field", None))
    if hasattr(result, "message"):
        return ValidationIssue(str(result.message), getattr(result, "field", None))
    raise TypeError(f"Unsupported validator result: {type(result).__name__}")


def schema_validator(schema: Type[BaseModel]) -> Validator:
    """
    Build a validator from a pydantic model.

    The first pydantic error becomes the issue, formatted as
    ``"<location>: <msg>"``.

    Example:
        class UserIn(BaseModel):
            name: str = Field(min_length=1)

        service = CrudService(repo, ServiceValidators(create=schema_validator(UserIn)))
    """

    def validate(data: Any) -> Optional[ValidationIssue]:
        try:
            schema.model_validate(data)
        except PydanticValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            message = f"{location}: {first['msg']}" if location else first["msg"]
            return ValidationIssue(message, field=location or None)
        return None

    validate.__name__ = f"validate_{schema.__name__}"
    return validate


def required_fields(*names: str) -> Validator:
    """Validator rejecting data where any of ``names`` is missing or blank."""

    def validate(data: Any) -> Optional[ValidationIssue]:
        for name in names:
            if isinstance(data, Mapping):
                value = data.get(name)
            else:
                value = getattr(data, name, None)
            if value is None or (isinstance(value, str) and not value.strip()):
                return ValidationIssue(f"{name} required", field=name)
        return None

    return validate
