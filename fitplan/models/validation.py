"""
Value-in, result-out validation helpers shared by the input and output schemas.
"""
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class FieldViolation(BaseModel):
    """One rejected field: dotted path plus a human-readable message."""

    field: str
    message: str


class ValidationResult(BaseModel, Generic[ModelT]):
    """Either a typed value (success) or the list of field violations."""

    success: bool
    value: Optional[ModelT] = None
    errors: list[FieldViolation] = []


def violations_from(error: ValidationError) -> list[FieldViolation]:
    """Flatten a pydantic ValidationError into field violations."""
    violations = []
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"]) or "(root)"
        violations.append(FieldViolation(field=path, message=item["msg"]))
    return violations


def validate_model(model: type[ModelT], data: Any) -> ValidationResult[ModelT]:
    """
    Validate untrusted data against a pydantic model without raising.

    Args:
        model: Target model class
        data: Arbitrary input value

    Returns:
        ValidationResult holding the parsed model or the violations
    """
    try:
        value = model.model_validate(data)
    except ValidationError as e:
        return ValidationResult[model](success=False, errors=violations_from(e))
    return ValidationResult[model](success=True, value=value)
