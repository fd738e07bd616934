"""
Parse-or-error boundary for data entering the system.

Form submissions, API payloads and catalog records are validated with
pydantic models. pydantic's ValidationError is converted here into an
InputValidationError carrying one ``{"field", "message"}`` entry per
problem, so callers never depend on pydantic's error format.
"""

from __future__ import annotations

from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import InputValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_validation_errors(error: ValidationError) -> List[Dict[str, str]]:
    """Flatten a pydantic ValidationError into field/message pairs."""
    formatted = []
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ())) or "__root__"
        message = item.get("msg", "Invalid value")
        # pydantic prefixes custom validator messages
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        formatted.append({"field": field, "message": message})
    return formatted


def parse_or_raise(
    model: Type[ModelT],
    data: Any,
    message: str = "Invalid data",
) -> ModelT:
    """
    Validate ``data`` against ``model``.

    Args:
        model: pydantic model class
        data: Raw input (usually a dict decoded from JSON)
        message: Summary message for the raised error

    Returns:
        Validated model instance

    Raises:
        InputValidationError: If data does not satisfy the model
    """
    if isinstance(data, model):
        return data
    if data is None:
        raise InputValidationError(message, [{"field": "__root__", "message": "Request body is required"}])
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InputValidationError(message, format_validation_errors(e)) from e
