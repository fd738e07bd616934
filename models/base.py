"""Shared pydantic base for wire models (camelCase JSON, snake_case Python)."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model whose JSON field names are camelCase.

    Accepts either spelling on input; to_dict() always emits camelCase.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary (camelCase keys)."""
        return self.model_dump(by_alias=True, mode="json")
