"""Inquiry (contact / export lead) data models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from modules.text import sanitize_text
from .base import CamelModel

MAX_MESSAGE_LENGTH = 5000


class InquiryType(str, Enum):
    EXPORT = "export"
    CONTACT = "contact"


class InquiryStatus(str, Enum):
    """
    Handling state of an inquiry.

    Lifecycle:
        NEW -> IN_PROGRESS -> RESOLVED
    """

    NEW = "new"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class InquiryCreate(CamelModel):
    """
    Inquiry form submission.

    Export inquiries must name the buyer's company and destination country.
    """

    type: InquiryType
    name: str = Field(min_length=1)
    email: EmailStr
    message: str = Field(min_length=1)
    phone: Optional[str] = None
    company: Optional[str] = None
    country: Optional[str] = None
    subject: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _sanitize_name(cls, value):
        if isinstance(value, str):
            return sanitize_text(value, max_length=200)
        return value

    @field_validator("phone", "company", "country", "subject", mode="before")
    @classmethod
    def _sanitize_optional(cls, value):
        if isinstance(value, str):
            return sanitize_text(value, max_length=200) or None
        return value

    @field_validator("message", mode="before")
    @classmethod
    def _sanitize_message(cls, value):
        if isinstance(value, str):
            return sanitize_text(value, max_length=MAX_MESSAGE_LENGTH)
        return value

    @model_validator(mode="after")
    def _check_export_fields(self) -> "InquiryCreate":
        if self.type == InquiryType.EXPORT:
            missing = [name for name in ("company", "country") if not getattr(self, name)]
            if missing:
                raise ValueError(f"Export inquiries require: {', '.join(missing)}")
        return self


class Inquiry(InquiryCreate):
    """A stored inquiry."""

    id: str = Field(min_length=1)
    status: InquiryStatus = InquiryStatus.NEW
    created_at: Optional[str] = None
