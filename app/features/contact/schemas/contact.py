import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.features.contact.models.contact import ContactStatus


class ContactCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(...)
    phone: Optional[str] = Field(None, max_length=20)
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=2000)

    @field_validator("name", "subject", "message")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Field cannot be blank")
        return value

    @field_validator("name", "subject")
    @classmethod
    def single_line(cls, value: str) -> str:
        # Both end up in mail headers
        if "\r" in value or "\n" in value:
            raise ValueError("Field cannot contain line breaks")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: Optional[str]) -> Optional[str]:
        """Digits, spaces, +, -, and parentheses only"""
        if value is None:
            return value

        cleaned = value.strip()
        if not cleaned:
            return None

        if not re.match(r"^[\d\s\+\-\(\)]+$", cleaned):
            raise ValueError("Phone number can only contain digits, spaces, +, -, and parentheses")

        return cleaned


class ContactStatusUpdateRequest(BaseModel):
    status: ContactStatus


class ContactReplyRequest(BaseModel):
    reply: str = Field(..., min_length=1, max_length=2000)

    @field_validator("reply")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Reply cannot be blank")
        return value


class ContactResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    status: ContactStatus
    reply: Optional[str] = None
    reply_date: Optional[datetime] = None
    ip_address: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ContactStats(BaseModel):
    total: int = 0
    new: int = 0
    read: int = 0
    replied: int = 0
