"""
Pydantic schemas for contact messages.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from apps.shared.validators import normalize_email


class MessageCreate(BaseModel):
    """Schema for a message submitted through the contact form."""
    full_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    city: str = Field(..., min_length=2, max_length=100)
    subject: str = Field(..., min_length=5, max_length=200)
    message_description: str = Field(..., min_length=10, max_length=2000)

    class Config:
        str_strip_whitespace = True

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return normalize_email(value)


class MessageFilters(BaseModel):
    """Optional inbox filters. Unset fields don't filter."""
    is_read: Optional[bool] = None
    email: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    search_term: Optional[str] = Field(None, max_length=200)

    class Config:
        str_strip_whitespace = True

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return normalize_email(value)


class MessageStats(BaseModel):
    total: int
    unread: int
    read: int
    deleted: int
