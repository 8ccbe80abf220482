"""
Pydantic schemas for contributors.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from apps.shared.validators import normalize_email


class ContributorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    github: str = Field(..., min_length=1, max_length=255)  # username or profile url

    class Config:
        str_strip_whitespace = True

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return normalize_email(value)


class ContributorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    github: Optional[str] = Field(None, min_length=1, max_length=255)

    class Config:
        str_strip_whitespace = True

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return normalize_email(value)
