"""
Pydantic schemas for social media links.
"""
from typing import Optional
from pydantic import BaseModel, Field

from apps.shared.validators import URL_PATTERN


class SocialMediaCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    link: str = Field(..., max_length=255, pattern=URL_PATTERN)
    icon: str = Field(..., min_length=1, max_length=255)

    class Config:
        str_strip_whitespace = True


class SocialMediaUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    link: Optional[str] = Field(None, max_length=255, pattern=URL_PATTERN)
    icon: Optional[str] = Field(None, min_length=1, max_length=255)

    class Config:
        str_strip_whitespace = True
