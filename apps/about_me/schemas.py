"""
Pydantic schemas for the about-me profile.
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from apps.shared.validators import IMAGE_URL_PATTERN


class AboutMeCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    dob: date
    started_coding: date
    bio: str = Field(..., min_length=1)
    image_url: Optional[str] = Field(None, max_length=500, pattern=IMAGE_URL_PATTERN)
    technology_ids: list[str] = Field(default_factory=list)

    class Config:
        str_strip_whitespace = True


class AboutMeUpdate(BaseModel):
    """All fields optional. An omitted technology_ids keeps the relation."""
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    dob: Optional[date] = None
    started_coding: Optional[date] = None
    bio: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = Field(None, max_length=500, pattern=IMAGE_URL_PATTERN)
    technology_ids: Optional[list[str]] = None

    class Config:
        str_strip_whitespace = True
