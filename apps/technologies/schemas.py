"""
Pydantic schemas for technologies.
"""
from typing import Optional
from pydantic import BaseModel, Field

from apps.technologies.models import TechnologyCategory, TechnologyLevel


class TechnologyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    icon: str = Field(..., min_length=1, max_length=500)
    level: TechnologyLevel
    category: TechnologyCategory = TechnologyCategory.LANGUAGES

    class Config:
        str_strip_whitespace = True


class TechnologyUpdate(BaseModel):
    """Schema for updating a technology. All fields optional."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    icon: Optional[str] = Field(None, min_length=1, max_length=500)
    level: Optional[TechnologyLevel] = None
    category: Optional[TechnologyCategory] = None

    class Config:
        str_strip_whitespace = True
