"""
Pydantic schemas for projects.

Defines create/update payloads with validation.
"""
import re
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from apps.projects.models import MAX_PROJECT_IMAGES
from apps.shared.validators import IMAGE_URL_PATTERN, URL_PATTERN

PROGRESS_PATTERN = r"^(pending|in-progress|finished)$"


def _check_images(images):
    if images is None:
        return images
    for url in images:
        if not re.match(IMAGE_URL_PATTERN, url):
            raise ValueError(f"Invalid image URL: {url}")
    return images


class ProjectCreate(BaseModel):
    """Schema for creating a new project."""
    name: str = Field(..., min_length=1, max_length=200)
    github_link: str = Field(..., max_length=500, pattern=URL_PATTERN)
    live_url: Optional[str] = Field(None, max_length=500, pattern=URL_PATTERN)
    progress: str = Field("pending", pattern=PROGRESS_PATTERN)
    image_url: Optional[str] = Field(None, max_length=500, pattern=IMAGE_URL_PATTERN)
    images: list[str] = Field(default_factory=list, max_length=MAX_PROJECT_IMAGES)
    description: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)
    technology_ids: list[str] = Field(default_factory=list)
    contributor_ids: list[str] = Field(default_factory=list)
    created_by_id: Optional[str] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("images")
    @classmethod
    def check_images(cls, value):
        return _check_images(value)


class ProjectUpdate(BaseModel):
    """
    Schema for updating a project. All fields optional.

    An omitted relation list keeps the relation, an empty list clears it.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    github_link: Optional[str] = Field(None, max_length=500, pattern=URL_PATTERN)
    live_url: Optional[str] = Field(None, max_length=500, pattern=URL_PATTERN)
    progress: Optional[str] = Field(None, pattern=PROGRESS_PATTERN)
    image_url: Optional[str] = Field(None, max_length=500, pattern=IMAGE_URL_PATTERN)
    images: Optional[list[str]] = Field(None, max_length=MAX_PROJECT_IMAGES)
    description: Optional[str] = Field(None, min_length=1)
    tags: Optional[list[str]] = None
    technology_ids: Optional[list[str]] = None
    contributor_ids: Optional[list[str]] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("images")
    @classmethod
    def check_images(cls, value):
        return _check_images(value)


class ProjectImagesResponse(BaseModel):
    """Response of the gallery upload/removal endpoints."""
    project_id: str
    images: list[str]
