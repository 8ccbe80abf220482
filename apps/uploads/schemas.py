"""
Pydantic schemas for the upload endpoints.
"""
from typing import Optional
from pydantic import BaseModel


class ImageUploadResponse(BaseModel):
    """Response after successful image upload."""
    url: str
    filename: str


class AboutMeImageResponse(BaseModel):
    url: Optional[str] = None


class CloudinaryConfigResponse(BaseModel):
    cloudName: Optional[str] = None
    uploadPreset: Optional[str] = None
