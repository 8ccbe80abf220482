"""
Uploads API

Multipart image upload endpoints used by the admin panel. All endpoints except
the Cloudinary config require a bearer token.
"""
import logging

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from apps.about_me.service import require_about_me, set_about_me_image
from apps.auth.dependencies import get_current_user
from apps.projects.schemas import ProjectImagesResponse
from apps.projects.service import (
    add_project_images,
    check_image_capacity,
    get_project,
    remove_project_image,
)
from apps.shared.database import get_db
from apps.uploads.schemas import (
    AboutMeImageResponse,
    CloudinaryConfigResponse,
    ImageUploadResponse,
)
from apps.uploads.storage import get_cloudinary_config, get_storage, read_upload, validate_folder
from apps.users.models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post("/uploads/{folder}", response_model=ImageUploadResponse)
async def upload_image(
    folder: str,
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
):
    """
    Upload a single image into one of the upload folders.
    Returns the public URL of the uploaded image.
    """
    validate_folder(folder)
    contents = await read_upload(file)
    stored = await get_storage().save(folder, contents, file.content_type)
    return ImageUploadResponse(url=stored.url, filename=stored.filename)


@router.post("/projects/{project_id}/images", response_model=ProjectImagesResponse)
async def upload_project_images(
    project_id: str,
    files: list[UploadFile] = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Append one or more images to a project's gallery (at most 10 in total)."""
    check_image_capacity(get_project(db, project_id), len(files))

    # Validate every file before storing any of them
    buffered = [(file.content_type, await read_upload(file)) for file in files]

    storage = get_storage()
    urls = []
    try:
        for content_type, contents in buffered:
            stored = await storage.save("projects", contents, content_type)
            urls.append(stored.url)
        project = add_project_images(db, project_id, urls)
    except Exception:
        for url in urls:
            await storage.delete(url)
        raise

    logger.info(f"Added {len(urls)} image(s) to project {project_id} by {current_user.email}")
    return ProjectImagesResponse(project_id=project.id, images=project.images)


@router.delete("/projects/{project_id}/images", response_model=ProjectImagesResponse)
async def delete_project_image(
    project_id: str,
    url: str = Query(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Remove an image from a project's gallery and from storage."""
    project = remove_project_image(db, project_id, url)
    await get_storage().delete(url)
    return ProjectImagesResponse(project_id=project.id, images=project.images)


@router.post("/about-me/image", response_model=AboutMeImageResponse)
async def upload_about_me_image(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Replace the profile image. The previous image is deleted from storage."""
    require_about_me(db)
    contents = await read_upload(file)

    storage = get_storage()
    stored = await storage.save("profiles", contents, file.content_type)
    about_me, previous = set_about_me_image(db, stored.url)
    if previous and previous != stored.url:
        await storage.delete(previous)

    return AboutMeImageResponse(url=about_me.image_url)


@router.delete("/about-me/image", response_model=AboutMeImageResponse)
async def delete_about_me_image(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _, previous = set_about_me_image(db, None)
    if previous:
        await get_storage().delete(previous)
    return AboutMeImageResponse(url=None)


@router.get("/cloudinary/config", response_model=CloudinaryConfigResponse)
def cloudinary_config():
    """Cloud name and unsigned upload preset for browser uploads."""
    return get_cloudinary_config()
