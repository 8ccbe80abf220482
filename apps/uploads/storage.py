"""
Image upload storage

Validates uploaded images and stores them either on local disk (served under
/uploads) or in Cloudinary through its SDK.

Upload flow:
1. Check MIME type against ALLOWED_TYPES
2. Buffer the whole file in memory (bounded by MAX_UPLOAD_SIZE) and check size
3. Only then write it, removing any partial file if the write fails
"""
import io
import logging
import os
import re
from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

import aiofiles
import aiofiles.os
import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from apps.shared.errors import BadRequestError

logger = logging.getLogger(__name__)

# Upload configuration
UPLOAD_BACKEND = os.getenv("UPLOAD_BACKEND", "local")
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
UPLOAD_BASE_URL = os.getenv("UPLOAD_BASE_URL", "/uploads").rstrip("/")
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", str(5 * 1024 * 1024)))  # 5 MB

CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")
CLOUDINARY_UPLOAD_PRESET = os.getenv("CLOUDINARY_UPLOAD_PRESET")

# MIME type -> stored file extension
ALLOWED_TYPES = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}
UPLOAD_FOLDERS = ("profiles", "projects", "technologies", "general")

_CLOUDINARY_PUBLIC_ID = re.compile(r"/upload/(?:v\d+/)?(.+?)(?:\.[A-Za-z0-9]+)?$")


@dataclass
class StoredFile:
    url: str
    filename: str


def validate_folder(folder: str) -> str:
    if folder not in UPLOAD_FOLDERS:
        raise BadRequestError(f"Invalid upload folder. Allowed: {', '.join(UPLOAD_FOLDERS)}")
    return folder


def check_content_type(content_type: Optional[str]) -> None:
    if content_type not in ALLOWED_TYPES:
        raise BadRequestError(
            f"Invalid file type. Allowed: {', '.join(sorted(ALLOWED_TYPES))}"
        )


def validate_upload(content_type: Optional[str], contents: bytes) -> None:
    """
    Raises:
        BadRequestError: If the type is not an allowed image type, the file is
            empty or larger than MAX_UPLOAD_SIZE
    """
    check_content_type(content_type)
    if not contents:
        raise BadRequestError("File is empty")
    if len(contents) > MAX_UPLOAD_SIZE:
        raise BadRequestError(
            f"File too large. Max size: {MAX_UPLOAD_SIZE / (1024 * 1024):g} MB"
        )


async def read_upload(file: UploadFile) -> bytes:
    """Buffer an upload and validate it. Nothing is written to storage here."""
    check_content_type(file.content_type)
    # One byte over the limit is enough to reject it
    contents = await file.read(MAX_UPLOAD_SIZE + 1)
    validate_upload(file.content_type, contents)
    return contents


class LocalStorage:
    """Writes files to <upload_dir>/<folder>/<uuid>.<ext>."""

    def __init__(self, upload_dir: Optional[str] = None, base_url: Optional[str] = None):
        self.upload_dir = upload_dir or UPLOAD_DIR
        self.base_url = (base_url or UPLOAD_BASE_URL).rstrip("/")

    async def save(self, folder: str, contents: bytes, content_type: str) -> StoredFile:
        filename = f"{uuid4().hex}.{ALLOWED_TYPES[content_type]}"
        directory = os.path.join(self.upload_dir, folder)
        filepath = os.path.join(directory, filename)

        # Ensure upload directory exists
        os.makedirs(directory, exist_ok=True)

        try:
            async with aiofiles.open(filepath, "wb") as f:
                await f.write(contents)
        except OSError:
            if os.path.exists(filepath):
                await aiofiles.os.remove(filepath)
            raise

        logger.info(f"Uploaded image: {folder}/{filename}")
        return StoredFile(url=f"{self.base_url}/{folder}/{filename}", filename=filename)

    async def delete(self, url: Optional[str]) -> bool:
        """Remove a previously stored file. URLs not served by this storage are ignored."""
        path = self.path_for(url)
        if path is None or not os.path.isfile(path):
            return False
        await aiofiles.os.remove(path)
        logger.info(f"Deleted image: {url}")
        return True

    def path_for(self, url: Optional[str]) -> Optional[str]:
        prefix = f"{self.base_url}/"
        if not url or not url.startswith(prefix):
            return None
        root = os.path.abspath(self.upload_dir)
        path = os.path.abspath(os.path.join(root, url[len(prefix):]))
        # Reject ../ escapes out of the upload directory
        if os.path.commonpath([root, path]) != root:
            return None
        return path


def public_id_from_url(url: Optional[str]) -> Optional[str]:
    """
    Extract the Cloudinary public id from a delivery URL.

    https://res.cloudinary.com/demo/image/upload/v1712/portfolio/projects/abc.png
    -> portfolio/projects/abc
    """
    if not url or "res.cloudinary.com" not in url:
        return None
    match = _CLOUDINARY_PUBLIC_ID.search(url)
    return match.group(1) if match else None


class CloudinaryStorage:
    """Uploads and deletions through the Cloudinary SDK, run in a worker thread."""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    async def save(self, folder: str, contents: bytes, content_type: str) -> StoredFile:
        result = await run_in_threadpool(
            cloudinary.uploader.upload,
            io.BytesIO(contents),
            folder=f"portfolio/{folder}",
            resource_type="image",
        )

        logger.info(f"Uploaded image to Cloudinary: {result['public_id']}")
        return StoredFile(url=result["secure_url"], filename=result["public_id"])

    async def delete(self, url: Optional[str]) -> bool:
        public_id = public_id_from_url(url)
        if not public_id:
            return False

        try:
            result = await run_in_threadpool(cloudinary.uploader.destroy, public_id)
        except cloudinary.exceptions.Error as e:
            # Leaves an orphaned image in Cloudinary
            logger.warning(f"Failed to delete Cloudinary image {public_id}: {e}")
            return False

        # An image that is already gone counts as deleted
        return result.get("result") in ("ok", "not found")


def get_storage():
    """Storage backend selected by UPLOAD_BACKEND."""
    if UPLOAD_BACKEND == "cloudinary":
        if not (CLOUDINARY_CLOUD_NAME and CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET):
            raise RuntimeError(
                "UPLOAD_BACKEND=cloudinary requires CLOUDINARY_CLOUD_NAME, "
                "CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET"
            )
        return CloudinaryStorage(CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET)
    return LocalStorage()


def get_cloudinary_config() -> dict:
    """Public settings for unsigned uploads straight from the browser."""
    return {"cloudName": CLOUDINARY_CLOUD_NAME, "uploadPreset": CLOUDINARY_UPLOAD_PRESET}
