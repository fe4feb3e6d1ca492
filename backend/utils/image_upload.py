"""
Image upload boundary.
Stores validated images in the upload folder and returns their public URL.
"""

import logging
import os
import uuid
from dataclasses import dataclass
from typing import Optional

from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB

ALLOWED_MIME_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


@dataclass
class UploadResult:
    url: Optional[str] = None
    public_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {"url": self.url, "public_id": self.public_id}


def _file_size(file) -> int:
    file.seek(0, os.SEEK_END)
    size = file.tell()
    file.seek(0)
    return size


def upload_image(file, upload_folder: str, public_base_url: str) -> UploadResult:
    """
    Validate and store an uploaded image.

    Args:
        file: werkzeug FileStorage (or any object with filename, mimetype,
              seek/tell and save)
        upload_folder: Directory the image is written to
        public_base_url: Base URL the /uploads route is reachable at

    Returns:
        UploadResult with url and public_id, or with error set.
        Never raises.
    """
    if file is None or not getattr(file, "filename", ""):
        return UploadResult(error="No file provided.")

    if not upload_folder or not public_base_url:
        logger.error("Image upload destination is not configured")
        return UploadResult(error="Image upload service is not configured.")

    try:
        size = _file_size(file)
    except (OSError, AttributeError) as e:
        logger.error(f"Error reading upload size: {str(e)}")
        return UploadResult(error="Failed to process file for upload.")

    if size > MAX_FILE_SIZE:
        logger.warning(f"Upload attempt with oversized file: {size} bytes")
        return UploadResult(error="File is too large. Maximum 5MB allowed.")

    mimetype = (getattr(file, "mimetype", None) or "").lower()
    if mimetype not in ALLOWED_MIME_TYPES:
        logger.warning(f"Upload attempt with disallowed type: {mimetype or 'unknown'}")
        return UploadResult(error="Invalid file type. Only JPG, PNG, GIF, WebP are allowed.")

    stem = secure_filename(file.filename).rsplit(".", 1)[0] or "image"
    public_id = f"mentorconnect/{stem}_{uuid.uuid4().hex}"
    filename = f"{public_id.split('/', 1)[1]}.{ALLOWED_MIME_TYPES[mimetype]}"

    try:
        os.makedirs(upload_folder, exist_ok=True)
        file.save(os.path.join(upload_folder, filename))
    except Exception as e:
        logger.error(f"Image upload failed: {str(e)}")
        return UploadResult(error="Image upload failed due to a server error.")

    logger.info(f"Image uploaded successfully: {filename}")
    return UploadResult(
        url=f"{public_base_url.rstrip('/')}/uploads/{filename}",
        public_id=public_id,
    )
