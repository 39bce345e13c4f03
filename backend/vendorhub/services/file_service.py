"""
VendorHub Backend — Upload Storage Service
============================================

What:  Stores multipart image uploads on local disk and serves them back.
How:   Size check, generated filename, async write with aiofiles.
Who:   FirmService and ProductService (firm/product images), uploads route.

Storage layout:
    uploads/
    ├── 1718031234567-3fa9c1.jpg
    └── 1718031299012-b07d42.png

    Names are the upload time in milliseconds plus a short random suffix and
    the original extension. No user-supplied text ends up in the path, which
    rules out traversal through the filename.

Exposure:
    Everything in the upload directory is readable by anyone through
    GET /uploads/<name>. Only the size is validated; file type is not.
"""

import logging
import os
import time
import uuid
from pathlib import Path
from typing import Optional

import aiofiles

from vendorhub.config import settings
from vendorhub.exceptions import FileStorageError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads/"

# Extensions longer than this are dropped rather than trusted
_MAX_EXTENSION_LENGTH = 10


class FileService:
    """Write, resolve and delete files in the upload directory."""

    def __init__(self, upload_dir: str, max_size: int):
        self.upload_dir = Path(upload_dir).resolve()
        self.max_size = max_size
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        logger.info("FileService initialized with upload_dir=%s", self.upload_dir)

    def validate_size(self, content: bytes) -> None:
        if not content:
            raise ValidationError(
                message="Uploaded file is empty.",
                field="image",
            )
        if len(content) > self.max_size:
            max_mb = self.max_size / (1024 * 1024)
            raise ValidationError(
                message=f"File is too large. Maximum size is {max_mb:.1f}MB.",
                field="image",
                context={"max_size": self.max_size, "actual_size": len(content)},
            )

    @staticmethod
    def _extension(filename: Optional[str]) -> str:
        ext = Path(filename or "").suffix.lower()
        if len(ext) > _MAX_EXTENSION_LENGTH or not ext[1:].isalnum():
            return ""
        return ext

    def _generate_name(self, filename: Optional[str]) -> str:
        stamp = int(time.time() * 1000)
        return f"{stamp}-{uuid.uuid4().hex[:6]}{self._extension(filename)}"

    async def store_upload(self, filename: Optional[str], content: bytes) -> str:
        """
        Persist one uploaded file.

        Returns:
            Public path of the stored file, e.g. "/uploads/1718031234567-3fa9c1.jpg".

        Raises:
            ValidationError: empty or oversized file
            FileStorageError: the write itself failed
        """
        self.validate_size(content)

        name = self._generate_name(filename)
        target = self.upload_dir / name
        try:
            async with aiofiles.open(target, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store upload at %s: %s", target, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(target), "os_error": str(e)},
            )

        logger.info("Upload stored: %s (%d bytes)", name, len(content))
        return PUBLIC_PREFIX + name

    def resolve(self, relative_path: str) -> Path:
        """
        Map a path below /uploads/ to a file on disk.

        Raises:
            ValidationError: the path escapes the upload directory
            NotFoundError: no such file
        """
        full_path = (self.upload_dir / relative_path).resolve()
        if full_path != self.upload_dir and self.upload_dir not in full_path.parents:
            raise ValidationError(message="Invalid file path", field="path")
        if not full_path.is_file():
            raise NotFoundError(resource="file", resource_id=relative_path)
        return full_path

    async def cleanup(self, public_path: Optional[str]) -> None:
        """
        Best-effort removal of a stored upload.

        Used after a failed create (image written, row not) and when a firm or
        product is deleted. Failures are logged, never raised: a leftover file
        must not turn a successful delete into an error.
        """
        if not public_path or not public_path.startswith(PUBLIC_PREFIX):
            return
        path = self.upload_dir / public_path[len(PUBLIC_PREFIX):]
        try:
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up upload: %s", path.name)
            else:
                logger.debug("Cleanup: file already gone: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up upload %s: %s", path, str(e))


file_service = FileService(upload_dir=settings.upload_dir, max_size=settings.max_upload_size)
