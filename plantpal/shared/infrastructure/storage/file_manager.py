# 📄 File: plantpal/shared/infrastructure/storage/file_manager.py

# 🧭 Purpose (Layman Explanation):
# Checks that an uploaded plant photo really is a picture of an allowed kind and
# size, parks it in a temporary folder while it is analyzed, and cleans it up after.

# 🧪 Purpose (Technical Summary):
# Upload validation (extension, content type, size, Pillow decode check) and a
# temporary-file lifecycle under UPLOAD_DIR with guaranteed removal.

# 🔗 Dependencies:
# - PIL: Image validation
# - asyncio: Off-loop file writes
# - plantpal.shared.core.exceptions: File validation errors

# 🔄 Connected Modules / Calls From:
# Called by: Diagnosis service (image analysis uploads)

import asyncio
import io
import logging
import warnings
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Iterable, List, Optional

from PIL import Image, UnidentifiedImageError

from plantpal.shared.core.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    ValidationError,
)
from plantpal.shared.utils.helpers import generate_id, get_file_extension

logger = logging.getLogger(__name__)

# Pillow format names accepted for each allowed extension
IMAGE_FORMATS = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
    "gif": "GIF",
}


class FileManager:
    """
    Validates image uploads and manages their temporary files.

    Uploaded bytes are only ever held on disk for the duration of a
    ``temporary_upload`` block; the file is removed however the block exits.
    """

    def __init__(
        self,
        upload_dir: str,
        max_size: int,
        allowed_extensions: Iterable[str] = ("jpeg", "jpg", "png", "gif"),
    ):
        self.upload_dir = Path(upload_dir)
        self.max_size = max_size
        self.allowed_extensions: List[str] = [ext.lower().lstrip(".") for ext in allowed_extensions]

    def validate_image(self, filename: Optional[str], content_type: Optional[str], data: bytes) -> str:
        """
        Validate an uploaded image.

        Args:
            filename: Client supplied filename
            content_type: Declared MIME type
            data: Raw file bytes

        Returns:
            str: The normalized file extension

        Raises:
            ValidationError: If the upload is empty
            InvalidFileTypeError: If extension, content type or content is not an allowed image
            FileTooLargeError: If the upload exceeds the size limit
        """
        if not data:
            raise ValidationError("No image file provided", field="image")

        extension = get_file_extension(filename or "")
        if extension not in self.allowed_extensions:
            raise InvalidFileTypeError(filename=filename, allowed_types=self.allowed_extensions)

        mime_subtype = (content_type or "").lower().split(";")[0].strip()
        if not mime_subtype.startswith("image/") or mime_subtype[len("image/"):] not in self.allowed_extensions:
            raise InvalidFileTypeError(filename=filename, allowed_types=self.allowed_extensions)

        if len(data) > self.max_size:
            raise FileTooLargeError(file_size=len(data), max_size=self.max_size, filename=filename)

        self._verify_image_content(data, filename)
        return extension

    def _verify_image_content(self, data: bytes, filename: Optional[str]) -> None:
        try:
            with warnings.catch_warnings():
                # Oversized pixel counts are rejected, not just reported
                warnings.simplefilter("error", Image.DecompressionBombWarning)
                with Image.open(io.BytesIO(data)) as image:
                    image_format = image.format
                    image.verify()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            Image.DecompressionBombWarning,
            OSError,
            SyntaxError,
            ValueError,
        ) as e:
            logger.info(f"Rejected unreadable image upload {filename}: {e}")
            raise InvalidFileTypeError(
                message="Uploaded file is not a valid image",
                filename=filename,
                allowed_types=self.allowed_extensions,
            )

        allowed_formats = {IMAGE_FORMATS[ext] for ext in self.allowed_extensions if ext in IMAGE_FORMATS}
        if image_format not in allowed_formats:
            raise InvalidFileTypeError(filename=filename, allowed_types=self.allowed_extensions)

    async def save_temporary(self, data: bytes, extension: str) -> Path:
        """Write bytes to a uniquely named file under the upload directory."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path = self.upload_dir / f"image-{generate_id()}.{extension}"
        await asyncio.to_thread(path.write_bytes, data)
        logger.debug(f"Stored temporary upload {path}")
        return path

    async def remove(self, path: Path) -> None:
        try:
            await asyncio.to_thread(path.unlink, True)
            logger.debug(f"Removed temporary upload {path}")
        except OSError as e:
            logger.warning(f"Failed to remove temporary upload {path}: {e}")

    @asynccontextmanager
    async def temporary_upload(self, data: bytes, extension: str) -> AsyncIterator[Path]:
        """Hold an upload on disk for the duration of the block."""
        path = await self.save_temporary(data, extension)
        try:
            yield path
        finally:
            await self.remove(path)
