"""Local storage for uploaded listing and profile images."""

import secrets
import time
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import anyio
from fastapi import UploadFile

from estateview.config import settings
from estateview.exceptions import UploadRejectedError
from estateview.utils.logging import get_logger

logger = get_logger("services.image_storage")

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}
PUBLIC_PREFIX = "/uploads"
CHUNK_SIZE = 64 * 1024


class ImageStorage:
    """Validates image uploads and writes them under the uploads directory."""

    def __init__(
        self,
        directory: Optional[str] = None,
        max_bytes: Optional[int] = None,
    ):
        self.directory = Path(directory or settings.uploads_dir)
        self.max_bytes = max_bytes if max_bytes is not None else settings.max_upload_bytes

    @staticmethod
    def is_present(upload: Optional[UploadFile]) -> bool:
        # Browsers post an empty part when no file was chosen
        return upload is not None and bool(upload.filename)

    def _check_type(self, upload: UploadFile) -> str:
        extension = Path(upload.filename or "").suffix.lower()
        content_type = (upload.content_type or "").lower()
        if extension not in ALLOWED_EXTENSIONS or content_type not in ALLOWED_CONTENT_TYPES:
            logger.warning(
                "upload_rejected",
                reason="type",
                file_name=upload.filename,
                content_type=content_type,
            )
            raise UploadRejectedError("Only image files are allowed")
        return extension

    async def _read_within_limit(self, upload: UploadFile) -> bytes:
        """Read the upload in chunks, stopping once it passes max_bytes."""
        data = bytearray()
        while len(data) <= self.max_bytes:
            chunk = await upload.read(min(CHUNK_SIZE, self.max_bytes + 1 - len(data)))
            if not chunk:
                return bytes(data)
            data.extend(chunk)

        logger.warning(
            "upload_rejected",
            reason="size",
            file_name=upload.filename,
            max_bytes=self.max_bytes,
        )
        megabytes = self.max_bytes // (1024 * 1024)
        raise UploadRejectedError(f"File too large. Maximum size is {megabytes}MB.")

    def _ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def _unique_name(self, field_name: str, extension: str) -> str:
        stamp = int(time.time() * 1000)
        suffix = secrets.randbelow(10**9)
        return f"{field_name}-{stamp}-{suffix}{extension}"

    async def save_all(
        self,
        uploads: Sequence[Optional[UploadFile]],
        field_name: str,
    ) -> List[str]:
        """Validate every upload first, then persist them and return public URIs."""
        accepted: List[Tuple[str, bytes]] = []
        for upload in uploads:
            if not self.is_present(upload):
                continue
            extension = self._check_type(upload)
            data = await self._read_within_limit(upload)
            accepted.append((extension, data))

        if not accepted:
            return []

        await anyio.to_thread.run_sync(self._ensure_directory)
        urls = []
        for extension, data in accepted:
            file_name = self._unique_name(field_name, extension)
            await anyio.to_thread.run_sync((self.directory / file_name).write_bytes, data)
            urls.append(f"{PUBLIC_PREFIX}/{file_name}")
            logger.info("upload_saved", file_name=file_name, size=len(data))
        return urls

    async def save(self, upload: Optional[UploadFile], field_name: str) -> Optional[str]:
        urls = await self.save_all([upload], field_name)
        return urls[0] if urls else None


def get_image_storage() -> ImageStorage:
    return ImageStorage()
