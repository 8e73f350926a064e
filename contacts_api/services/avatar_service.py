"""
contacts_api/services/avatar_service.py

Purpose: Avatar file storage

- Writes an uploaded file to the temp upload directory
- Moves it into the public avatars directory as <user_id><ext>
- Size cap on uploads
- Best-effort cleanup of temp files when a later step fails
"""

import mimetypes
import shutil
import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from contacts_api.core.config import Settings
from contacts_api.core.exceptions import ValidationError
from contacts_api.core.logging import get_logger
from utils.constants import AVATAR_TOO_LARGE, AVATARS_URL_PREFIX

logger = get_logger(__name__)


def is_image(upload: UploadFile) -> bool:
    return bool(upload.content_type) and upload.content_type.startswith("image/")


def avatar_extension(filename: Optional[str], content_type: Optional[str]) -> str:
    """
    Extension of the original filename, or one guessed from the content type.
    """
    suffix = Path(filename or "").suffix.lower()
    if suffix:
        return suffix
    return mimetypes.guess_extension(content_type or "") or ""


class AvatarStorage:
    def __init__(self, config: Settings):
        self.upload_dir = Path(config.UPLOAD_DIR)
        self.avatars_dir = Path(config.AVATARS_DIR)
        self.max_size = config.MAX_AVATAR_SIZE

    async def save_upload(self, upload: UploadFile) -> Path:
        """
        Writes the upload to a uniquely named temp file.

        Raises:
            ValidationError: If the upload is larger than MAX_AVATAR_SIZE
        """
        contents = await upload.read(self.max_size + 1)
        if len(contents) > self.max_size:
            raise ValidationError(AVATAR_TOO_LARGE, details={"max_bytes": self.max_size})

        temp_path = self.upload_dir / f"{uuid.uuid4().hex}{avatar_extension(upload.filename, upload.content_type)}"
        try:
            await run_in_threadpool(self._write, temp_path, contents)
        except Exception:
            self.discard(temp_path)
            raise
        return temp_path

    def _write(self, temp_path: Path, contents: bytes) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        temp_path.write_bytes(contents)

    def store(self, temp_path: Path, user_id: str, filename: Optional[str], content_type: Optional[str] = None) -> str:
        """
        Moves a temp upload to its permanent place and returns the public URL.

        Previous avatars of the user with another extension are removed only
        once the new file is in place. Blocking; run it in a worker thread.
        """
        self.avatars_dir.mkdir(parents=True, exist_ok=True)
        target_name = f"{user_id}{avatar_extension(filename, content_type)}"
        target = self.avatars_dir / target_name

        shutil.move(str(temp_path), str(target))

        for previous in self.avatars_dir.glob(f"{user_id}.*"):
            if previous.name != target_name:
                previous.unlink(missing_ok=True)

        logger.debug(f"Avatar stored at {target}", extra={"user_id": user_id})
        return f"{AVATARS_URL_PREFIX}/{target_name}"

    def discard(self, temp_path: Path) -> None:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove temp upload {temp_path}: {e}")
