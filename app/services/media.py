import logging
from io import BytesIO
from pathlib import Path
from uuid import uuid4
import aiofiles
from fastapi import UploadFile
from PIL import Image
from app.config import settings
from app.exceptions import ValidationError
from app.services import BaseService

logger = logging.getLogger(__name__)


MEDIA_EXTENSIONS = {
    "image": ("jpg", "jpeg", "png", "gif", "webp"),
    "video": ("mp4", "webm", "ogg"),
    "audio": ("mp3", "wav", "ogg", "m4a"),
}


def media_type_for(extension: str) -> str | None:
    for media_type, extensions in MEDIA_EXTENSIONS.items():
        if extension in extensions:
            return media_type
    return None


class MediaService(BaseService):
    @staticmethod
    def _verify_image(contents: bytes):
        try:
            image_file = Image.open(BytesIO(contents))
            image_file.verify()
        except Exception as e:
            raise ValidationError("Uploaded file is not a valid image.") from e

    async def upload(self, file: UploadFile | None) -> str:
        """Store an uploaded media file under ``MEDIA_FOLDER`` and return its file name."""
        if file is None or not file.filename:
            raise ValidationError("No file provided")

        extension = Path(file.filename).suffix.lower().lstrip(".")
        media_type = media_type_for(extension)
        if media_type is None:
            raise ValidationError(f"Unsupported media file: {file.filename}")

        if file.size is not None and file.size > settings.MAX_UPLOAD_SIZE:
            raise ValidationError("Uploaded file is too large")

        contents = await file.read()
        if not contents:
            raise ValidationError("Uploaded file is empty")
        if len(contents) > settings.MAX_UPLOAD_SIZE:
            raise ValidationError("Uploaded file is too large")
        if media_type == "image":
            self._verify_image(contents)

        folder = Path(settings.MEDIA_FOLDER)
        folder.mkdir(parents=True, exist_ok=True)
        file_name = f"{uuid4()}.{extension}"
        async with aiofiles.open(folder / file_name, "wb") as out_file:
            await out_file.write(contents)

        logger.info("Stored %s upload %s (%s bytes)", media_type, file_name, len(contents))
        return file_name
