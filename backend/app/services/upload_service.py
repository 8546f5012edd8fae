import os
import time
import uuid
import aiofiles
from fastapi import UploadFile
from app.config import get_settings
from app.exceptions import ValidationError
from app.logging_config import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024
URL_PREFIX = "/uploads"

# Stored extension comes from the content type, so /uploads only ever serves these types.
IMAGE_TYPES = {
    "image/jpeg": (".jpg", {".jpg", ".jpeg"}),
    "image/png": (".png", {".png"}),
    "image/gif": (".gif", {".gif"}),
    "image/webp": (".webp", {".webp"}),
}


class UploadService:
    def __init__(self, upload_dir: str, max_bytes: int):
        self.upload_dir = upload_dir
        self.max_bytes = max_bytes

    async def save_image(self, file: UploadFile) -> str:
        """Store an uploaded image and return its public relative URL."""
        if file is None or not file.filename:
            raise ValidationError("No file uploaded")
        content_type = (file.content_type or "").split(";")[0].strip().lower()
        if content_type not in IMAGE_TYPES:
            raise ValidationError("Only image files are allowed")
        ext, accepted = IMAGE_TYPES[content_type]
        client_ext = os.path.splitext(os.path.basename(file.filename))[1].lower()
        if client_ext not in accepted:
            raise ValidationError("File extension does not match the image type")

        os.makedirs(self.upload_dir, exist_ok=True)
        filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{ext}"
        file_path = os.path.join(self.upload_dir, filename)

        written = 0
        try:
            async with aiofiles.open(file_path, "wb") as f:
                while chunk := await file.read(CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise ValidationError(f"File too large (limit is {self.max_bytes} bytes)")
                    await f.write(chunk)
        except BaseException:
            # Never leave a partial file behind.
            if os.path.exists(file_path):
                os.remove(file_path)
            raise

        logger.info("Stored image %s (%d bytes)", filename, written)
        return f"{URL_PREFIX}/{filename}"


def get_upload_service() -> UploadService:
    settings = get_settings()
    return UploadService(settings.upload_dir, settings.max_upload_bytes)
