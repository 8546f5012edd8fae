from app.schemas.base import CamelModel


class ImageUploadResponse(CamelModel):
    message: str
    image_url: str
