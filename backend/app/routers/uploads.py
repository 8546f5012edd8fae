from fastapi import APIRouter, Depends, File, UploadFile
from app.auth import get_current_user, UserPrincipal
from app.schemas.upload import ImageUploadResponse
from app.services.upload_service import UploadService, get_upload_service

router = APIRouter()


@router.post("/upload-image", response_model=ImageUploadResponse)
async def upload_image(
    image: UploadFile = File(None),
    current_user: UserPrincipal = Depends(get_current_user),
    uploads: UploadService = Depends(get_upload_service),
):
    image_url = await uploads.save_image(image)
    return ImageUploadResponse(message="Image uploaded successfully", image_url=image_url)
