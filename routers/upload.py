from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from core.config import Settings
from core.database import get_db
from core.dependencies import get_settings
from core.exceptions import InvalidRequestError
from schemas.image import ImageOut, ImageUploadOut
from services.upload_service import UploadService

router = APIRouter(tags=["Upload"])


@router.post("/upload", response_model=ImageUploadOut)
async def upload_image(
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if file is None:
        raise InvalidRequestError("No file provided")
    data = await file.read()
    image = UploadService(db, settings.UPLOAD_DIR).store_image(
        filename=file.filename or "upload",
        content_type=file.content_type,
        data=data,
    )
    return ImageUploadOut(image=ImageOut.model_validate(image, from_attributes=True))
