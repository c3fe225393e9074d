from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ImageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    filename: str
    filepath: str
    mime_type: str
    size: int
    created_at: datetime | None = None


class ImageUploadOut(BaseModel):
    success: bool = True
    image: ImageOut
