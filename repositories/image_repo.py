from sqlalchemy.orm import Session

from models.image import Image


class ImageRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, *, filename: str, filepath: str, mime_type: str, size: int) -> Image:
        entity = Image(filename=filename, filepath=filepath, mime_type=mime_type, size=size)
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def get(self, image_id: int) -> Image | None:
        return self.db.get(Image, image_id)
