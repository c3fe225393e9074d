import hashlib
from pathlib import Path

import structlog
from sqlalchemy.orm import Session

from core.database import transaction
from core.exceptions import InvalidRequestError
from models.image import Image
from repositories.image_repo import ImageRepository

logger = structlog.get_logger(__name__)


class UploadService:
    def __init__(self, db: Session, upload_dir: Path):
        self.db = db
        self.upload_dir = Path(upload_dir)
        self.image_repo = ImageRepository(db)

    def store_image(self, *, filename: str, content_type: str | None, data: bytes) -> Image:
        """Write the upload under its content hash and record it."""
        if not (content_type or "").startswith("image/"):
            raise InvalidRequestError("Only image files are allowed")
        if not data:
            raise InvalidRequestError("Uploaded file is empty.")

        digest = hashlib.md5(data).hexdigest()
        stored_name = f"{digest}{Path(filename).suffix.lower()}"
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        (self.upload_dir / stored_name).write_bytes(data)

        with transaction(self.db):
            image = self.image_repo.create(
                filename=filename,
                filepath=f"/uploads/{stored_name}",
                mime_type=content_type,
                size=len(data),
            )
        logger.info("image_uploaded", image_id=image.id, stored_name=stored_name, size=len(data))
        return image
