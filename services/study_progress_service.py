from sqlalchemy.orm import Session

from core.database import transaction
from core.exceptions import NotFoundError
from models.study_progress import StudyProgress
from repositories.flashcard_repo import FlashcardRepository
from repositories.study_progress_repo import StudyProgressRepository


class StudyProgressService:
    def __init__(self, db: Session):
        self.db = db
        self.progress_repo = StudyProgressRepository(db)
        self.card_repo = FlashcardRepository(db)

    def list_progress(self, set_id: int) -> list[StudyProgress]:
        return self.progress_repo.get_by_set_id(set_id)

    def mark_dont_know(self, *, set_id: int, flashcard_id: int, dont_know: bool) -> StudyProgress:
        card = self.card_repo.get(flashcard_id)
        if card is None or card.set_id != set_id:
            raise NotFoundError("Flashcard not found in this set")
        with transaction(self.db):
            return self.progress_repo.mark_dont_know(set_id=set_id, flashcard_id=flashcard_id, dont_know=dont_know)

    def reset_progress(self, set_id: int) -> int:
        with transaction(self.db):
            return self.progress_repo.reset(set_id)
