from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from models.study_progress import StudyProgress


class StudyProgressRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_set_id(self, set_id: int) -> list[StudyProgress]:
        stmt = select(StudyProgress).where(StudyProgress.set_id == set_id).order_by(StudyProgress.id)
        return list(self.db.execute(stmt).scalars())

    def mark_dont_know(self, *, set_id: int, flashcard_id: int, dont_know: bool) -> StudyProgress:
        stmt = select(StudyProgress).where(
            StudyProgress.set_id == set_id,
            StudyProgress.flashcard_id == flashcard_id,
        )
        entity = self.db.execute(stmt).scalar_one_or_none()

        if entity is None:
            entity = StudyProgress(set_id=set_id, flashcard_id=flashcard_id)
            self.db.add(entity)
        entity.dont_know = 1 if dont_know else 0
        entity.marked_at = func.now()

        self.db.flush()
        self.db.refresh(entity)
        return entity

    def reset(self, set_id: int) -> int:
        result = self.db.execute(delete(StudyProgress).where(StudyProgress.set_id == set_id))
        self.db.flush()
        return result.rowcount
