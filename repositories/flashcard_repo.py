from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.flashcard import Flashcard


class FlashcardRepository:
    def __init__(self, db: Session):
        self.db = db

    def _visible(self):
        return select(Flashcard).where(Flashcard.deleted_at.is_(None))

    def create(self, *, set_id: int, question: str, answer: str, order_index: int) -> Flashcard:
        entity = Flashcard(set_id=set_id, question=question, answer=answer, order_index=order_index)
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def bulk_create(self, cards: list[dict]) -> list[Flashcard]:
        """Insert every card or none; callers run this inside one transaction."""
        entities = [
            Flashcard(
                set_id=card["set_id"],
                question=card["question"],
                answer=card["answer"],
                order_index=card["order_index"],
            )
            for card in cards
        ]
        self.db.add_all(entities)
        self.db.flush()
        return entities

    def get(self, flashcard_id: int) -> Flashcard | None:
        stmt = self._visible().where(Flashcard.id == flashcard_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_set_id(self, set_id: int) -> list[Flashcard]:
        stmt = self._visible().where(Flashcard.set_id == set_id).order_by(Flashcard.order_index, Flashcard.id)
        return list(self.db.execute(stmt).scalars())

    def next_order_index(self, set_id: int) -> int:
        stmt = select(func.max(Flashcard.order_index)).where(
            Flashcard.set_id == set_id,
            Flashcard.deleted_at.is_(None),
        )
        current = self.db.execute(stmt).scalar_one()
        return 0 if current is None else current + 1

    def update(self, flashcard_id: int, *, question: str, answer: str) -> Flashcard | None:
        entity = self.get(flashcard_id)
        if entity is None:
            return None
        entity.question = question
        entity.answer = answer
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def soft_delete(self, flashcard_id: int) -> bool:
        entity = self.get(flashcard_id)
        if entity is None:
            return False
        entity.deleted_at = func.now()
        self.db.flush()
        return True
