from sqlalchemy.orm import Session

from core.database import transaction
from core.exceptions import InvalidRequestError, NotFoundError
from models.flashcard import Flashcard, FlashcardSet
from repositories.flashcard_repo import FlashcardRepository
from repositories.flashcard_set_repo import FlashcardSetPatch, FlashcardSetRepository


class FlashcardService:
    def __init__(self, db: Session):
        self.db = db
        self.set_repo = FlashcardSetRepository(db)
        self.card_repo = FlashcardRepository(db)

    def list_sets_with_cards(self) -> list[tuple[FlashcardSet, list[Flashcard]]]:
        return [
            (flashcard_set, self.card_repo.get_by_set_id(flashcard_set.id))
            for flashcard_set in self.set_repo.list_sets()
        ]

    def delete_set(self, set_id: int) -> None:
        with transaction(self.db):
            self.set_repo.delete(set_id)

    def update_set(self, set_id: int, patch: FlashcardSetPatch) -> FlashcardSet:
        if patch.is_empty():
            raise InvalidRequestError("At least one field (title, description, or flip_mode) must be provided")
        with transaction(self.db):
            flashcard_set = self.set_repo.update(set_id, patch)
        if flashcard_set is None:
            raise NotFoundError("Flashcard set not found")
        return flashcard_set

    def create_card(self, *, set_id: int, question: str, answer: str) -> Flashcard:
        if self.set_repo.get(set_id) is None:
            raise NotFoundError("Flashcard set not found")
        with transaction(self.db):
            card = self.card_repo.create(
                set_id=set_id,
                question=question,
                answer=answer,
                order_index=self.card_repo.next_order_index(set_id),
            )
        return card

    def update_card(self, card_id: int, *, question: str, answer: str) -> Flashcard:
        with transaction(self.db):
            card = self.card_repo.update(card_id, question=question, answer=answer)
        if card is None:
            raise NotFoundError("Flashcard not found")
        return card

    def delete_card(self, card_id: int) -> bool:
        with transaction(self.db):
            return self.card_repo.soft_delete(card_id)
