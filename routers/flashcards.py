from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from schemas.flashcard import FlashcardCreateIn, FlashcardOut, FlashcardUpdateIn, SuccessOut
from services.flashcard_service import FlashcardService

router = APIRouter(prefix="/flashcards", tags=["Flashcards"])


@router.post("", response_model=FlashcardOut)
async def create_flashcard(data: FlashcardCreateIn, db: Session = Depends(get_db)):
    card = FlashcardService(db).create_card(set_id=data.set_id, question=data.question, answer=data.answer)
    return FlashcardOut.model_validate(card, from_attributes=True)


@router.patch("/{card_id}", response_model=FlashcardOut)
async def update_flashcard(card_id: int, data: FlashcardUpdateIn, db: Session = Depends(get_db)):
    card = FlashcardService(db).update_card(card_id, question=data.question, answer=data.answer)
    return FlashcardOut.model_validate(card, from_attributes=True)


@router.delete("/{card_id}", response_model=SuccessOut)
async def delete_flashcard(card_id: int, db: Session = Depends(get_db)):
    # missing or already deleted cards still report success
    FlashcardService(db).delete_card(card_id)
    return SuccessOut()
