from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import InvalidRequestError
from repositories.flashcard_set_repo import FlashcardSetPatch
from schemas.flashcard import (
    FlashcardOut,
    FlashcardSetListOut,
    FlashcardSetOut,
    FlashcardSetUpdateIn,
    FlashcardSetWithCardsOut,
    SuccessOut,
)
from services.flashcard_service import FlashcardService

router = APIRouter(prefix="/flashcard-sets", tags=["Flashcard sets"])


@router.get("", response_model=FlashcardSetListOut)
async def list_flashcard_sets(db: Session = Depends(get_db)):
    svc = FlashcardService(db)
    sets = [
        FlashcardSetWithCardsOut(
            **FlashcardSetOut.model_validate(flashcard_set, from_attributes=True).model_dump(),
            flashcards=[FlashcardOut.model_validate(card, from_attributes=True) for card in cards],
        )
        for flashcard_set, cards in svc.list_sets_with_cards()
    ]
    return FlashcardSetListOut(sets=sets)


@router.delete("", response_model=SuccessOut)
async def delete_flashcard_set(
    set_id: int | None = Query(None, alias="id"),
    db: Session = Depends(get_db),
):
    if set_id is None:
        raise InvalidRequestError("Set ID is required")
    FlashcardService(db).delete_set(set_id)
    return SuccessOut()


@router.patch("/{set_id}", response_model=FlashcardSetOut)
async def update_flashcard_set(
    set_id: int,
    data: FlashcardSetUpdateIn | None = Body(None),
    db: Session = Depends(get_db),
):
    changes = data.model_dump(exclude_unset=True) if data is not None else {}
    flashcard_set = FlashcardService(db).update_set(set_id, FlashcardSetPatch(**changes))
    return FlashcardSetOut.model_validate(flashcard_set, from_attributes=True)
