from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.config import Settings
from core.database import get_db
from core.dependencies import get_llm_client, get_settings
from repositories.llm_interaction_repo import LLMInteractionRepository
from schemas.flashcard import FlashcardOut, FlashcardSetOut
from schemas.generation import (
    GenerateFlashcardsIn,
    GenerateFlashcardsOut,
    ModelListOut,
    ModelOptionOut,
    RecentInstructionsOut,
)
from services.generation_service import MODEL_OPTIONS, GenerationService
from services.llm_client import LLMClient

router = APIRouter(tags=["Generation"])


@router.post("/generate-flashcards", response_model=GenerateFlashcardsOut)
async def generate_flashcards(
    data: GenerateFlashcardsIn,
    db: Session = Depends(get_db),
    llm: LLMClient = Depends(get_llm_client),
    settings: Settings = Depends(get_settings),
):
    svc = GenerationService(db, llm, settings.UPLOAD_DIR)
    flashcard_set, flashcards = await svc.generate(
        image_ids=data.image_ids,
        model=data.model,
        custom_instructions=data.custom_instructions,
    )
    return GenerateFlashcardsOut(
        flashcard_set=FlashcardSetOut.model_validate(flashcard_set, from_attributes=True),
        flashcards=[FlashcardOut.model_validate(card, from_attributes=True) for card in flashcards],
    )


@router.get("/recent-instructions", response_model=RecentInstructionsOut)
async def recent_instructions(db: Session = Depends(get_db)):
    return RecentInstructionsOut(instructions=LLMInteractionRepository(db).recent_custom_instructions(limit=3))


@router.get("/models", response_model=ModelListOut)
async def list_models():
    return ModelListOut(models=[ModelOptionOut(**option) for option in MODEL_OPTIONS])
