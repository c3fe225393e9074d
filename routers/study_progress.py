from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import InvalidRequestError
from schemas.flashcard import SuccessOut
from schemas.study_progress import (
    StudyProgressListOut,
    StudyProgressMarkIn,
    StudyProgressMarkOut,
    StudyProgressOut,
)
from services.study_progress_service import StudyProgressService

router = APIRouter(prefix="/study-progress", tags=["Study progress"])


def _require_set_id(set_id: int | None = Query(None, alias="setId")) -> int:
    if set_id is None:
        raise InvalidRequestError("setId is required")
    return set_id


@router.get("", response_model=StudyProgressListOut)
async def get_study_progress(set_id: int = Depends(_require_set_id), db: Session = Depends(get_db)):
    rows = StudyProgressService(db).list_progress(set_id)
    return StudyProgressListOut(progress=[StudyProgressOut.model_validate(row, from_attributes=True) for row in rows])


@router.post("", response_model=StudyProgressMarkOut)
async def mark_study_progress(data: StudyProgressMarkIn, db: Session = Depends(get_db)):
    row = StudyProgressService(db).mark_dont_know(
        set_id=data.set_id,
        flashcard_id=data.flashcard_id,
        dont_know=data.dont_know,
    )
    return StudyProgressMarkOut(progress=StudyProgressOut.model_validate(row, from_attributes=True))


@router.delete("", response_model=SuccessOut)
async def reset_study_progress(set_id: int = Depends(_require_set_id), db: Session = Depends(get_db)):
    StudyProgressService(db).reset_progress(set_id)
    return SuccessOut()
