from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StudyProgressOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    set_id: int
    flashcard_id: int
    dont_know: int
    marked_at: datetime | None = None


class StudyProgressListOut(BaseModel):
    progress: list[StudyProgressOut]


class StudyProgressMarkIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    set_id: int = Field(alias="setId", gt=0)
    flashcard_id: int = Field(alias="flashcardId", gt=0)
    dont_know: bool = Field(alias="dontKnow")


class StudyProgressMarkOut(BaseModel):
    progress: StudyProgressOut
