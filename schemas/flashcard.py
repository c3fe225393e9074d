from datetime import datetime

from pydantic import BaseModel, ConfigDict, constr, field_validator


def _coerce_flag(value):
    if isinstance(value, bool):
        return int(value)
    if value in (0, 1):
        return int(value)
    raise ValueError("must be 0, 1, true or false")


class FlashcardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    set_id: int
    question: str
    answer: str
    order_index: int
    created_at: datetime | None = None
    deleted_at: datetime | None = None


class FlashcardSetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    llm_interaction_id: int
    flip_mode: int = 0
    created_at: datetime | None = None


class FlashcardSetWithCardsOut(FlashcardSetOut):
    flashcards: list[FlashcardOut]


class FlashcardSetListOut(BaseModel):
    success: bool = True
    sets: list[FlashcardSetWithCardsOut]


class FlashcardSetUpdateIn(BaseModel):
    title: constr(strip_whitespace=True, min_length=1, max_length=255) | None = None
    description: str | None = None
    flip_mode: int | None = None

    @field_validator("title")
    @classmethod
    def _title_not_null(cls, value):
        if value is None:
            raise ValueError("Title cannot be empty")
        return value

    @field_validator("flip_mode", mode="before")
    @classmethod
    def _normalize_flip_mode(cls, value):
        if value is None:
            raise ValueError("flip_mode must be 0 or 1")
        return _coerce_flag(value)


class FlashcardCreateIn(BaseModel):
    set_id: int
    question: constr(strip_whitespace=True, min_length=1)
    answer: constr(strip_whitespace=True, min_length=1)


class FlashcardUpdateIn(BaseModel):
    question: constr(strip_whitespace=True, min_length=1)
    answer: constr(strip_whitespace=True, min_length=1)


class SuccessOut(BaseModel):
    success: bool = True
