from dataclasses import dataclass, fields
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from models.flashcard import FlashcardSet


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class FlashcardSetPatch:
    """Partial update for a set. Fields left as ``UNSET`` are not touched."""

    title: str = UNSET
    description: str | None = UNSET
    flip_mode: int = UNSET

    def changes(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}

    def is_empty(self) -> bool:
        return not self.changes()


class FlashcardSetRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, *, title: str, llm_interaction_id: int, description: str | None = None) -> FlashcardSet:
        entity = FlashcardSet(title=title, description=description, llm_interaction_id=llm_interaction_id)
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def get(self, set_id: int) -> FlashcardSet | None:
        return self.db.get(FlashcardSet, set_id)

    def list_sets(self) -> list[FlashcardSet]:
        stmt = select(FlashcardSet).order_by(FlashcardSet.created_at.desc(), FlashcardSet.id.desc())
        return list(self.db.execute(stmt).scalars())

    def update(self, set_id: int, patch: FlashcardSetPatch) -> FlashcardSet | None:
        entity = self.get(set_id)
        if entity is None:
            return None
        for name, value in patch.changes().items():
            setattr(entity, name, value)
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def delete(self, set_id: int) -> None:
        # flashcards and study_progress rows go with it through ON DELETE CASCADE
        self.db.execute(delete(FlashcardSet).where(FlashcardSet.id == set_id))
        self.db.flush()
