from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.llm_interaction import InteractionImage, LLMInteraction


class LLMInteractionRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        *,
        model: str,
        prompt: str,
        response: str,
        image_ids: list[int],
        tokens_used: int | None = None,
        cost: float | None = None,
        custom_instructions: str | None = None,
    ) -> LLMInteraction:
        entity = LLMInteraction(
            image_id=image_ids[0] if image_ids else None,
            model=model,
            prompt=prompt,
            response=response,
            tokens_used=tokens_used,
            cost=cost,
            custom_instructions=custom_instructions,
        )
        self.db.add(entity)
        self.db.flush()

        self.db.add_all(
            InteractionImage(interaction_id=entity.id, image_id=image_id, order_index=index)
            for index, image_id in enumerate(image_ids)
        )
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def get(self, interaction_id: int) -> LLMInteraction | None:
        return self.db.get(LLMInteraction, interaction_id)

    def get_image_ids(self, interaction_id: int) -> list[int]:
        stmt = (
            select(InteractionImage.image_id)
            .where(InteractionImage.interaction_id == interaction_id)
            .order_by(InteractionImage.order_index)
        )
        return list(self.db.execute(stmt).scalars())

    def list_by_image_id(self, image_id: int) -> list[LLMInteraction]:
        stmt = (
            select(LLMInteraction)
            .join(InteractionImage, InteractionImage.interaction_id == LLMInteraction.id)
            .where(InteractionImage.image_id == image_id)
            .order_by(LLMInteraction.created_at.desc(), LLMInteraction.id.desc())
        )
        return list(self.db.execute(stmt).scalars())

    def recent_custom_instructions(self, limit: int = 3) -> list[str]:
        last_used = func.max(LLMInteraction.id)
        stmt = (
            select(LLMInteraction.custom_instructions)
            .where(LLMInteraction.custom_instructions.is_not(None))
            .where(func.trim(LLMInteraction.custom_instructions) != "")
            .group_by(LLMInteraction.custom_instructions)
            .order_by(last_used.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())
