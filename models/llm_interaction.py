from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint, func

from core.database import Base


class LLMInteraction(Base):
    __tablename__ = "llm_interactions"

    id = Column(Integer, primary_key=True)
    # first submitted image; older databases declare it NOT NULL
    image_id = Column(Integer, ForeignKey("images.id", ondelete="CASCADE"), nullable=True, index=True)
    model = Column(String(255), nullable=False)
    prompt = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    tokens_used = Column(Integer, nullable=True)
    cost = Column(Float, nullable=True)
    custom_instructions = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class InteractionImage(Base):
    __tablename__ = "interaction_images"
    __table_args__ = (
        UniqueConstraint("interaction_id", "image_id", name="uq_interaction_images_interaction_image"),
    )

    id = Column(Integer, primary_key=True)
    interaction_id = Column(
        Integer, ForeignKey("llm_interactions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    image_id = Column(Integer, ForeignKey("images.id", ondelete="CASCADE"), nullable=False, index=True)
    order_index = Column(Integer, nullable=False, server_default="0")
