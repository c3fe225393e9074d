from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func

from core.database import Base


class StudyProgress(Base):
    __tablename__ = "study_progress"
    __table_args__ = (
        UniqueConstraint("set_id", "flashcard_id", name="uq_study_progress_set_flashcard"),
    )

    id = Column(Integer, primary_key=True)
    set_id = Column(Integer, ForeignKey("flashcard_sets.id", ondelete="CASCADE"), nullable=False, index=True)
    flashcard_id = Column(Integer, ForeignKey("flashcards.id", ondelete="CASCADE"), nullable=False, index=True)
    dont_know = Column(Integer, nullable=False, server_default="0")
    marked_at = Column(DateTime, server_default=func.now(), nullable=False)
