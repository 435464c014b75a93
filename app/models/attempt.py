"""
Attempt and LinkClick models - append-only, anonymous respondent events
"""
from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey, JSON, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from app.database import Base
import uuid


class Attempt(Base):
    """
    Attempts table - one scored submission, never updated
    """
    __tablename__ = "attempts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    quiz_id = Column(Uuid, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    answers = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)  # {question_id: option_id}
    score = Column(Integer)
    total = Column(Integer)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    quiz = relationship("Quiz", back_populates="attempts")

    def __repr__(self):
        return f"<Attempt(quiz_id={self.quiz_id}, score={self.score}/{self.total})>"


class LinkClick(Base):
    """
    Link clicks table - completion page button clicks that open an external URL
    """
    __tablename__ = "link_clicks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    quiz_id = Column(Uuid, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    button_url = Column(String(2048))
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    quiz = relationship("Quiz", back_populates="link_clicks")

    def __repr__(self):
        return f"<LinkClick(quiz_id={self.quiz_id}, url={self.button_url})>"
