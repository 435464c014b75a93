"""
Quiz model - author-owned question set published under a slug
"""
from sqlalchemy import Column, String, Text, Boolean, TIMESTAMP, ForeignKey, JSON, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from app.database import Base
import uuid


class Quiz(Base):
    """
    Quizzes table - metadata, public slug and completion page configuration
    """
    __tablename__ = "quizzes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    slug = Column(String(16), unique=True, nullable=False, index=True)
    is_public = Column(Boolean, nullable=False, default=True)
    author_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    final_page = Column(JSON().with_variant(JSONB, "postgresql"))  # FinalPage, camelCase keys
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    author = relationship("User", back_populates="quizzes")
    questions = relationship(
        "Question",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="Question.order",
    )
    attempts = relationship("Attempt", back_populates="quiz", cascade="all, delete")
    link_clicks = relationship("LinkClick", back_populates="quiz", cascade="all, delete")

    def __repr__(self):
        return f"<Quiz(id={self.id}, slug={self.slug}, public={self.is_public})>"
