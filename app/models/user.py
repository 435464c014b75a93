"""
User model - mirror of the auth provider's user record
"""
from sqlalchemy import Column, String, TIMESTAMP, Uuid, func
from sqlalchemy.orm import relationship
from app.database import Base


class User(Base):
    """
    Users table - upserted from access token claims when an author first writes
    """
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True)  # provider user id, never generated here
    email = Column(String(320), unique=True)
    name = Column(String(255))
    avatar_url = Column(String(2048))
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    quizzes = relationship("Quiz", back_populates="author", cascade="all, delete")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
