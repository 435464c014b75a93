"""
Pydantic schemas for quiz authoring requests and responses
"""
from pydantic import Field, field_validator
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from app.schemas.base import CamelModel
from app.schemas.final_page import FinalPage


class OptionInput(CamelModel):
    """Option as sent by the editor; `id` is present for existing options"""
    id: Optional[UUID] = None
    text: str = Field(..., min_length=1, max_length=1000)
    is_correct: bool = False
    order: int = Field(..., ge=0)


class QuestionInput(CamelModel):
    """Question as sent by the editor"""
    id: Optional[UUID] = None
    text: str = Field(..., min_length=1, max_length=2000)
    order: int = Field(..., ge=0)
    options: List[OptionInput] = Field(..., min_length=2, description="At least 2 options required")


class QuizCreate(CamelModel):
    """Schema for creating a quiz"""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    is_public: bool = True


class QuizUpdate(CamelModel):
    """
    Schema for updating a quiz

    Only fields present in the payload are applied. When `questions` is
    present it becomes the complete question set of the quiz.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    is_public: Optional[bool] = None
    final_page: Optional[FinalPage] = None
    questions: Optional[List[QuestionInput]] = None

    @field_validator("questions")
    @classmethod
    def question_orders_unique(cls, questions):
        if questions is not None:
            orders = [q.order for q in questions]
            if len(orders) != len(set(orders)):
                raise ValueError("Question order values must be unique")
        return questions


class OptionResponse(CamelModel):
    """Option including correctness (owner views only)"""
    id: UUID
    text: str
    is_correct: bool
    order: int


class QuestionResponse(CamelModel):
    """Question with its options"""
    id: UUID
    text: str
    order: int
    options: List[OptionResponse] = []


class QuizResponse(CamelModel):
    """Quiz metadata"""
    id: UUID
    title: str
    description: Optional[str] = None
    slug: str
    is_public: bool
    author_id: UUID
    final_page: Optional[FinalPage] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class QuizDetail(QuizResponse):
    """Quiz with its full question set"""
    questions: List[QuestionResponse] = []


class QuizSummary(QuizResponse):
    """Dashboard list entry"""
    question_count: int = 0
    attempt_count: int = 0


class DeleteResponse(CamelModel):
    success: bool = True


class OptionExport(CamelModel):
    text: str
    is_correct: bool
    order: int


class QuestionExport(CamelModel):
    text: str
    order: int
    options: List[OptionExport]


class QuizExport(CamelModel):
    """Portable quiz document without database identifiers"""
    title: str
    description: Optional[str] = None
    is_public: bool
    final_page: Optional[FinalPage] = None
    questions: List[QuestionExport]
    exported_at: datetime
