"""
Pydantic schemas for the public play flow
"""
from pydantic import Field
from typing import Dict, List, Optional
from uuid import UUID

from app.schemas.base import CamelModel
from app.schemas.final_page import FinalPage


class PlayOption(CamelModel):
    """Option without correctness"""
    id: UUID
    text: str
    order: int


class PlayQuestion(CamelModel):
    id: UUID
    text: str
    order: int
    options: List[PlayOption] = []


class PlayQuiz(CamelModel):
    """Public view of a published quiz"""
    id: UUID
    title: str
    description: Optional[str] = None
    questions: List[PlayQuestion] = []
    final_page: Optional[FinalPage] = None


class AnswerSubmission(CamelModel):
    """Schema for quiz submission"""
    answers: Dict[str, str] = Field(..., description="{question_id: option_id}")


class QuizResult(CamelModel):
    """Response after scoring"""
    score: int
    total: int
    percentage: int
    final_page: Optional[FinalPage] = None
