"""
Pydantic schemas for analytics endpoints
"""
from pydantic import Field
from typing import List, Optional
from uuid import UUID

from app.schemas.base import CamelModel


class LinkClickCreate(CamelModel):
    """Completion page button click"""
    quiz_id: UUID
    button_url: Optional[str] = Field(None, max_length=2048)


class LinkClickResponse(CamelModel):
    success: bool = True


class QuizAnalytics(CamelModel):
    """Click and attempt counts for one quiz"""
    id: UUID
    title: str
    clicks: int
    attempts: int
    conversion_rate: int  # clicks per 100 attempts


class AnalyticsSummary(CamelModel):
    """Analytics across every quiz the caller owns"""
    total_clicks: int
    total_attempts: int
    quiz_analytics: List[QuizAnalytics]
