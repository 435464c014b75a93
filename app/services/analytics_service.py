"""
Analytics service for link click and attempt tracking
"""
import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models import Attempt, LinkClick, Quiz
from app.utils.numbers import percent

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Service for completion page analytics across an author's quizzes"""

    def aggregate(
        self,
        quizzes: Iterable[Any],
        click_quiz_ids: Iterable[Any],
        attempt_quiz_ids: Iterable[Any]
    ) -> Dict[str, Any]:
        """
        Aggregate click and attempt rows per quiz

        Conversion rate is clicks per 100 attempts.

        Args:
            quizzes: Objects with `id` and `title`
            click_quiz_ids: quiz_id of every LinkClick row
            attempt_quiz_ids: quiz_id of every Attempt row

        Returns:
            Dictionary with totals and per-quiz analytics sorted by clicks
        """
        clicks_by_quiz = Counter(str(quiz_id) for quiz_id in click_quiz_ids)
        attempts_by_quiz = Counter(str(quiz_id) for quiz_id in attempt_quiz_ids)

        quiz_analytics = []
        for quiz in quizzes:
            clicks = clicks_by_quiz.get(str(quiz.id), 0)
            attempts = attempts_by_quiz.get(str(quiz.id), 0)
            quiz_analytics.append({
                "id": quiz.id,
                "title": quiz.title,
                "clicks": clicks,
                "attempts": attempts,
                "conversion_rate": percent(clicks, attempts),
            })

        # Stable: equal click counts keep input order
        quiz_analytics.sort(key=lambda x: x["clicks"], reverse=True)

        return {
            "total_clicks": sum(item["clicks"] for item in quiz_analytics),
            "total_attempts": sum(item["attempts"] for item in quiz_analytics),
            "quiz_analytics": quiz_analytics,
        }

    def get_author_analytics(self, db: Session, author_id: UUID) -> Dict[str, Any]:
        """
        Get analytics for every quiz owned by an author

        Args:
            db: Database session
            author_id: Owner UUID

        Returns:
            Dictionary with totals and per-quiz analytics
        """
        quizzes = db.query(Quiz.id, Quiz.title).filter(Quiz.author_id == author_id).all()

        if not quizzes:
            return self.aggregate([], [], [])

        quiz_ids = [quiz.id for quiz in quizzes]

        clicks = db.query(LinkClick.quiz_id).filter(LinkClick.quiz_id.in_(quiz_ids)).all()
        attempts = db.query(Attempt.quiz_id).filter(Attempt.quiz_id.in_(quiz_ids)).all()

        logger.info(
            f"Analytics for author {author_id}: {len(quizzes)} quizzes, "
            f"{len(clicks)} clicks, {len(attempts)} attempts"
        )

        return self.aggregate(
            quizzes,
            (row.quiz_id for row in clicks),
            (row.quiz_id for row in attempts),
        )

    def record_click(
        self,
        db: Session,
        quiz_id: UUID,
        button_url: Optional[str] = None
    ) -> Optional[LinkClick]:
        """
        Record a completion page button click

        Returns:
            The stored click, or None if the quiz does not exist
        """
        exists = db.query(Quiz.id).filter(Quiz.id == quiz_id).first()
        if not exists:
            return None

        click = LinkClick(quiz_id=quiz_id, button_url=button_url or None)
        db.add(click)
        db.commit()

        logger.info(f"Link click recorded: quiz={quiz_id}, url={button_url}")

        return click


# Global instance
analytics_service = AnalyticsService()
