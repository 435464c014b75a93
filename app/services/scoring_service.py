"""
Answer scoring for quiz submissions
"""
import logging
from typing import Any, Dict, Iterable, Mapping

from sqlalchemy.orm import Session

from app.models import Attempt, Quiz
from app.utils.numbers import percent

logger = logging.getLogger(__name__)


class ScoringService:
    """
    Service for scoring quiz submissions

    One point per question whose selected option is flagged correct. The
    total is the number of questions in the quiz, not the number answered.
    """

    def score(
        self,
        questions: Iterable[Any],
        answers: Mapping[str, str]
    ) -> Dict[str, int]:
        """
        Score answers against a question set

        Args:
            questions: Objects with `id` and `options` (each with `id`, `is_correct`)
            answers: {question_id: option_id}

        Returns:
            Dict with score, total and percentage
        """
        score = 0
        total = 0

        for question in questions:
            total += 1
            selected = answers.get(str(question.id))
            if not selected:
                continue

            correct_ids = {str(option.id) for option in question.options if option.is_correct}
            if selected in correct_ids:
                score += 1

        return {
            "score": score,
            "total": total,
            "percentage": percent(score, total),
        }

    def submit(self, db: Session, quiz: Quiz, answers: Dict[str, str]) -> Dict[str, int]:
        """
        Score a submission and persist it as an Attempt

        Args:
            db: Database session
            quiz: Quiz with its questions and options loaded
            answers: Raw answers mapping, stored unchanged

        Returns:
            Dict with score, total and percentage
        """
        result = self.score(quiz.questions, answers)

        attempt = Attempt(
            quiz_id=quiz.id,
            answers=answers,
            score=result["score"],
            total=result["total"],
        )
        db.add(attempt)
        db.commit()

        logger.info(
            f"Attempt recorded: quiz={quiz.id}, "
            f"score={result['score']}/{result['total']} ({result['percentage']}%)"
        )

        return result


# Global instance
scoring_service = ScoringService()
