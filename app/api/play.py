"""
Public quiz play and submission endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.schemas.play import AnswerSubmission, PlayQuiz, QuizResult
from app.services.quiz_service import quiz_service
from app.services.scoring_service import scoring_service
from app.utils.cache import cache_service


router = APIRouter(prefix="/api/play", tags=["play"])
logger = logging.getLogger(__name__)


@router.get("/{slug}", response_model=PlayQuiz)
def get_play_quiz(slug: str, db: Session = Depends(get_db)):
    """
    Get a published quiz for answering

    Option correctness is never included. Private and unknown quizzes
    both answer 404.
    """
    cache_key = cache_service.play_key(slug)
    cached = cache_service.get(cache_key)
    if cached:
        return PlayQuiz.model_validate(cached)

    quiz = quiz_service.get_by_slug(db, slug)
    if not quiz or not quiz.is_public:
        raise HTTPException(status_code=404, detail="Quiz not found")

    view = quiz_service.build_play_view(quiz)
    cache_service.set(cache_key, view.model_dump(by_alias=True, mode="json"))

    return view


@router.post("/{slug}/submit", response_model=QuizResult)
def submit_quiz(
    slug: str,
    submission: AnswerSubmission,
    db: Session = Depends(get_db)
):
    """
    Score a submission and store it as an anonymous attempt

    Returns score, total, rounded percentage and the completion page.
    """
    quiz = quiz_service.get_by_slug(db, slug)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    if not quiz.is_public:
        raise HTTPException(status_code=403, detail="Quiz is private")

    try:
        result = scoring_service.submit(db, quiz, submission.answers)
    except Exception as e:
        logger.error(f"Failed to submit quiz {slug}: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to submit quiz")

    return QuizResult(**result, final_page=quiz.final_page)
