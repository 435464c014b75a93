"""
Quiz authoring API endpoints (owner only)
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
import json
import logging

from app.database import get_db
from app.models import Quiz
from app.schemas.quiz import (
    DeleteResponse,
    QuizCreate,
    QuizDetail,
    QuizResponse,
    QuizSummary,
    QuizUpdate,
)
from app.services.quiz_service import quiz_service
from app.utils.auth import AuthUser, get_current_user
from app.utils.cache import cache_service


router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])
logger = logging.getLogger(__name__)


def _get_owned_quiz(db: Session, quiz_id: UUID, user: AuthUser, for_update: bool = False) -> Quiz:
    """Existence is checked before ownership, so unknown ids are always 404"""
    quiz = quiz_service.get_quiz(db, quiz_id, for_update=for_update)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    if quiz.author_id != user.id:
        raise HTTPException(status_code=403, detail="Forbidden")
    return quiz


@router.get("", response_model=List[QuizSummary])
def list_quizzes(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List the caller's quizzes with question and attempt counts

    Most recently updated first.
    """
    try:
        rows = quiz_service.list_quizzes(db, user.id)
    except Exception as e:
        logger.error(f"Failed to fetch quizzes: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch quizzes")

    return [
        QuizSummary.model_validate(quiz).model_copy(
            update={"question_count": question_count, "attempt_count": attempt_count}
        )
        for quiz, question_count, attempt_count in rows
    ]


@router.post("", response_model=QuizResponse, status_code=201)
def create_quiz(
    payload: QuizCreate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a quiz

    - Generates a unique 8 character slug
    - Populates the default completion page
    """
    try:
        quiz = quiz_service.create_quiz(db, user, payload)
    except Exception as e:
        logger.error(f"Failed to create quiz: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to create quiz")

    return QuizResponse.model_validate(quiz)


@router.get("/{quiz_id}", response_model=QuizDetail)
def get_quiz(
    quiz_id: UUID,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a quiz with questions and options, including correctness"""
    quiz = _get_owned_quiz(db, quiz_id, user)
    return QuizDetail.model_validate(quiz)


@router.put("/{quiz_id}", response_model=QuizDetail)
def update_quiz(
    quiz_id: UUID,
    payload: QuizUpdate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update quiz metadata and, optionally, its full question set

    When `questions` is sent, questions and options missing from it are
    deleted; entries carrying a known id keep it.
    """
    quiz = _get_owned_quiz(db, quiz_id, user, for_update=True)

    try:
        quiz = quiz_service.update_quiz(db, quiz, payload)
    except Exception as e:
        logger.error(f"Failed to update quiz {quiz_id}: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to update quiz")

    cache_service.delete(cache_service.play_key(quiz.slug))

    return QuizDetail.model_validate(quiz)


@router.delete("/{quiz_id}", response_model=DeleteResponse)
def delete_quiz(
    quiz_id: UUID,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a quiz and everything recorded against it"""
    quiz = _get_owned_quiz(db, quiz_id, user)
    slug = quiz.slug

    try:
        quiz_service.delete_quiz(db, quiz)
    except Exception as e:
        logger.error(f"Failed to delete quiz {quiz_id}: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to delete quiz")

    cache_service.delete(cache_service.play_key(slug))

    return DeleteResponse(success=True)


@router.get("/{quiz_id}/export")
def export_quiz(
    quiz_id: UUID,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Download a quiz as a JSON document"""
    quiz = _get_owned_quiz(db, quiz_id, user)
    export = quiz_service.build_export(quiz)

    return Response(
        content=json.dumps(export.model_dump(by_alias=True, mode="json"), indent=2),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{quiz.slug}-export.json"'},
    )
