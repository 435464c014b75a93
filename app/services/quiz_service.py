"""
Quiz authoring service: creation, listing, nested question sync, export
"""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Attempt, Option, Question, Quiz, User
from app.schemas.final_page import DEFAULT_FINAL_PAGE
from app.schemas.play import PlayQuiz
from app.schemas.quiz import (
    OptionInput,
    QuestionExport,
    QuestionInput,
    QuizCreate,
    QuizExport,
    QuizUpdate,
)
from app.utils.auth import AuthUser
from app.utils.slug import generate_unique_slug

logger = logging.getLogger(__name__)


class QuizService:
    """Service for quiz CRUD on behalf of an authenticated author"""

    def slug_exists(self, db: Session, slug: str) -> bool:
        return db.query(Quiz.id).filter(Quiz.slug == slug).first() is not None

    def get_quiz(self, db: Session, quiz_id: UUID, for_update: bool = False) -> Optional[Quiz]:
        """
        Fetch a quiz by id

        Args:
            db: Database session
            quiz_id: Quiz UUID
            for_update: Lock the row until the transaction ends
        """
        query = db.query(Quiz).filter(Quiz.id == quiz_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_by_slug(self, db: Session, slug: str) -> Optional[Quiz]:
        return db.query(Quiz).filter(Quiz.slug == slug).first()

    def create_quiz(self, db: Session, author: AuthUser, data: QuizCreate) -> Quiz:
        """
        Create a quiz with a fresh slug and the default completion page

        The author's users row is upserted from token claims first so the
        foreign key always resolves.
        """
        db.merge(User(
            id=author.id,
            email=author.email,
            name=author.name,
            avatar_url=author.avatar_url,
        ))

        slug = generate_unique_slug(lambda candidate: self.slug_exists(db, candidate))

        quiz = Quiz(
            title=data.title,
            description=data.description,
            is_public=data.is_public,
            slug=slug,
            author_id=author.id,
            final_page=DEFAULT_FINAL_PAGE.to_storage(),
        )
        db.add(quiz)
        db.commit()
        db.refresh(quiz)

        logger.info(f"Quiz created: {quiz.id} (slug={quiz.slug}, author={author.id})")

        return quiz

    def list_quizzes(self, db: Session, author_id: UUID) -> List[Tuple[Quiz, int, int]]:
        """
        List an author's quizzes, most recently updated first

        Returns:
            List of (quiz, question_count, attempt_count)
        """
        quizzes = (
            db.query(Quiz)
            .filter(Quiz.author_id == author_id)
            .order_by(Quiz.updated_at.desc())
            .all()
        )
        if not quizzes:
            return []

        quiz_ids = [quiz.id for quiz in quizzes]
        question_counts = self._count_by_quiz(db, Question.quiz_id, Question.id, quiz_ids)
        attempt_counts = self._count_by_quiz(db, Attempt.quiz_id, Attempt.id, quiz_ids)

        return [
            (quiz, question_counts.get(quiz.id, 0), attempt_counts.get(quiz.id, 0))
            for quiz in quizzes
        ]

    def _count_by_quiz(self, db: Session, quiz_column, id_column, quiz_ids: List[UUID]) -> Dict[UUID, int]:
        rows = (
            db.query(quiz_column, func.count(id_column))
            .filter(quiz_column.in_(quiz_ids))
            .group_by(quiz_column)
            .all()
        )
        return {quiz_id: count for quiz_id, count in rows}

    def update_quiz(self, db: Session, quiz: Quiz, data: QuizUpdate) -> Quiz:
        """
        Apply an editor save to a quiz

        Metadata fields are applied only when present in the payload. A
        `questions` array becomes the complete question set: entries whose
        ids already belong to this quiz are updated in place, the rest are
        inserted, and anything not listed is deleted along with its options.
        """
        provided = data.model_fields_set

        if "title" in provided and data.title is not None:
            quiz.title = data.title
        if "description" in provided:
            quiz.description = data.description
        if "is_public" in provided and data.is_public is not None:
            quiz.is_public = data.is_public
        if "final_page" in provided and data.final_page is not None:
            quiz.final_page = data.final_page.to_storage()

        if data.questions is not None:
            self._sync_questions(quiz, data.questions)

        quiz.updated_at = func.now()
        db.commit()
        db.refresh(quiz)

        logger.info(
            f"Quiz updated: {quiz.id} (fields={sorted(provided)}, "
            f"questions={len(quiz.questions)})"
        )

        return quiz

    def _sync_questions(self, quiz: Quiz, questions_in: List[QuestionInput]) -> None:
        existing = {str(question.id): question for question in quiz.questions}
        synced = []

        for question_in in questions_in:
            question = existing.pop(str(question_in.id), None) if question_in.id else None
            if question is None:
                question = Question()
            question.text = question_in.text
            question.order = question_in.order
            self._sync_options(question, question_in.options)
            synced.append(question)

        # delete-orphan removes whatever is left in `existing`
        quiz.questions = synced

    def _sync_options(self, question: Question, options_in: List[OptionInput]) -> None:
        existing = {str(option.id): option for option in question.options}
        synced = []

        for option_in in options_in:
            option = existing.pop(str(option_in.id), None) if option_in.id else None
            if option is None:
                option = Option()
            option.text = option_in.text
            option.is_correct = option_in.is_correct
            option.order = option_in.order
            synced.append(option)

        question.options = synced

    def delete_quiz(self, db: Session, quiz: Quiz) -> None:
        """Delete a quiz together with its questions, options, attempts and clicks"""
        quiz_id = quiz.id
        db.delete(quiz)
        db.commit()
        logger.info(f"Quiz deleted: {quiz_id}")

    def build_play_view(self, quiz: Quiz) -> PlayQuiz:
        """Public view of a quiz; option correctness is not part of the schema"""
        return PlayQuiz.model_validate(quiz)

    def build_export(self, quiz: Quiz) -> QuizExport:
        """Portable copy of a quiz including correctness, without ids"""
        return QuizExport(
            title=quiz.title,
            description=quiz.description,
            is_public=quiz.is_public,
            final_page=quiz.final_page,
            questions=[QuestionExport.model_validate(question) for question in quiz.questions],
            exported_at=datetime.now(timezone.utc),
        )


# Global instance
quiz_service = QuizService()
