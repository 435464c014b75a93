"""
Database models package
"""
from app.models.user import User
from app.models.quiz import Quiz
from app.models.question import Question, Option
from app.models.attempt import Attempt, LinkClick

__all__ = ["User", "Quiz", "Question", "Option", "Attempt", "LinkClick"]
