"""
Completion page analytics API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.schemas.analytics import AnalyticsSummary, LinkClickCreate, LinkClickResponse
from app.services.analytics_service import analytics_service
from app.utils.auth import AuthUser, get_current_user

router = APIRouter(prefix="/api/analytics", tags=["analytics"])
logger = logging.getLogger(__name__)


@router.post("/click", response_model=LinkClickResponse)
def track_click(payload: LinkClickCreate, db: Session = Depends(get_db)):
    """Record a click on a completion page button that opens a URL"""

    try:
        click = analytics_service.record_click(db, payload.quiz_id, payload.button_url)
    except Exception as e:
        logger.error(f"Failed to track click: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to track click")

    if click is None:
        raise HTTPException(status_code=404, detail="Quiz not found")

    return LinkClickResponse(success=True)


@router.get("", response_model=AnalyticsSummary)
def get_analytics(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get analytics across every quiz the caller owns

    Returns:
    - Total clicks and attempts
    - Per-quiz clicks, attempts and conversion rate, most clicked first
    """

    try:
        logger.info(f"Fetching analytics for author {user.id}")

        summary = analytics_service.get_author_analytics(db, user.id)

        return AnalyticsSummary(**summary)

    except Exception as e:
        logger.error(f"Failed to fetch analytics: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")
