# src/inkwell/api/v1/endpoints/dashboard.py
"""Author dashboard endpoints."""

from fastapi import APIRouter, Query

from inkwell.api.v1.dependencies import CurrentUserDep, SessionDep
from inkwell.schemas.analytics import ActivityItem, AnalyticsResponse
from inkwell.schemas.post import PostWithAnalytics
from inkwell.services import analytics

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(current_user: CurrentUserDep, db: SessionDep) -> AnalyticsResponse:
    """Return totals and growth figures for the caller's posts."""
    return analytics.get_analytics(db, current_user)


@router.get("/activity", response_model=list[ActivityItem])
async def get_recent_activity(
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: int | None = Query(None, ge=1, le=50),
) -> list[ActivityItem]:
    """Return the newest likes, comments and follows around the caller."""
    return analytics.recent_activity(db, current_user, limit)


@router.get("/posts", response_model=list[PostWithAnalytics])
async def get_posts_with_analytics(
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: int | None = Query(None, ge=1, le=50),
) -> list[PostWithAnalytics]:
    """Return the caller's most recent posts with comment counts."""
    return analytics.get_posts_with_analytics(db, current_user, limit)
