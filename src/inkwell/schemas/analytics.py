"""Dashboard analytics schemas."""

from typing import Literal

from pydantic import BaseModel

from inkwell.schemas.common import UtcDatetime


class AnalyticsResponse(BaseModel):
    """Totals and growth percentages for an author's dashboard."""

    total_views: int
    total_likes: int
    total_followers: int
    recent_comments: int
    views_growth: float
    likes_growth: float
    comments_growth: float
    followers_growth: float


class ActivityItem(BaseModel):
    """One entry of the recent-activity widget."""

    type: Literal["like", "comment", "follow"]
    actor: str | None
    post_title: str | None = None
    timestamp: UtcDatetime
