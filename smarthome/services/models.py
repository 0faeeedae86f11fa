from __future__ import annotations

from pydantic import BaseModel, Field

from ..listings.models import Listing, NotificationRecord

EMPTY_PICKS_MESSAGE = "No properties match your filters. Try widening your search."


class RankedListing(BaseModel):
    listing: Listing
    score: float


class AIPicksResponse(BaseModel):
    recommendations: list[RankedListing]
    total_candidates: int
    message: str | None = None


class ListingFeedResponse(BaseModel):
    listings: list[Listing]
    favorite_ids: list[str] = Field(default_factory=list)


class FavoriteToggleResponse(BaseModel):
    listing_id: str
    favorited: bool
    notified: bool
    warnings: list[str] = Field(default_factory=list)


class NotificationsResponse(BaseModel):
    notifications: list[NotificationRecord]
    unread: int


class ListingInterest(BaseModel):
    listing_id: str
    title: str
    likes: int


class InsightsResponse(BaseModel):
    listings: list[ListingInterest]
    total_likes: int
    most_liked: str | None = None
