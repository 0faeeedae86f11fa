"""
Tenant-side workflows.

Responsibilities:
- Resolve the tenant's favorite listings from the current snapshot.
- Run AI Picks: filter the snapshot, then rank by relevance to favorites.
- Toggle a favorite and emit the owner notification on a like.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from ..listings.favorites import toggle_favorite
from ..listings.filters import filter_listings
from ..listings.models import FilterCriteria, Listing
from ..listings.ranking import score_listings
from ..storage.client import BackendClient
from ..storage.stores import StoreError
from .errors import ListingNotFoundError
from .models import (
    EMPTY_PICKS_MESSAGE,
    AIPicksResponse,
    FavoriteToggleResponse,
    RankedListing,
)

logger = logging.getLogger(__name__)

FAVORITE_WRITE_WARNING = "Your favorite could not be saved. Please try again."
NOTIFICATION_WRITE_WARNING = "The owner could not be notified about your like."


def favorite_listings(
    backend: BackendClient,
    tenant_id: str,
    listings: Sequence[Listing],
) -> list[Listing]:
    """Listings from *listings* that the tenant has favorited, in listing order."""
    liked_ids = set(backend.favorites.fetch_by_tenant(tenant_id))
    return [listing for listing in listings if listing.id in liked_ids]


def ai_picks(
    backend: BackendClient,
    tenant_id: str,
    listings: Sequence[Listing],
    criteria: FilterCriteria,
) -> AIPicksResponse:
    candidates = filter_listings(listings, criteria)
    if not candidates:
        return AIPicksResponse(recommendations=[], total_candidates=0, message=EMPTY_PICKS_MESSAGE)

    favorites = favorite_listings(backend, tenant_id, listings)
    items = [
        RankedListing(listing=listing, score=round(score, 4))
        for listing, score in score_listings(candidates, favorites)
    ]
    return AIPicksResponse(recommendations=items, total_candidates=len(candidates))


def toggle_like(
    backend: BackendClient,
    tenant: dict[str, Any],
    listing_id: str,
) -> FavoriteToggleResponse:
    """
    Like or unlike a listing for the tenant.

    The favorite write and the notification write are independent: a
    failure in one is reported as a warning and does not undo the other.
    """
    listing = backend.listings.get(listing_id)
    if listing is None:
        raise ListingNotFoundError(listing_id)

    tenant_id = tenant["id"]
    currently_favorited = listing_id in backend.favorites.fetch_by_tenant(tenant_id)
    outcome = toggle_favorite(
        tenant_id, listing, currently_favorited, tenant_label=tenant.get("email"),
    )

    warnings: list[str] = []
    favorited = currently_favorited
    try:
        if outcome.new_state:
            backend.favorites.insert(tenant_id, listing_id)
        else:
            backend.favorites.delete(tenant_id, listing_id)
        favorited = outcome.new_state
    except StoreError:
        logger.warning(
            "Favorite write failed for tenant %s on listing %s", tenant_id, listing_id, exc_info=True,
        )
        warnings.append(FAVORITE_WRITE_WARNING)

    notified = False
    if outcome.notification is not None:
        try:
            backend.notifications.insert(outcome.notification)
            notified = True
        except StoreError:
            logger.warning(
                "Like notification for owner %s was not stored", listing.owner_id, exc_info=True,
            )
            warnings.append(NOTIFICATION_WRITE_WARNING)

    return FavoriteToggleResponse(
        listing_id=listing_id,
        favorited=favorited,
        notified=notified,
        warnings=warnings,
    )
