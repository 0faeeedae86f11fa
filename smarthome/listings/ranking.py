from __future__ import annotations

from typing import Sequence

from .models import Listing

RATING_WEIGHT = 2.0
CITY_BONUS = 5.0
PROPERTY_TYPE_BONUS = 3.0


def relevance_score(listing: Listing, favorites: Sequence[Listing]) -> float:
    """Score a listing by its rating plus city and type affinity with the tenant's favorites."""
    score = RATING_WEIGHT * listing.rating
    if favorites:
        if any(fav.city == listing.city for fav in favorites):
            score += CITY_BONUS
        if any(fav.property_type == listing.property_type for fav in favorites):
            score += PROPERTY_TYPE_BONUS
    return score


def score_listings(
    candidates: Sequence[Listing],
    favorites: Sequence[Listing],
) -> list[tuple[Listing, float]]:
    scored = [(listing, relevance_score(listing, favorites)) for listing in candidates]
    # sorted() is stable, so equal scores keep their candidate order
    return sorted(scored, key=lambda pair: pair[1], reverse=True)


def rank_listings(candidates: Sequence[Listing], favorites: Sequence[Listing]) -> list[Listing]:
    return [listing for listing, _ in score_listings(candidates, favorites)]
