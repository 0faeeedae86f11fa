from __future__ import annotations

from collections import Counter
from typing import Sequence

from ..listings.models import Listing
from ..services.models import InsightsResponse, ListingInterest


def compute_listing_interest(
    listings: Sequence[Listing],
    like_counts: dict[str, int],
) -> InsightsResponse:
    """Rank an owner's listings by how many tenants currently favorite them."""
    titles = {listing.id: listing.title for listing in listings}

    counter: Counter[str] = Counter()
    # Seed every listing so unliked ones still show with zero
    for listing in listings:
        counter[listing.id] = like_counts.get(listing.id, 0)

    ranked = [
        ListingInterest(listing_id=listing_id, title=titles[listing_id], likes=count)
        for listing_id, count in counter.most_common()
    ]
    total = sum(counter.values())
    most_liked = ranked[0].listing_id if ranked and ranked[0].likes > 0 else None

    return InsightsResponse(listings=ranked, total_likes=total, most_liked=most_liked)
