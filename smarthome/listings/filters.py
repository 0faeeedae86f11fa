"""
Attribute filtering for tenant searches.

Every criterion left unset passes all listings through; the result keeps
the input order.
"""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from .models import ANY, FilterCriteria, Listing


def _to_frame(listings: Sequence[Listing]) -> pd.DataFrame:
    return pd.DataFrame({
        "rent": [listing.rent for listing in listings],
        "rating": [listing.rating for listing in listings],
        # Lowercase city for case-insensitive lookup
        "city_lower": [listing.city.lower() for listing in listings],
        "furnished_type": [listing.furnished_type.value for listing in listings],
        "property_type": [listing.property_type.value for listing in listings],
    })


def filter_listings(listings: Sequence[Listing], criteria: FilterCriteria) -> list[Listing]:
    """Return the listings that satisfy every constraint set on *criteria*."""
    if not listings:
        return []

    df = _to_frame(listings)
    mask = pd.Series(True, index=df.index)

    if criteria.min_rent is not None:
        mask = mask & (df["rent"] >= criteria.min_rent)

    if criteria.max_rent is not None:
        mask = mask & (df["rent"] <= criteria.max_rent)

    if criteria.city:
        city_lower = criteria.city.lower()
        mask = mask & df["city_lower"].str.contains(city_lower, regex=False, na=False)

    if criteria.furnished_type != ANY:
        mask = mask & (df["furnished_type"] == criteria.furnished_type.value)

    if criteria.property_type != ANY:
        mask = mask & (df["property_type"] == criteria.property_type.value)

    if criteria.min_rating is not None:
        mask = mask & (df["rating"] >= criteria.min_rating)

    return [listing for listing, keep in zip(listings, mask.tolist()) if keep]
