from __future__ import annotations

import logging

from ..listings.models import Listing
from ..storage.client import BackendClient
from ..storage.feed import ListingChange

logger = logging.getLogger(__name__)


class ListingSnapshot:
    """
    Tenant-facing copy of the listing collection.

    Any change signal from the backend triggers a full refetch; the newest
    fetch replaces the previous snapshot outright.
    """

    def __init__(self, backend: BackendClient) -> None:
        self._backend = backend
        self._listings: list[Listing] = []
        self.refresh()
        backend.feed.subscribe(self._on_change)

    @property
    def listings(self) -> list[Listing]:
        return list(self._listings)

    def refresh(self) -> list[Listing]:
        self._listings = self._backend.listings.fetch_all()
        return self.listings

    def _on_change(self, change: ListingChange) -> None:
        logger.debug("Listings changed (%s %s), refetching", change.kind.value, change.listing_id)
        self.refresh()

    def close(self) -> None:
        self._backend.feed.unsubscribe(self._on_change)
