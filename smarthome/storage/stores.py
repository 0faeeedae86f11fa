"""
Table access for listings, favorites and notifications.

Each store mirrors one table of the hosted backend. Reads iterate a copy
of the table because request threads may write concurrently. They return
fresh lists; callers replace whatever they held before instead of patching it.
"""
from __future__ import annotations

from collections import Counter
from typing import Iterable

from ..listings.models import FavoriteMark, Listing, NotificationRecord
from .feed import ChangeFeed, ChangeKind, ListingChange


class StoreError(Exception):
    """The backend rejected or failed a read or write."""


class ListingStore:
    def __init__(self, feed: ChangeFeed) -> None:
        self._rows: dict[str, Listing] = {}
        self._feed = feed

    def fetch_all(self) -> list[Listing]:
        """All listings, newest first."""
        return list(reversed(list(self._rows.values())))

    def fetch_by_owner(self, owner_id: str) -> list[Listing]:
        return [listing for listing in self.fetch_all() if listing.owner_id == owner_id]

    def get(self, listing_id: str) -> Listing | None:
        return self._rows.get(listing_id)

    def insert(self, listing: Listing) -> Listing:
        if listing.id in self._rows:
            raise StoreError(f"duplicate key value violates unique constraint: {listing.id}")
        self._rows[listing.id] = listing
        self._feed.publish(ListingChange(ChangeKind.INSERT, listing.id))
        return listing

    def update(self, listing: Listing) -> Listing:
        if listing.id not in self._rows:
            raise StoreError(f"no listing with id {listing.id}")
        self._rows[listing.id] = listing
        self._feed.publish(ListingChange(ChangeKind.UPDATE, listing.id))
        return listing

    def delete(self, listing_id: str) -> None:
        if self._rows.pop(listing_id, None) is None:
            raise StoreError(f"no listing with id {listing_id}")
        self._feed.publish(ListingChange(ChangeKind.DELETE, listing_id))


class FavoriteStore:
    def __init__(self) -> None:
        self._marks: dict[tuple[str, str], FavoriteMark] = {}

    def fetch_by_tenant(self, tenant_id: str) -> list[str]:
        """Listing ids the tenant has favorited, oldest first."""
        return [mark.listing_id for mark in list(self._marks.values()) if mark.tenant_id == tenant_id]

    def insert(self, tenant_id: str, listing_id: str) -> FavoriteMark:
        key = (tenant_id, listing_id)
        if key not in self._marks:
            self._marks[key] = FavoriteMark(tenant_id=tenant_id, listing_id=listing_id)
        return self._marks[key]

    def delete(self, tenant_id: str, listing_id: str) -> None:
        self._marks.pop((tenant_id, listing_id), None)

    def count_by_listing(self, listing_ids: Iterable[str]) -> dict[str, int]:
        wanted = set(listing_ids)
        counts = Counter(mark.listing_id for mark in list(self._marks.values()) if mark.listing_id in wanted)
        return {listing_id: counts.get(listing_id, 0) for listing_id in wanted}

    def purge_deleted_listing(self, change: ListingChange) -> None:
        # Cascade: marks die with their listing
        if change.kind is not ChangeKind.DELETE:
            return
        for key in [key for key in list(self._marks) if key[1] == change.listing_id]:
            del self._marks[key]


class NotificationStore:
    def __init__(self) -> None:
        self._rows: dict[str, NotificationRecord] = {}

    def insert(self, record: NotificationRecord) -> NotificationRecord:
        if record.id in self._rows:
            raise StoreError(f"duplicate key value violates unique constraint: {record.id}")
        self._rows[record.id] = record
        return record

    def fetch_by_owner(self, owner_id: str) -> list[NotificationRecord]:
        """The owner's notifications, newest first."""
        return [record for record in reversed(list(self._rows.values())) if record.owner_id == owner_id]

    def mark_read(self, owner_id: str, notification_id: str) -> NotificationRecord | None:
        record = self._rows.get(notification_id)
        if record is None or record.owner_id != owner_id:
            return None
        record = record.model_copy(update={"is_read": True})
        self._rows[notification_id] = record
        return record
