from __future__ import annotations

import logging
from typing import Any

from ..listings.models import Listing, ListingDraft, NotificationRecord
from ..storage.client import BackendClient
from ..storage.stores import StoreError
from .errors import ListingNotFoundError, NotificationNotFoundError, NotListingOwnerError
from .models import NotificationsResponse

logger = logging.getLogger(__name__)


def _owned_listing(backend: BackendClient, owner_id: str, listing_id: str) -> Listing:
    listing = backend.listings.get(listing_id)
    if listing is None:
        raise ListingNotFoundError(listing_id)
    if listing.owner_id != owner_id:
        raise NotListingOwnerError(listing_id)
    return listing


def create_listing(backend: BackendClient, owner: dict[str, Any], draft: ListingDraft) -> Listing:
    listing = Listing.from_draft(draft, owner_id=owner["id"], owner_email=owner["email"])
    try:
        return backend.listings.insert(listing)
    except StoreError:
        logger.error("Insert of listing %r for owner %s failed", draft.title, owner["id"])
        raise


def update_listing(
    backend: BackendClient,
    owner: dict[str, Any],
    listing_id: str,
    draft: ListingDraft,
) -> Listing:
    current = _owned_listing(backend, owner["id"], listing_id)
    try:
        return backend.listings.update(current.revised(draft))
    except StoreError:
        logger.error("Update of listing %s failed", listing_id)
        raise


def delete_listing(backend: BackendClient, owner: dict[str, Any], listing_id: str) -> None:
    _owned_listing(backend, owner["id"], listing_id)
    try:
        backend.listings.delete(listing_id)
    except StoreError:
        logger.error("Delete of listing %s failed", listing_id)
        raise


def owner_notifications(backend: BackendClient, owner_id: str) -> NotificationsResponse:
    notifications = backend.notifications.fetch_by_owner(owner_id)
    return NotificationsResponse(
        notifications=notifications,
        unread=sum(1 for n in notifications if not n.is_read),
    )


def acknowledge_notification(
    backend: BackendClient, owner_id: str, notification_id: str,
) -> NotificationRecord:
    record = backend.notifications.mark_read(owner_id, notification_id)
    if record is None:
        raise NotificationNotFoundError(notification_id)
    return record
