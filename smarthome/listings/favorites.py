from __future__ import annotations

from .models import Listing, NotificationRecord, ToggleOutcome


def like_message(tenant_label: str, listing: Listing) -> str:
    return f'Tenant {tenant_label} liked your property "{listing.title}"'


def toggle_favorite(
    tenant_id: str,
    listing: Listing,
    currently_favorited: bool,
    tenant_label: str | None = None,
) -> ToggleOutcome:
    """
    Flip a tenant's favorite state for one listing.

    Liking yields exactly one notification for the listing owner; unliking
    yields none. The notification is returned, not stored.
    """
    if currently_favorited:
        return ToggleOutcome(new_state=False)

    notification = NotificationRecord(
        owner_id=listing.owner_id,
        message=like_message(tenant_label or tenant_id, listing),
    )
    return ToggleOutcome(new_state=True, notification=notification)
