from __future__ import annotations

from ..auth.users import DEFAULT_BCRYPT_ROUNDS, IdentityProvider
from .feed import ChangeFeed
from .stores import FavoriteStore, ListingStore, NotificationStore


class BackendClient:
    """
    Handle to the hosted backend.

    Bundles the identity provider, the listings/favorites/notifications
    tables and the listings change feed. Construct one per application and
    pass it to whatever needs storage access.
    """

    def __init__(self, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.feed = ChangeFeed()
        self.auth = IdentityProvider(bcrypt_rounds=bcrypt_rounds)
        self.listings = ListingStore(self.feed)
        self.favorites = FavoriteStore()
        self.notifications = NotificationStore()
        self.feed.subscribe(self.favorites.purge_deleted_listing)
