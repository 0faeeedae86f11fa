from __future__ import annotations


class ListingNotFoundError(LookupError):
    pass


class NotListingOwnerError(PermissionError):
    pass


class NotificationNotFoundError(LookupError):
    pass
