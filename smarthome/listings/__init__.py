"""
Listing domain core.

Responsibilities:
- Define listings, filter criteria, favorites and owner notifications.
- Filter a listing collection down to the tenant's constraints.
- Score and rank candidates by rating and affinity with favorites.
- Compute the favorite toggle and the notification it emits.
"""
