"""
Hosted backend access.

Responsibilities:
- Hold the listings, favorites and notifications tables.
- Provide email/password identity for tenants and owners.
- Broadcast listing changes so readers can refetch.
- Load demo accounts and listings on startup.
"""
