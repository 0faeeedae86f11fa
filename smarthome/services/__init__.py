"""
Request-level workflows over the backend client.

Responsibilities:
- Keep a wholesale-refetched listing snapshot for tenant reads.
- Run AI Picks and the favorite toggle for tenants.
- Manage listings and notifications for owners.
"""
