from __future__ import annotations

from fastapi import HTTPException, Request

from ..listings.models import UserRole


def require_user(request: Request) -> dict:
    """Raise 401 if no user is logged in."""
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def _require_role(request: Request, role: UserRole) -> dict:
    user = require_user(request)
    if user.get("role") != role.value:
        raise HTTPException(status_code=403, detail=f"{role.value.title()} access required")
    return user


def require_tenant(request: Request) -> dict:
    """Raise 401 if not logged in, 403 if not a tenant."""
    return _require_role(request, UserRole.TENANT)


def require_owner(request: Request) -> dict:
    """Raise 401 if not logged in, 403 if not an owner."""
    return _require_role(request, UserRole.OWNER)
