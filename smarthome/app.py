from __future__ import annotations

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.insights import compute_listing_interest
from .auth.dependencies import require_owner, require_tenant, require_user
from .auth.models import LoginRequest, RegisterRequest
from .auth.users import RegistrationError
from .config import DEFAULT_APP_CONFIG, AppConfig
from .listings.models import (
    FilterCriteria,
    FurnishedType,
    Listing,
    ListingDraft,
    NotificationRecord,
    PropertyType,
)
from .services.errors import (
    ListingNotFoundError,
    NotificationNotFoundError,
    NotListingOwnerError,
)
from .services.models import (
    AIPicksResponse,
    FavoriteToggleResponse,
    InsightsResponse,
    ListingFeedResponse,
    NotificationsResponse,
)
from .services.owner import (
    acknowledge_notification,
    create_listing,
    delete_listing,
    owner_notifications,
    update_listing,
)
from .services.snapshot import ListingSnapshot
from .services.tenant import ai_picks, favorite_listings, toggle_like
from .storage.client import BackendClient
from .storage.seed import seed_demo_data
from .storage.stores import StoreError

router = APIRouter()


def get_backend(request: Request) -> BackendClient:
    return request.app.state.backend


def get_snapshot(request: Request) -> ListingSnapshot:
    return request.app.state.snapshot


# ── Public endpoints ─────────────────────────────────────────────────────


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/metadata")
def metadata(snapshot: ListingSnapshot = Depends(get_snapshot)) -> dict:
    cities = sorted({listing.city for listing in snapshot.listings if listing.city})
    return {
        "cities": cities,
        "property_types": [t.value for t in PropertyType],
        "furnished_types": [t.value for t in FurnishedType],
    }


# ── Auth endpoints ───────────────────────────────────────────────────────


@router.post("/auth/register", status_code=201)
def register(
    body: RegisterRequest,
    request: Request,
    backend: BackendClient = Depends(get_backend),
) -> dict:
    try:
        user = backend.auth.register(body.email, body.password, body.role, body.name)
    except RegistrationError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    request.session["user"] = user
    return {"status": "registered", "user": user}


@router.post("/auth/login")
def login(
    body: LoginRequest,
    request: Request,
    backend: BackendClient = Depends(get_backend),
) -> dict:
    user = backend.auth.authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@router.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@router.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Tenant endpoints ─────────────────────────────────────────────────────


@router.get("/listings", response_model=ListingFeedResponse)
def listings(
    user: dict = Depends(require_tenant),
    backend: BackendClient = Depends(get_backend),
    snapshot: ListingSnapshot = Depends(get_snapshot),
) -> ListingFeedResponse:
    return ListingFeedResponse(
        listings=snapshot.listings,
        favorite_ids=backend.favorites.fetch_by_tenant(user["id"]),
    )


@router.get("/favorites", response_model=list[Listing])
def favorites(
    user: dict = Depends(require_tenant),
    backend: BackendClient = Depends(get_backend),
    snapshot: ListingSnapshot = Depends(get_snapshot),
) -> list[Listing]:
    return favorite_listings(backend, user["id"], snapshot.listings)


@router.post("/favorites/{listing_id}/toggle", response_model=FavoriteToggleResponse)
def toggle_favorite(
    listing_id: str,
    user: dict = Depends(require_tenant),
    backend: BackendClient = Depends(get_backend),
) -> FavoriteToggleResponse:
    try:
        return toggle_like(backend, user, listing_id)
    except ListingNotFoundError:
        raise HTTPException(status_code=404, detail="Property not found")
    except StoreError as exc:
        raise HTTPException(status_code=502, detail=f"Could not load favorites: {exc}")


@router.post("/ai-picks", response_model=AIPicksResponse)
def recommendations(
    body: FilterCriteria,
    user: dict = Depends(require_tenant),
    backend: BackendClient = Depends(get_backend),
    snapshot: ListingSnapshot = Depends(get_snapshot),
) -> AIPicksResponse:
    return ai_picks(backend, user["id"], snapshot.listings, body)


# ── Owner endpoints ──────────────────────────────────────────────────────


def _owned(call, *args):
    try:
        return call(*args)
    except ListingNotFoundError:
        raise HTTPException(status_code=404, detail="Property not found")
    except NotListingOwnerError:
        raise HTTPException(status_code=403, detail="You can only manage your own properties")


@router.get("/owner/listings", response_model=list[Listing])
def my_listings(
    user: dict = Depends(require_owner),
    backend: BackendClient = Depends(get_backend),
) -> list[Listing]:
    return backend.listings.fetch_by_owner(user["id"])


@router.post("/owner/listings", response_model=Listing, status_code=201)
def add_listing(
    body: ListingDraft,
    user: dict = Depends(require_owner),
    backend: BackendClient = Depends(get_backend),
) -> Listing:
    try:
        return create_listing(backend, user, body)
    except StoreError as exc:
        raise HTTPException(status_code=502, detail=f"Insert failed: {exc}")


@router.put("/owner/listings/{listing_id}", response_model=Listing)
def edit_listing(
    listing_id: str,
    body: ListingDraft,
    user: dict = Depends(require_owner),
    backend: BackendClient = Depends(get_backend),
) -> Listing:
    try:
        return _owned(update_listing, backend, user, listing_id, body)
    except StoreError as exc:
        raise HTTPException(status_code=502, detail=f"Update failed: {exc}")


@router.delete("/owner/listings/{listing_id}")
def remove_listing(
    listing_id: str,
    user: dict = Depends(require_owner),
    backend: BackendClient = Depends(get_backend),
) -> dict:
    try:
        _owned(delete_listing, backend, user, listing_id)
    except StoreError:
        raise HTTPException(status_code=502, detail="Error deleting property")
    return {"status": "deleted", "id": listing_id}


@router.get("/owner/notifications", response_model=NotificationsResponse)
def notifications(
    user: dict = Depends(require_owner),
    backend: BackendClient = Depends(get_backend),
) -> NotificationsResponse:
    return owner_notifications(backend, user["id"])


@router.post("/owner/notifications/{notification_id}/read", response_model=NotificationRecord)
def read_notification(
    notification_id: str,
    user: dict = Depends(require_owner),
    backend: BackendClient = Depends(get_backend),
) -> NotificationRecord:
    try:
        return acknowledge_notification(backend, user["id"], notification_id)
    except NotificationNotFoundError:
        raise HTTPException(status_code=404, detail="Notification not found")


@router.get("/owner/insights", response_model=InsightsResponse)
def insights(
    user: dict = Depends(require_owner),
    backend: BackendClient = Depends(get_backend),
) -> InsightsResponse:
    owned = backend.listings.fetch_by_owner(user["id"])
    counts = backend.favorites.count_by_listing(listing.id for listing in owned)
    return compute_listing_interest(owned, counts)


def create_app(
    backend: BackendClient | None = None,
    config: AppConfig = DEFAULT_APP_CONFIG,
) -> FastAPI:
    if backend is None:
        backend = BackendClient(bcrypt_rounds=config.bcrypt_rounds)
        if config.seed_demo_data:
            seed_demo_data(backend, config.seed_path)

    application = FastAPI(title="SmartHome Rentals API", version="1.0.0")
    application.add_middleware(SessionMiddleware, secret_key=config.session_secret)
    application.state.backend = backend
    application.state.snapshot = ListingSnapshot(backend)
    application.include_router(router)
    return application


app = create_app()
