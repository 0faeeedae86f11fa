"""
Demo data for local runs.

Usage:
    Loaded automatically by ``create_app`` unless ``SMARTHOME_SEED_DEMO=0``.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from ..listings.models import Listing, ListingDraft, UserRole, lenient_number
from .client import BackendClient

logger = logging.getLogger(__name__)

DEMO_OWNER = {"email": "owner@smarthome.test", "password": "owner123", "name": "Demo Owner"}
DEMO_TENANT = {"email": "tenant@smarthome.test", "password": "tenant123", "name": "Demo Tenant"}


def _seed_rating(cell: Any) -> float | None:
    """Ratings may be written as "4.1/5"; anything outside 0-5 is clamped."""
    if isinstance(cell, str):
        cell = cell.partition("/")[0]
    value = lenient_number(cell)
    return None if value is None else min(max(value, 0.0), 5.0)


def load_seed_listings(path: Path) -> list[ListingDraft]:
    df = pd.read_csv(path)

    df["rent"] = pd.to_numeric(df["rent"], errors="coerce").astype(float)
    df["rating"] = df["rating"].apply(_seed_rating)
    for col in ("latitude", "longitude"):
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0).astype(float)

    df = df.dropna(subset=["title", "rent"])
    df = df.astype(object).where(pd.notna(df), None)

    drafts: list[ListingDraft] = []
    for row in df.to_dict(orient="records"):
        fields: dict[str, Any] = {k: v for k, v in row.items() if v is not None}
        try:
            drafts.append(ListingDraft(**fields))
        except ValidationError:
            logger.warning("Skipping invalid seed listing %r", fields.get("title"), exc_info=True)
    return drafts


def seed_demo_data(backend: BackendClient, path: Path) -> int:
    """Register the demo owner and tenant and insert the seed listings. Returns the listing count."""
    owner = backend.auth.register(role=UserRole.OWNER, **DEMO_OWNER)
    backend.auth.register(role=UserRole.TENANT, **DEMO_TENANT)

    drafts = load_seed_listings(path)
    for draft in drafts:
        backend.listings.insert(Listing.from_draft(draft, owner_id=owner["id"], owner_email=owner["email"]))

    logger.info("Seeded %d demo listings from %s", len(drafts), path)
    return len(drafts)
