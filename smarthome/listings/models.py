from __future__ import annotations

import math
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ANY = "Any"

DEFAULT_IMAGE_URL = "https://picsum.photos/800/600"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class UserRole(str, Enum):
    TENANT = "TENANT"
    OWNER = "OWNER"


class PropertyType(str, Enum):
    APARTMENT = "Apartment"
    HOUSE = "Individual House"
    BHK2 = "2BHK"
    BHK3 = "3BHK"
    STUDIO = "Studio"


class FurnishedType(str, Enum):
    FULLY = "Fully Furnished"
    SEMI = "Semi Furnished"
    UNFURNISHED = "Unfurnished"


class ListingDraft(BaseModel):
    """Owner-editable listing fields, used for both create and update."""

    title: str = Field(..., min_length=1)
    description: str = ""
    city: str = ""
    property_type: PropertyType = PropertyType.BHK2
    furnished_type: FurnishedType = FurnishedType.FULLY
    rating: float = Field(default=4.0, ge=0.0, le=5.0)
    rent: float = Field(..., ge=0.0)
    image_url: str = DEFAULT_IMAGE_URL
    video_url: str | None = None
    latitude: float = 0.0
    longitude: float = 0.0

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value

    @field_validator("video_url")
    @classmethod
    def _blank_video_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value


class Listing(ListingDraft):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    owner_id: str
    owner_email: str = ""
    created_at: datetime = Field(default_factory=_now)

    @classmethod
    def from_draft(cls, draft: ListingDraft, owner_id: str, owner_email: str = "") -> Listing:
        return cls(owner_id=owner_id, owner_email=owner_email, **draft.model_dump())

    def revised(self, draft: ListingDraft) -> Listing:
        """Return a copy carrying the draft's fields; id, owner and creation time are kept."""
        return self.model_copy(update=draft.model_dump())


class FavoriteMark(BaseModel):
    model_config = ConfigDict(frozen=True)

    tenant_id: str
    listing_id: str
    created_at: datetime = Field(default_factory=_now)


class NotificationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    owner_id: str
    message: str
    created_at: datetime = Field(default_factory=_now)
    is_read: bool = False


class ToggleOutcome(BaseModel):
    new_state: bool
    notification: NotificationRecord | None = None


def lenient_number(value: Any) -> float | None:
    """Blank, non-numeric or non-finite input means "no constraint"."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value) if isinstance(value, (int, float)) else float(str(value).strip())
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


class FilterCriteria(BaseModel):
    min_rent: float | None = None
    max_rent: float | None = None
    city: str | None = None
    furnished_type: FurnishedType | Literal["Any"] = ANY
    property_type: PropertyType | Literal["Any"] = ANY
    min_rating: float | None = None

    @field_validator("min_rent", "max_rent", "min_rating", mode="before")
    @classmethod
    def _parse_number(cls, value: Any) -> float | None:
        return lenient_number(value)

    @field_validator("city", mode="before")
    @classmethod
    def _blank_city_is_unset(cls, value: Any) -> str | None:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("furnished_type", "property_type", mode="before")
    @classmethod
    def _blank_category_is_any(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return ANY
        return value
