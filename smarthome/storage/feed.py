from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ListingChange:
    kind: ChangeKind
    listing_id: str


Subscriber = Callable[[ListingChange], None]


class ChangeFeed:
    """Realtime channel on the listings table: every subscriber hears every change."""

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self, change: ListingChange) -> None:
        for callback in list(self._subscribers):
            try:
                callback(change)
            except Exception:
                logger.warning(
                    "Listing change subscriber failed on %s %s",
                    change.kind.value,
                    change.listing_id,
                    exc_info=True,
                )
