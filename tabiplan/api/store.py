# tabiplan/api/store.py
"""In-memory, time-ordered collection of itinerary items."""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from tabiplan.api.errors import ItemNotFoundError, ValidationError
from tabiplan.api.import_parser import normalize_time
from tabiplan.api.models import ItineraryItem

logger = logging.getLogger(__name__)


def _default_id() -> str:
    return uuid.uuid4().hex


class ItineraryStore:
    """Canonical list of the day's activities, always sorted by time.

    Sorting compares the zero-padded ``HH:MM`` strings and is stable, so
    items sharing a time keep the order in which they were last inserted
    or updated.
    """

    def __init__(self, id_factory: Callable[[], str] = _default_id):
        self._items: List[ItineraryItem] = []
        self._id_factory = id_factory

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ItineraryItem]:
        return iter(self.snapshot())

    def add(self, time: str, activity: str, url: Optional[str] = None) -> ItineraryItem:
        """Create a new item and insert it in time order.

        Args:
            time: Time of day, ``H:MM`` or ``HH:MM``
            activity: Description; surrounding whitespace is dropped
            url: Optional reference link; blank means none

        Returns:
            The stored item

        Raises:
            ValidationError: If the activity is blank or the time malformed
        """
        item = self._build_item(self._new_id(), time, activity, url)
        self._items.append(item)
        self._sort()
        logger.debug(f"Added item {item.id} at {item.time}")
        return item

    def update(self, item_id: str, time: str, activity: str,
               url: Optional[str] = None) -> ItineraryItem:
        """Replace the item with ``item_id`` and re-sort.

        Raises:
            ValidationError: If the activity is blank or the time malformed
            ItemNotFoundError: If no item has that id
        """
        item = self._build_item(item_id, time, activity, url)
        index = self._index_of(item_id)
        if index is None:
            raise ItemNotFoundError(item_id)

        # Re-append so the latest update wins ties at the same time.
        del self._items[index]
        self._items.append(item)
        self._sort()
        logger.debug(f"Updated item {item_id} -> {item.time}")
        return item

    def delete(self, item_id: str) -> None:
        """Remove the item with ``item_id``; unknown ids are ignored."""
        index = self._index_of(item_id)
        if index is None:
            logger.debug(f"Delete ignored, no item {item_id}")
            return
        del self._items[index]
        logger.debug(f"Deleted item {item_id}")

    def extend(self, items: Iterable[ItineraryItem]) -> List[ItineraryItem]:
        """Merge a batch of already-built items and sort once.

        Used for imports. Either the whole batch goes in or nothing does.

        Raises:
            ValidationError: If any id is already taken or repeated
        """
        batch = list(items)
        seen = {item.id for item in self._items}
        for item in batch:
            if item.id in seen:
                raise ValidationError("duplicate-id", f"Duplicate item id {item.id}")
            seen.add(item.id)

        self._items.extend(batch)
        self._sort()
        return batch

    def get(self, item_id: str) -> Optional[ItineraryItem]:
        index = self._index_of(item_id)
        return None if index is None else self._items[index]

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> Tuple[ItineraryItem, ...]:
        """Return a read-only, time-sorted copy of the items."""
        return tuple(
            ItineraryItem(id=i.id, time=i.time, activity=i.activity, url=i.url)
            for i in self._items
        )

    def to_list(self) -> List[Dict]:
        return [item.to_dict() for item in self._items]

    def _build_item(self, item_id: str, time: str, activity: str,
                    url: Optional[str]) -> ItineraryItem:
        activity = (activity or "").strip()
        if not activity:
            raise ValidationError("empty-activity")

        normalized = normalize_time(time or "")
        if normalized is None:
            raise ValidationError("invalid-time", f"Invalid time: {time!r}")

        url = (url or "").strip() or None
        return ItineraryItem(id=item_id, time=normalized, activity=activity, url=url)

    def _new_id(self) -> str:
        item_id = self._id_factory()
        while self._index_of(item_id) is not None:
            item_id = self._id_factory()
        return item_id

    def _index_of(self, item_id: str) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return None

    def _sort(self) -> None:
        # list.sort is stable
        self._items.sort(key=lambda item: item.time)
