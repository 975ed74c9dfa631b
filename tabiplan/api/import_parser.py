# tabiplan/api/import_parser.py
"""Turn a pasted free-text schedule into itinerary items.

One candidate activity per line, e.g.::

    - 09:40 自宅を出る
    - 10:00 石神井公園駅 発
    - 11:55〜12:14 北ノ麺 もりうち

Lines without a time, or with nothing but a time, are skipped silently.
"""

from __future__ import annotations

import logging
import re
import uuid
from typing import Callable, List, Optional

from tabiplan.api.models import ItineraryItem

logger = logging.getLogger(__name__)

# re.ASCII keeps \d to 0-9 so full-width digits are not read as times.
TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)

# Leading bullet, start time, optional range end and an optional ":" separator
# (the separator lets rendered "- HH:MM: activity" lines import cleanly).
# \s stays Unicode so full-width spaces (U+3000) count as whitespace.
_LEADER_PATTERN = re.compile(
    r"^-?\s*[0-9]{1,2}:[0-9]{2}\s*(?:[〜~-]\s*[0-9]{1,2}:[0-9]{2})?\s*:?\s*"
)


def normalize_time(token: str) -> Optional[str]:
    """Zero-pad an ``H:MM`` / ``HH:MM`` token to ``HH:MM``.

    Returns None when the token is not a time of that shape.
    """
    match = TIME_PATTERN.fullmatch(token.strip())
    if not match:
        return None
    hours, minutes = match.groups()
    return f"{hours.zfill(2)}:{minutes.zfill(2)}"


def _default_batch_id() -> str:
    return uuid.uuid4().hex[:12]


class ImportParser:
    """Line-oriented extraction of timed activities."""

    def __init__(self, batch_id_factory: Callable[[], str] = _default_batch_id):
        self._batch_id_factory = batch_id_factory

    def parse(self, text: str) -> List[ItineraryItem]:
        """Parse every line of ``text``.

        Args:
            text: Pasted schedule, one activity per line

        Returns:
            New items in source-line order, not yet merged into any store
        """
        if not text or not text.strip():
            return []

        batch_id = self._batch_id_factory()
        items = []
        for index, line in enumerate(text.strip().splitlines()):
            item = self.parse_line(line, f"{batch_id}-{index}")
            if item is not None:
                items.append(item)

        logger.info(f"Import parsed {len(items)} item(s) from pasted text")
        return items

    @staticmethod
    def parse_line(line: str, item_id: str) -> Optional[ItineraryItem]:
        """Parse a single line, or return None if it yields no item."""
        match = TIME_PATTERN.search(line)
        if not match:
            return None

        hours, minutes = match.groups()
        time = f"{hours.zfill(2)}:{minutes.zfill(2)}"

        activity = _LEADER_PATTERN.sub("", line, count=1).strip()
        if not activity:
            return None

        return ItineraryItem(id=item_id, time=time, activity=activity)
