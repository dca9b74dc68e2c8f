"""Id generation for items and review schedules.

Review ids are derived from the item id and the scheduled date, so asking for
the same plan twice yields the same ids. Callers that need a different scheme
pass their own factory to the engine.
"""

from collections.abc import Callable
from datetime import datetime
import uuid

# (item_id, scheduled_date) -> review id
IdFactory = Callable[[str, datetime], str]

REVIEW_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "drill:review-schedule")


def review_id(item_id: str, scheduled_date: datetime) -> str:
    """Stable id for the review of `item_id` due at `scheduled_date`."""
    return uuid.uuid5(REVIEW_NAMESPACE, f"{item_id}@{scheduled_date.isoformat()}").hex


def new_item_id() -> str:
    """Random id for a freshly created item."""
    return uuid.uuid4().hex
