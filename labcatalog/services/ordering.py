import logging
import math

import sqlalchemy as sa
from sqlalchemy.orm import Session

from labcatalog.db.session import transaction
from labcatalog.schemas.common import INT_MAX, INT_MIN
from labcatalog.services.errors import ValidationError

logger = logging.getLogger(__name__)


def _in_range(value: int) -> int | None:
    return value if INT_MIN <= value <= INT_MAX else None


def _as_id(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            return None
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        return None
    return _in_range(value)


def _as_order(value) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        value = int(value)
    return _in_range(value)


def valid_entries(entries: list) -> list[tuple[int, int]]:
    """Keep the ``{id, displayOrder}`` entries that can be applied.

    Entries without a positive id, or whose order is not a whole number that
    fits an INTEGER column, are dropped silently.
    """
    out: list[tuple[int, int]] = []
    for item in entries:
        if not isinstance(item, dict):
            continue
        entry_id = _as_id(item.get("id"))
        order = _as_order(item.get("displayOrder", item.get("display_order")))
        if entry_id is None or order is None:
            continue
        out.append((entry_id, order))
    return out


def apply_display_order(db: Session, model, entries, *, invalid_message: str) -> int:
    if not isinstance(entries, list):
        raise ValidationError(invalid_message)

    pairs = valid_entries(entries)
    updated = 0
    with transaction(db):
        for entry_id, order in pairs:
            result = db.execute(
                sa.update(model).where(model.id == entry_id).values(display_order=order)
            )
            updated += result.rowcount or 0

    skipped = len(entries) - len(pairs)
    logger.info("Reordered %s %s rows (%s entries skipped)", updated, model.__tablename__, skipped)
    return updated
