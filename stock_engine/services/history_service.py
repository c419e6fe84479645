import logging

from sqlalchemy.exc import SQLAlchemyError

from stock_engine.config import get_settings
from stock_engine.core.dates import day_bounds
from stock_engine.repositories import HistoryFilter, for_session

logger = logging.getLogger(__name__)


def record_history(
    db,
    *,
    product_id,
    supplier_id,
    previous_quantity,
    current_quantity,
    action,
    user_id=None,
    reason=None,
    notes=None,
    batch_id=None,
):
    """Append one history entry after an inventory write has been committed.

    The delta is derived from the two snapshots, never taken from the caller.
    Failures are logged and swallowed; the inventory write stands.
    """
    previous_quantity = previous_quantity or 0
    current_quantity = current_quantity or 0
    repos = for_session(db)
    try:
        entry = repos.history.append(
            {
                "product_id": product_id,
                "supplier_id": supplier_id,
                "user_id": user_id,
                "quantity": current_quantity - previous_quantity,
                "previous_quantity": previous_quantity,
                "current_quantity": current_quantity,
                "action": action,
                "reason": reason,
                "notes": notes,
                "batch_id": batch_id,
            }
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "History write failed for product %s supplier %s (%s)",
            product_id,
            supplier_id,
            action,
        )
        return None
    return entry


def list_history(
    db,
    *,
    product_id=None,
    supplier_id=None,
    action=None,
    batch_id=None,
    date=None,
    date_from=None,
    date_to=None,
    limit=None,
):
    if date is not None:
        date_from, date_to = day_bounds(date)
    else:
        date_from = day_bounds(date_from)[0] if date_from is not None else None
        date_to = day_bounds(date_to)[1] if date_to is not None else None

    filters = HistoryFilter(
        product_id=product_id,
        supplier_id=supplier_id,
        action=action,
        batch_id=batch_id,
        date_from=date_from,
        date_to=date_to,
        limit=limit or get_settings().HISTORY_LIST_LIMIT,
    )
    return for_session(db).history.list(filters)


__all__ = ["list_history", "record_history"]
