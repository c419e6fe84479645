"""Inventory mutator: the single path for quantity, status and threshold changes.

Every successful write is committed first; the history entry and the alert
check follow as separate best-effort steps. Records that do not exist are
reported as ``None``; failed primary writes raise ``PersistenceError``.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from stock_engine.config import get_settings
from stock_engine.core.constants import ACTION_INITIAL, ACTION_QUANTITY_CHANGE, ACTION_UPDATE
from stock_engine.core.dates import utc_now
from stock_engine.core.exceptions import InventoryConflictError, PersistenceError
from stock_engine.core.stock_rules import effective_status, resolve_status_override
from stock_engine.repositories import InventoryFilter, for_session
from stock_engine.services.alert_service import check_stock_alerts
from stock_engine.services.history_service import record_history

logger = logging.getLogger(__name__)

_INTEGER_FIELDS = ("quantity", "reserved_quantity", "low_stock_threshold", "restock_level")
_TEXT_FIELDS = ("location", "notes", "sku")


def _clean_patch(patch):
    values = {}
    for field in _INTEGER_FIELDS:
        if patch.get(field) is not None:
            values[field] = int(patch[field])
    for field in _TEXT_FIELDS:
        if field in patch:
            values[field] = patch[field]
    return values


def _after_quantity_write(db, record, previous_quantity, action, **history_kwargs):
    record_history(
        db,
        product_id=record.product_id,
        supplier_id=record.supplier_id,
        previous_quantity=previous_quantity,
        current_quantity=record.quantity,
        action=action,
        **history_kwargs,
    )
    check_stock_alerts(db, record)


def get_inventory(db, product_id, supplier_id):
    return for_session(db).inventory.get_by_pair(product_id, supplier_id)


def get_inventory_by_id(db, inventory_id):
    return for_session(db).inventory.get(inventory_id)


def list_inventory(
    db,
    *,
    product_id=None,
    supplier_id=None,
    status=None,
    low_stock=False,
    out_of_stock=False,
):
    filters = InventoryFilter(
        product_id=product_id,
        supplier_id=supplier_id,
        status=status,
        low_stock=low_stock,
        out_of_stock=out_of_stock,
    )
    return for_session(db).inventory.list(filters)


def create_inventory(
    db,
    data,
    *,
    user_id=None,
    action=ACTION_INITIAL,
    batch_id=None,
    reason=None,
    notes=None,
):
    settings = get_settings()
    product_id = int(data["product_id"])
    supplier_id = int(data["supplier_id"])

    values = _clean_patch(data)
    values.setdefault("quantity", 0)
    values.setdefault("reserved_quantity", 0)
    values.setdefault("low_stock_threshold", settings.DEFAULT_LOW_STOCK_THRESHOLD)
    values.setdefault("restock_level", settings.DEFAULT_RESTOCK_LEVEL)
    values["product_id"] = product_id
    values["supplier_id"] = supplier_id
    values["status_override"] = resolve_status_override(data.get("status"))
    values["status"] = effective_status(
        values["quantity"],
        values["low_stock_threshold"],
        values["status_override"],
    )
    now = utc_now()
    values["created_at"] = now
    values["last_updated"] = now
    if values["quantity"] > 0:
        values["last_restocked"] = now

    repos = for_session(db)
    if repos.inventory.get_by_pair(product_id, supplier_id) is not None:
        raise InventoryConflictError(product_id, supplier_id)

    try:
        record = repos.inventory.create(values)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(
            "Concurrent create for product %s supplier %s rejected",
            product_id,
            supplier_id,
        )
        raise InventoryConflictError(product_id, supplier_id) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create inventory for product %s supplier %s", product_id, supplier_id)
        raise PersistenceError(
            "Inventory for product {} supplier {} could not be created".format(product_id, supplier_id)
        ) from exc

    _after_quantity_write(
        db,
        record,
        0,
        action,
        user_id=user_id,
        reason=reason,
        notes=notes if notes is not None else data.get("notes"),
        batch_id=batch_id,
    )
    return record


def _write(db, repos, record, values, *, previous_quantity, always_log, action, **history_kwargs):
    inventory_id = record.id
    quantity = values.get("quantity", record.quantity)
    threshold = values.get("low_stock_threshold", record.low_stock_threshold)
    override = values.get("status_override", record.status_override)

    now = utc_now()
    values["status"] = effective_status(quantity, threshold, override)
    values["last_updated"] = now
    if quantity is not None and quantity > (previous_quantity or 0):
        values["last_restocked"] = now

    try:
        repos.inventory.update(record, values)
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        logger.warning("Inventory %s was modified concurrently; write rejected", inventory_id)
        raise PersistenceError("Inventory {} was modified concurrently".format(inventory_id)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update inventory %s", inventory_id)
        raise PersistenceError("Inventory {} could not be updated".format(inventory_id)) from exc

    quantity_changed = "quantity" in values and values["quantity"] != previous_quantity
    if always_log or quantity_changed:
        _after_quantity_write(db, record, previous_quantity, action, **history_kwargs)
    return record


def update_inventory(
    db,
    inventory_id,
    patch,
    *,
    user_id=None,
    action=ACTION_UPDATE,
    batch_id=None,
    reason=None,
    notes=None,
):
    """Apply a partial patch. Only a real quantity change is logged and alerted."""
    repos = for_session(db)
    record = repos.inventory.get(inventory_id)
    if record is None:
        return None

    values = _clean_patch(patch)
    if "status" in patch:
        values["status_override"] = resolve_status_override(patch["status"], record.status_override)

    return _write(
        db,
        repos,
        record,
        values,
        previous_quantity=record.quantity,
        always_log=False,
        action=action,
        user_id=user_id,
        reason=reason,
        notes=notes,
        batch_id=batch_id,
    )


def set_quantity(db, product_id, supplier_id, quantity, reason=None, user_id=None, notes=None):
    """Set the quantity and always log the intent, even when the value is unchanged."""
    repos = for_session(db)
    record = repos.inventory.get_by_pair(product_id, supplier_id)
    if record is None:
        return None

    return _write(
        db,
        repos,
        record,
        {"quantity": int(quantity)},
        previous_quantity=record.quantity,
        always_log=True,
        action=ACTION_QUANTITY_CHANGE,
        user_id=user_id,
        reason=reason,
        notes=notes,
    )


def adjust_quantity(db, product_id, supplier_id, delta, reason=None, user_id=None, notes=None):
    record = get_inventory(db, product_id, supplier_id)
    if record is None:
        return None
    return set_quantity(
        db,
        product_id,
        supplier_id,
        (record.quantity or 0) + int(delta),
        reason=reason,
        user_id=user_id,
        notes=notes,
    )


__all__ = [
    "adjust_quantity",
    "create_inventory",
    "get_inventory",
    "get_inventory_by_id",
    "list_inventory",
    "set_quantity",
    "update_inventory",
]
