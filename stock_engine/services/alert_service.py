import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from stock_engine.config import get_settings
from stock_engine.core.constants import ALERT_PRIORITIES, LOW_STOCK, OUT_OF_STOCK
from stock_engine.core.dates import utc_now
from stock_engine.core.exceptions import PersistenceError
from stock_engine.repositories import AlertFilter, for_session

logger = logging.getLogger(__name__)


def _product_label(repos, product_id):
    fallback = "Produto #{}".format(product_id)
    try:
        product = repos.products.get_product(product_id)
    except Exception:
        logger.exception("Product lookup failed for alert message (product %s)", product_id)
        return fallback
    if product is None or not product.name:
        return fallback
    return product.name


def _build_message(alert_type, product_label, quantity, threshold):
    if alert_type == OUT_OF_STOCK:
        return "Sem estoque: {} está esgotado ({} unidades)".format(product_label, quantity)
    return "Estoque baixo: {} possui apenas {} unidades (limite: {})".format(
        product_label,
        quantity,
        threshold,
    )


def _raise_alert(db, repos, snapshot, alert_type):
    product_id = snapshot["product_id"]
    supplier_id = snapshot["supplier_id"]
    quantity = snapshot["quantity"]
    threshold = snapshot["threshold"]
    try:
        if repos.alerts.find_open(product_id, supplier_id, alert_type) is not None:
            return None
        label = _product_label(repos, product_id)
        alert = repos.alerts.create(
            {
                "product_id": product_id,
                "supplier_id": supplier_id,
                "alert_type": alert_type,
                "message": _build_message(alert_type, label, quantity, threshold),
                "quantity": quantity,
                "threshold": threshold,
                "current_level": quantity,
                "priority": ALERT_PRIORITIES[alert_type],
                "is_read": False,
                "is_resolved": False,
            }
        )
        db.commit()
    except IntegrityError:
        # Lost the race against another writer; its open alert stands.
        db.rollback()
        logger.info(
            "Open %s alert already exists for product %s supplier %s",
            alert_type,
            product_id,
            supplier_id,
        )
        return None
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Failed to create %s alert for product %s supplier %s",
            alert_type,
            product_id,
            supplier_id,
        )
        return None

    logger.info(
        "Created %s alert %s for product %s supplier %s (qty %s)",
        alert_type,
        alert.id,
        product_id,
        supplier_id,
        quantity,
    )
    return alert


def check_stock_alerts(db, record):
    """Raise LOW_STOCK and/or OUT_OF_STOCK alerts for a post-write record.

    At most one unresolved alert per (product, supplier, type) exists; open
    alerts are never refreshed and never resolved here. Best effort: returns
    the alerts created, which may be none when something fails.
    """
    snapshot = {
        "product_id": record.product_id,
        "supplier_id": record.supplier_id,
        "quantity": record.quantity or 0,
        "threshold": record.low_stock_threshold or 0,
    }
    repos = for_session(db)
    created = []

    if 0 < snapshot["quantity"] <= snapshot["threshold"]:
        alert = _raise_alert(db, repos, snapshot, LOW_STOCK)
        if alert is not None:
            created.append(alert)

    if snapshot["quantity"] <= 0:
        alert = _raise_alert(db, repos, snapshot, OUT_OF_STOCK)
        if alert is not None:
            created.append(alert)

    return created


def list_alerts(
    db,
    *,
    product_id=None,
    supplier_id=None,
    alert_type=None,
    is_read=None,
    is_resolved=None,
    limit=None,
):
    filters = AlertFilter(
        product_id=product_id,
        supplier_id=supplier_id,
        alert_type=alert_type,
        is_read=is_read,
        is_resolved=is_resolved,
        limit=limit or get_settings().ALERT_LIST_LIMIT,
    )
    return for_session(db).alerts.list(filters)


def count_unread_alerts(db, supplier_id=None):
    filters = AlertFilter(supplier_id=supplier_id, is_read=False, is_resolved=False)
    return for_session(db).alerts.count(filters)


def get_alert(db, alert_id):
    return for_session(db).alerts.get(alert_id)


def _update_alert(db, repos, alert, values):
    alert_id = alert.id
    try:
        repos.alerts.update(alert, values)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update alert %s", alert_id)
        raise PersistenceError("Alert {} could not be updated".format(alert_id)) from exc
    return alert


def mark_alert_read(db, alert_id, user_id=None):
    repos = for_session(db)
    alert = repos.alerts.get(alert_id)
    if alert is None:
        return None
    if alert.is_read:
        return alert
    return _update_alert(
        db,
        repos,
        alert,
        {"is_read": True, "read_at": utc_now(), "read_by": user_id},
    )


def mark_alert_resolved(db, alert_id, user_id=None):
    repos = for_session(db)
    alert = repos.alerts.get(alert_id)
    if alert is None:
        return None
    if alert.is_resolved:
        return alert
    now = utc_now()
    values = {"is_resolved": True, "resolved_at": now, "resolved_by": user_id}
    if not alert.is_read:
        values.update(is_read=True, read_at=now, read_by=user_id)
    return _update_alert(db, repos, alert, values)


__all__ = [
    "check_stock_alerts",
    "count_unread_alerts",
    "get_alert",
    "list_alerts",
    "mark_alert_read",
    "mark_alert_resolved",
]
