import logging
import secrets
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from stock_engine.core.constants import ACTION_BULK_CREATE, ACTION_BULK_UPDATE
from stock_engine.core.dates import utc_now
from stock_engine.core.exceptions import InventoryError
from stock_engine.repositories import InventoryFilter, for_session
from stock_engine.services.inventory_service import create_inventory, update_inventory

logger = logging.getLogger(__name__)

_ITEM_EXCEPTIONS = (InventoryError, SQLAlchemyError, KeyError, TypeError, ValueError)
_OPTIONAL_ITEM_FIELDS = ("status", "low_stock_threshold", "restock_level", "location", "sku")


@dataclass
class BatchItemResult:
    product_id: Optional[int]
    success: bool
    inventory_id: Optional[int] = None
    action: Optional[str] = None
    message: Optional[str] = None
    record: object = field(default=None, repr=False)


@dataclass
class BatchResult:
    batch_id: str
    results: list[BatchItemResult] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for item in self.results if item.success)

    @property
    def failure_count(self) -> int:
        return len(self.results) - self.success_count

    @property
    def updated(self) -> list:
        return [item.record for item in self.results if item.success]


def new_batch_id() -> str:
    return "batch-{}-{}".format(utc_now().strftime("%Y%m%d%H%M%S"), secrets.token_hex(4))


def _as_dict(item):
    if hasattr(item, "model_dump"):
        return item.model_dump(exclude_unset=True)
    return dict(item)


def _apply_item(db, item, *, batch_id, supplier_id, user_id, reason, notes):
    product_id = item.get("product_id")
    if product_id is None:
        return BatchItemResult(product_id=None, success=False, message="product_id is required")
    product_id = int(product_id)

    patch = {"quantity": int(item["quantity"])}
    for key in _OPTIONAL_ITEM_FIELDS:
        if item.get(key) is not None:
            patch[key] = item[key]

    scope = item.get("supplier_id")
    if scope is None:
        scope = supplier_id

    repos = for_session(db)
    matches = repos.inventory.list(InventoryFilter(product_id=product_id, supplier_id=scope))
    if len(matches) > 1:
        return BatchItemResult(
            product_id=product_id,
            success=False,
            message="{} inventory records match product {}; supplier_id is required".format(
                len(matches), product_id
            ),
        )

    history_kwargs = dict(user_id=user_id, batch_id=batch_id, reason=reason, notes=notes)

    if matches:
        record = update_inventory(db, matches[0].id, patch, action=ACTION_BULK_UPDATE, **history_kwargs)
        if record is None:
            return BatchItemResult(
                product_id=product_id,
                success=False,
                message="Inventory {} no longer exists".format(matches[0].id),
            )
        return BatchItemResult(
            product_id=product_id,
            success=True,
            inventory_id=record.id,
            action=ACTION_BULK_UPDATE,
            record=record,
        )

    product = repos.products.get_product(product_id)
    if product is None:
        logger.warning("Batch %s: product %s not found, item skipped", batch_id, product_id)
        return BatchItemResult(
            product_id=product_id,
            success=False,
            message="Product {} not found".format(product_id),
        )

    data = dict(patch, product_id=product_id, supplier_id=scope if scope is not None else product.supplier_id)
    record = create_inventory(db, data, action=ACTION_BULK_CREATE, **history_kwargs)
    return BatchItemResult(
        product_id=product_id,
        success=True,
        inventory_id=record.id,
        action=ACTION_BULK_CREATE,
        record=record,
    )


def bulk_update_quantities(db, items, *, supplier_id=None, user_id=None, reason=None, notes=None):
    """Apply quantity changes item by item under one batch id.

    Items are processed in order; a failing item never aborts the rest and
    nothing is rolled back across items. The result lists every item.
    """
    batch_id = new_batch_id()
    result = BatchResult(batch_id=batch_id)

    for raw_item in items:
        item = _as_dict(raw_item)
        try:
            outcome = _apply_item(
                db,
                item,
                batch_id=batch_id,
                supplier_id=supplier_id,
                user_id=user_id,
                reason=reason,
                notes=notes,
            )
        except _ITEM_EXCEPTIONS as exc:
            db.rollback()
            logger.warning(
                "Batch %s: item for product %s failed: %s",
                batch_id,
                item.get("product_id"),
                exc,
            )
            outcome = BatchItemResult(product_id=item.get("product_id"), success=False, message=str(exc))
        result.results.append(outcome)

    logger.info(
        "Batch %s finished: %s succeeded, %s failed",
        batch_id,
        result.success_count,
        result.failure_count,
        extra={"batch_id": batch_id},
    )
    return result


__all__ = ["BatchItemResult", "BatchResult", "bulk_update_quantities", "new_batch_id"]
