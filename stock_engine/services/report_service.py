import logging
from dataclasses import asdict, dataclass

from sqlalchemy.exc import SQLAlchemyError

from stock_engine.core.constants import LOW_STOCK, OUT_OF_STOCK
from stock_engine.core.stock_rules import base_status, urgency_ratio
from stock_engine.repositories import InventoryFilter, for_session

logger = logging.getLogger(__name__)


@dataclass
class StockSummary:
    total_products: int = 0
    in_stock: int = 0
    low_stock: int = 0
    out_of_stock: int = 0
    total_value: float = 0.0

    def as_dict(self) -> dict:
        return asdict(self)


def calculate_stock_status(db, supplier_id=None) -> StockSummary:
    """Counts by quantity-derived band plus on-hand value.

    Every record lands in exactly one band. Read failures yield a zeroed
    summary, so an empty supplier and a failed query look the same.
    """
    repos = for_session(db)
    try:
        records = repos.inventory.list(InventoryFilter(supplier_id=supplier_id))
        products = repos.products.get_products(record.product_id for record in records)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Stock summary failed for supplier %s", supplier_id)
        return StockSummary()

    summary = StockSummary(total_products=len(records))
    for record in records:
        band = base_status(record.quantity, record.low_stock_threshold)
        if band == OUT_OF_STOCK:
            summary.out_of_stock += 1
        elif band == LOW_STOCK:
            summary.low_stock += 1
        else:
            summary.in_stock += 1

        product = products.get(record.product_id)
        price = float(product.price or 0.0) if product is not None else 0.0
        summary.total_value += price * max(record.quantity or 0, 0)

    summary.total_value = round(summary.total_value, 2)
    return summary


def low_stock_products(db, supplier_id=None):
    """Low-band records, most urgent (smallest quantity/threshold ratio) first."""
    repos = for_session(db)
    try:
        records = repos.inventory.list(InventoryFilter(supplier_id=supplier_id, low_stock=True))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Low stock listing failed for supplier %s", supplier_id)
        return []
    return sorted(records, key=lambda record: urgency_ratio(record.quantity, record.low_stock_threshold))


__all__ = ["StockSummary", "calculate_stock_status", "low_stock_products"]
