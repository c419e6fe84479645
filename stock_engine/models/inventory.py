from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String, UniqueConstraint

from stock_engine.core import stock_rules
from stock_engine.database.base import Base


class Inventory(Base):
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True)

    product_id = Column(Integer, nullable=False)
    supplier_id = Column(Integer, nullable=False)

    quantity = Column(Integer, nullable=False, default=0)
    reserved_quantity = Column(Integer, nullable=False, default=0)
    low_stock_threshold = Column(Integer, nullable=False, default=10)
    restock_level = Column(Integer, nullable=False, default=50)

    status = Column(String(20), nullable=False, default="IN_STOCK")
    status_override = Column(String(20))

    sku = Column(String)
    location = Column(String)
    notes = Column(String)

    last_restocked = Column(DateTime(timezone=True))
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_updated = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        UniqueConstraint("product_id", "supplier_id", name="uq_inventory_product_supplier"),
        Index("idx_inventory_supplier", "supplier_id"),
        Index("idx_inventory_status", "status"),
    )

    @property
    def available_quantity(self):
        return stock_rules.available_quantity(self.quantity, self.reserved_quantity)


__all__ = ["Inventory"]
