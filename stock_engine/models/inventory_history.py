from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String

from stock_engine.database.base import Base


class InventoryHistory(Base):
    __tablename__ = "inventory_history"

    id = Column(Integer, primary_key=True)

    product_id = Column(Integer, nullable=False)
    supplier_id = Column(Integer, nullable=False)
    user_id = Column(Integer)

    quantity = Column(Integer, nullable=False)
    previous_quantity = Column(Integer, nullable=False)
    current_quantity = Column(Integer, nullable=False)

    action = Column(String(20), nullable=False)
    reason = Column(String)
    notes = Column(String)
    batch_id = Column(String(64))

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_inventory_history_pair", "product_id", "supplier_id"),
        Index("idx_inventory_history_batch", "batch_id"),
        Index("idx_inventory_history_created", "created_at"),
    )


__all__ = ["InventoryHistory"]
