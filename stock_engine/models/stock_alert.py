from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, text

from stock_engine.database.base import Base


class StockAlert(Base):
    __tablename__ = "stock_alerts"

    id = Column(Integer, primary_key=True)

    product_id = Column(Integer, nullable=False)
    supplier_id = Column(Integer, nullable=False)

    alert_type = Column(String(20), nullable=False)
    message = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    threshold = Column(Integer, nullable=False)
    current_level = Column(Integer, nullable=False)
    priority = Column(Integer, nullable=False)

    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(timezone=True))
    read_by = Column(Integer)

    is_resolved = Column(Boolean, nullable=False, default=False)
    resolved_at = Column(DateTime(timezone=True))
    resolved_by = Column(Integer)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        # One open alert per (product, supplier, type); resolved ones pile up freely.
        Index(
            "uq_stock_alerts_open",
            "product_id",
            "supplier_id",
            "alert_type",
            unique=True,
            sqlite_where=text("is_resolved = 0"),
            postgresql_where=text("NOT is_resolved"),
        ),
        Index("idx_stock_alerts_supplier_read", "supplier_id", "is_read"),
    )


__all__ = ["StockAlert"]
