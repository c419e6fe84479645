from sqlalchemy import Boolean, Column, Float, Index, Integer, String

from stock_engine.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    supplier_id = Column(Integer, nullable=False)

    name = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("idx_products_supplier", "supplier_id"),
    )


__all__ = ["Product"]
