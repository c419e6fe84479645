"""SQLAlchemy adapters for the repository ports.

Adapters only add and flush; commit and rollback belong to the services.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from stock_engine.models.inventory import Inventory
from stock_engine.models.inventory_history import InventoryHistory
from stock_engine.models.product import Product
from stock_engine.models.stock_alert import StockAlert
from stock_engine.repositories.ports import (
    AlertFilter,
    AlertRepository,
    HistoryFilter,
    HistoryRepository,
    InventoryFilter,
    InventoryRepository,
    ProductLookup,
)


def _apply_values(record, values: dict):
    for key, value in values.items():
        setattr(record, key, value)
    return record


class SqlInventoryRepository(InventoryRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, inventory_id: int):
        return self.db.get(Inventory, inventory_id)

    def get_by_pair(self, product_id: int, supplier_id: int):
        stmt = select(Inventory).where(
            Inventory.product_id == product_id,
            Inventory.supplier_id == supplier_id,
        )
        return self.db.execute(stmt).scalars().first()

    def list(self, filters: InventoryFilter) -> list[Inventory]:
        stmt = select(Inventory)
        if filters.product_id is not None:
            stmt = stmt.where(Inventory.product_id == filters.product_id)
        if filters.supplier_id is not None:
            stmt = stmt.where(Inventory.supplier_id == filters.supplier_id)
        if filters.status:
            stmt = stmt.where(Inventory.status == filters.status.upper())
        if filters.low_stock:
            stmt = stmt.where(
                Inventory.quantity > 0,
                Inventory.quantity <= Inventory.low_stock_threshold,
            )
        if filters.out_of_stock:
            stmt = stmt.where(Inventory.quantity <= 0)
        stmt = stmt.order_by(Inventory.id)
        return list(self.db.execute(stmt).scalars().all())

    def create(self, values: dict) -> Inventory:
        record = Inventory(**values)
        self.db.add(record)
        self.db.flush()
        return record

    def update(self, record: Inventory, values: dict) -> Inventory:
        _apply_values(record, values)
        self.db.flush()
        return record


class SqlAlertRepository(AlertRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, alert_id: int):
        return self.db.get(StockAlert, alert_id)

    def find_open(self, product_id: int, supplier_id: int, alert_type: str):
        stmt = (
            select(StockAlert)
            .where(
                StockAlert.product_id == product_id,
                StockAlert.supplier_id == supplier_id,
                StockAlert.alert_type == alert_type,
                StockAlert.is_resolved.is_(False),
            )
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()

    def _filtered(self, stmt, filters: AlertFilter):
        if filters.product_id is not None:
            stmt = stmt.where(StockAlert.product_id == filters.product_id)
        if filters.supplier_id is not None:
            stmt = stmt.where(StockAlert.supplier_id == filters.supplier_id)
        if filters.alert_type:
            stmt = stmt.where(StockAlert.alert_type == filters.alert_type.upper())
        if filters.is_read is not None:
            stmt = stmt.where(StockAlert.is_read.is_(filters.is_read))
        if filters.is_resolved is not None:
            stmt = stmt.where(StockAlert.is_resolved.is_(filters.is_resolved))
        return stmt

    def list(self, filters: AlertFilter) -> list[StockAlert]:
        stmt = self._filtered(select(StockAlert), filters).order_by(
            StockAlert.priority.asc(),
            StockAlert.created_at.desc(),
            StockAlert.id.desc(),
        )
        if filters.limit:
            stmt = stmt.limit(filters.limit)
        return list(self.db.execute(stmt).scalars().all())

    def count(self, filters: AlertFilter) -> int:
        stmt = self._filtered(select(func.count(StockAlert.id)), filters)
        return int(self.db.execute(stmt).scalar_one())

    def create(self, values: dict) -> StockAlert:
        alert = StockAlert(**values)
        self.db.add(alert)
        self.db.flush()
        return alert

    def update(self, record: StockAlert, values: dict) -> StockAlert:
        _apply_values(record, values)
        self.db.flush()
        return record


class SqlHistoryRepository(HistoryRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    def list(self, filters: HistoryFilter) -> list[InventoryHistory]:
        stmt = select(InventoryHistory)
        if filters.product_id is not None:
            stmt = stmt.where(InventoryHistory.product_id == filters.product_id)
        if filters.supplier_id is not None:
            stmt = stmt.where(InventoryHistory.supplier_id == filters.supplier_id)
        if filters.action:
            stmt = stmt.where(InventoryHistory.action == filters.action)
        if filters.batch_id:
            stmt = stmt.where(InventoryHistory.batch_id == filters.batch_id)
        if filters.date_from is not None:
            stmt = stmt.where(InventoryHistory.created_at >= filters.date_from)
        if filters.date_to is not None:
            stmt = stmt.where(InventoryHistory.created_at < filters.date_to)
        stmt = stmt.order_by(InventoryHistory.created_at.desc(), InventoryHistory.id.desc())
        if filters.limit:
            stmt = stmt.limit(filters.limit)
        return list(self.db.execute(stmt).scalars().all())

    def append(self, values: dict) -> InventoryHistory:
        entry = InventoryHistory(**values)
        self.db.add(entry)
        self.db.flush()
        return entry


class SqlProductLookup(ProductLookup):
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_product(self, product_id: int):
        return self.db.get(Product, product_id)

    def get_products(self, product_ids: Iterable[int]) -> dict:
        ids = {product_id for product_id in product_ids if product_id is not None}
        if not ids:
            return {}
        stmt = select(Product).where(Product.id.in_(ids))
        return {product.id: product for product in self.db.execute(stmt).scalars()}


@dataclass
class Repositories:
    inventory: InventoryRepository
    alerts: AlertRepository
    history: HistoryRepository
    products: ProductLookup


def for_session(db: Session) -> Repositories:
    return Repositories(
        inventory=SqlInventoryRepository(db),
        alerts=SqlAlertRepository(db),
        history=SqlHistoryRepository(db),
        products=SqlProductLookup(db),
    )


__all__ = [
    "Repositories",
    "SqlAlertRepository",
    "SqlHistoryRepository",
    "SqlInventoryRepository",
    "SqlProductLookup",
    "for_session",
]
