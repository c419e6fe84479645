"""Repository ports for the inventory engine.

Each port is a get/list/create/update contract over one record kind. Single
record writes are atomic in the backing store; nothing here spans records.
History has no update operation: entries are append-only.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional


@dataclass(frozen=True)
class InventoryFilter:
    product_id: Optional[int] = None
    supplier_id: Optional[int] = None
    status: Optional[str] = None
    low_stock: bool = False
    out_of_stock: bool = False


@dataclass(frozen=True)
class AlertFilter:
    product_id: Optional[int] = None
    supplier_id: Optional[int] = None
    alert_type: Optional[str] = None
    is_read: Optional[bool] = None
    is_resolved: Optional[bool] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class HistoryFilter:
    product_id: Optional[int] = None
    supplier_id: Optional[int] = None
    action: Optional[str] = None
    batch_id: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    limit: Optional[int] = None


class InventoryRepository:
    def get(self, inventory_id: int):
        raise NotImplementedError

    def get_by_pair(self, product_id: int, supplier_id: int):
        raise NotImplementedError

    def list(self, filters: InventoryFilter) -> Iterable:
        raise NotImplementedError

    def create(self, values: dict):
        raise NotImplementedError

    def update(self, record, values: dict):
        raise NotImplementedError


class AlertRepository:
    def get(self, alert_id: int):
        raise NotImplementedError

    def find_open(self, product_id: int, supplier_id: int, alert_type: str):
        raise NotImplementedError

    def list(self, filters: AlertFilter) -> Iterable:
        raise NotImplementedError

    def count(self, filters: AlertFilter) -> int:
        raise NotImplementedError

    def create(self, values: dict):
        raise NotImplementedError

    def update(self, record, values: dict):
        raise NotImplementedError


class HistoryRepository:
    def list(self, filters: HistoryFilter) -> Iterable:
        raise NotImplementedError

    def append(self, values: dict):
        raise NotImplementedError


class ProductLookup:
    def get_product(self, product_id: int):
        raise NotImplementedError

    def get_products(self, product_ids: Iterable[int]) -> dict:
        raise NotImplementedError
