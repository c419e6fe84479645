import importlib

from stock_engine.models.applied_migration import AppliedMigration
from stock_engine.models.inventory import Inventory
from stock_engine.models.inventory_history import InventoryHistory
from stock_engine.models.product import Product
from stock_engine.models.stock_alert import StockAlert


def import_all_models() -> None:
    for module_name in (
        "stock_engine.models.applied_migration",
        "stock_engine.models.inventory",
        "stock_engine.models.inventory_history",
        "stock_engine.models.product",
        "stock_engine.models.stock_alert",
    ):
        importlib.import_module(module_name)


__all__ = [
    "AppliedMigration",
    "Inventory",
    "InventoryHistory",
    "Product",
    "StockAlert",
    "import_all_models",
]
