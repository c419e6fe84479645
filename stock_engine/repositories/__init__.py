from stock_engine.repositories.ports import AlertFilter, HistoryFilter, InventoryFilter
from stock_engine.repositories.sql import Repositories, for_session

__all__ = [
    "AlertFilter",
    "HistoryFilter",
    "InventoryFilter",
    "Repositories",
    "for_session",
]
