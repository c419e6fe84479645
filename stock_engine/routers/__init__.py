from stock_engine.routers.alerts import router as alerts_router
from stock_engine.routers.health import router as health_router
from stock_engine.routers.history import router as history_router
from stock_engine.routers.inventory import router as inventory_router
from stock_engine.routers.reports import router as reports_router

__all__ = [
    "alerts_router",
    "health_router",
    "history_router",
    "inventory_router",
    "reports_router",
]
