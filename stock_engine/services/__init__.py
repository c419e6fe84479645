from stock_engine.services.alert_service import (
    check_stock_alerts,
    list_alerts,
    mark_alert_read,
    mark_alert_resolved,
)
from stock_engine.services.batch_service import bulk_update_quantities
from stock_engine.services.history_service import list_history, record_history
from stock_engine.services.inventory_service import (
    create_inventory,
    get_inventory,
    list_inventory,
    set_quantity,
    update_inventory,
)
from stock_engine.services.report_service import calculate_stock_status

__all__ = [
    "bulk_update_quantities",
    "calculate_stock_status",
    "check_stock_alerts",
    "create_inventory",
    "get_inventory",
    "list_alerts",
    "list_history",
    "list_inventory",
    "mark_alert_read",
    "mark_alert_resolved",
    "record_history",
    "set_quantity",
    "update_inventory",
]
