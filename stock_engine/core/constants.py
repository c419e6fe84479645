IN_STOCK = "IN_STOCK"
LOW_STOCK = "LOW_STOCK"
OUT_OF_STOCK = "OUT_OF_STOCK"
DISCONTINUED = "DISCONTINUED"
BACKORDER = "BACKORDER"

DERIVED_STATUSES = (IN_STOCK, LOW_STOCK, OUT_OF_STOCK)
OVERRIDE_STATUSES = (DISCONTINUED, BACKORDER)
INVENTORY_STATUSES = DERIVED_STATUSES + OVERRIDE_STATUSES

ALERT_TYPES = (LOW_STOCK, OUT_OF_STOCK)
ALERT_PRIORITIES = {
    OUT_OF_STOCK: 1,
    LOW_STOCK: 2,
}

ACTION_INITIAL = "initial"
ACTION_UPDATE = "update"
ACTION_QUANTITY_CHANGE = "quantity_change"
ACTION_BULK_UPDATE = "bulk_update"
ACTION_BULK_CREATE = "bulk_create"
ACTION_MIGRATION = "migration"

HISTORY_ACTIONS = (
    ACTION_INITIAL,
    ACTION_UPDATE,
    ACTION_QUANTITY_CHANGE,
    ACTION_BULK_UPDATE,
    ACTION_BULK_CREATE,
    ACTION_MIGRATION,
)

LEGACY_INVENTORY_MIGRATION = "legacy-inventory-v1"
