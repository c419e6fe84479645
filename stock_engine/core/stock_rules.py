from stock_engine.core.constants import (
    DERIVED_STATUSES,
    IN_STOCK,
    LOW_STOCK,
    OUT_OF_STOCK,
    OVERRIDE_STATUSES,
)


def base_status(quantity, low_stock_threshold):
    quantity = quantity or 0
    threshold = low_stock_threshold or 0
    if quantity <= 0:
        return OUT_OF_STOCK
    if quantity <= threshold:
        return LOW_STOCK
    return IN_STOCK


def effective_status(quantity, low_stock_threshold, status_override=None):
    if status_override in OVERRIDE_STATUSES:
        return status_override
    return base_status(quantity, low_stock_threshold)


def resolve_status_override(requested_status, current_override=None):
    """Map a caller-supplied status onto the stored override.

    Forced states become the override; a quantity-derived state clears it.
    Unknown values leave the current override untouched.
    """
    if requested_status is None:
        return current_override
    normalized = str(requested_status).strip().upper()
    if normalized in OVERRIDE_STATUSES:
        return normalized
    if normalized in DERIVED_STATUSES:
        return None
    return current_override


def available_quantity(quantity, reserved_quantity):
    return max((quantity or 0) - (reserved_quantity or 0), 0)


def urgency_ratio(quantity, low_stock_threshold):
    return (quantity or 0) / (low_stock_threshold or 1)
