from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class StockAlertRead(BaseModel):
    id: int
    product_id: int
    supplier_id: int
    alert_type: str
    message: str
    quantity: int
    threshold: int
    current_level: int
    priority: int
    is_read: bool
    read_at: Optional[datetime] = None
    read_by: Optional[int] = None
    is_resolved: bool
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UnreadAlertCount(BaseModel):
    unread: int
