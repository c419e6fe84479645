from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class InventoryHistoryRead(BaseModel):
    id: int
    product_id: int
    supplier_id: int
    user_id: Optional[int] = None
    quantity: int
    previous_quantity: int
    current_quantity: int
    action: str
    reason: Optional[str] = None
    notes: Optional[str] = None
    batch_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
