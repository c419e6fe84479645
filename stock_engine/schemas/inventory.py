from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class InventoryBase(BaseModel):
    product_id: int = Field(validation_alias=AliasChoices("product_id", "productId"))
    supplier_id: int = Field(validation_alias=AliasChoices("supplier_id", "supplierId"))
    quantity: int = 0
    reserved_quantity: int = 0
    low_stock_threshold: Optional[int] = None
    restock_level: Optional[int] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    sku: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class InventoryCreate(InventoryBase):
    status: Optional[str] = None


class InventoryUpdate(BaseModel):
    quantity: Optional[int] = None
    reserved_quantity: Optional[int] = None
    low_stock_threshold: Optional[int] = None
    restock_level: Optional[int] = None
    status: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    sku: Optional[str] = None
    reason: Optional[str] = None


class InventoryRead(BaseModel):
    id: int
    product_id: int
    supplier_id: int
    quantity: int
    reserved_quantity: int
    available_quantity: int
    low_stock_threshold: int
    restock_level: int
    status: str
    status_override: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    sku: Optional[str] = None
    last_restocked: Optional[datetime] = None
    created_at: datetime
    last_updated: datetime

    model_config = ConfigDict(from_attributes=True)


class QuantitySet(BaseModel):
    quantity: int
    reason: Optional[str] = None
    notes: Optional[str] = None


class QuantityAdjust(BaseModel):
    delta: int
    reason: Optional[str] = None
    notes: Optional[str] = None


class BulkInventoryItem(BaseModel):
    product_id: int = Field(validation_alias=AliasChoices("product_id", "productId"))
    quantity: int
    supplier_id: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("supplier_id", "supplierId"),
    )
    status: Optional[str] = None
    low_stock_threshold: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("low_stock_threshold", "lowStockThreshold"),
    )
    restock_level: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("restock_level", "restockLevel"),
    )
    location: Optional[str] = None
    sku: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class BulkInventoryUpdate(BaseModel):
    items: List[BulkInventoryItem] = Field(validation_alias=AliasChoices("items", "data"))
    supplier_id: Optional[int] = None
    reason: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class BulkItemResultRead(BaseModel):
    product_id: Optional[int]
    success: bool
    inventory_id: Optional[int] = None
    action: Optional[str] = None
    message: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class BulkUpdateResponse(BaseModel):
    batch_id: str
    success_count: int
    failure_count: int
    results: List[BulkItemResultRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
