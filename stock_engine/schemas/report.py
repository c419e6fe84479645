from pydantic import BaseModel, ConfigDict


class StockSummaryRead(BaseModel):
    total_products: int
    in_stock: int
    low_stock: int
    out_of_stock: int
    total_value: float

    model_config = ConfigDict(from_attributes=True)
