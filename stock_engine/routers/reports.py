from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stock_engine.dependencies import get_db
from stock_engine.schemas.inventory import InventoryRead
from stock_engine.schemas.report import StockSummaryRead
from stock_engine.services.report_service import calculate_stock_status, low_stock_products

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/stock-summary", response_model=StockSummaryRead)
def stock_summary(supplier_id: Optional[int] = Query(None), db: Session = Depends(get_db)):
    return calculate_stock_status(db, supplier_id=supplier_id).as_dict()


@router.get("/low-stock", response_model=List[InventoryRead])
def low_stock(supplier_id: Optional[int] = Query(None), db: Session = Depends(get_db)):
    return low_stock_products(db, supplier_id=supplier_id)


__all__ = ["router"]
