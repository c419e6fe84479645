from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from stock_engine.core.constants import HISTORY_ACTIONS
from stock_engine.dependencies import get_db
from stock_engine.schemas.history import InventoryHistoryRead
from stock_engine.services.history_service import list_history

router = APIRouter(prefix="/inventory-history", tags=["History"])


@router.get("", response_model=List[InventoryHistoryRead])
def list_inventory_history(
    product_id: Optional[int] = Query(None),
    supplier_id: Optional[int] = Query(None),
    action: Optional[str] = Query(None, description="initial | update | quantity_change | bulk_update | bulk_create | migration"),
    batch_id: Optional[str] = Query(None),
    day: Optional[date] = Query(None, alias="date", description="Single day (YYYY-MM-DD)"),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=5000),
    db: Session = Depends(get_db),
):
    if action is not None and action not in HISTORY_ACTIONS:
        raise HTTPException(status_code=400, detail="Unknown history action: {}".format(action))
    return list_history(
        db,
        product_id=product_id,
        supplier_id=supplier_id,
        action=action,
        batch_id=batch_id,
        date=day,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
    )


__all__ = ["router"]
