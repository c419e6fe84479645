from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from stock_engine.core.constants import ALERT_TYPES
from stock_engine.core.exceptions import PersistenceError
from stock_engine.dependencies import current_user_id, get_db
from stock_engine.schemas.alert import StockAlertRead, UnreadAlertCount
from stock_engine.services.alert_service import (
    count_unread_alerts,
    get_alert,
    list_alerts,
    mark_alert_read,
    mark_alert_resolved,
)

router = APIRouter(prefix="/alerts", tags=["Alerts"])


def _alert_not_found():
    return HTTPException(status_code=404, detail="Alert not found.")


@router.get("", response_model=List[StockAlertRead])
def list_stock_alerts(
    product_id: Optional[int] = Query(None),
    supplier_id: Optional[int] = Query(None),
    alert_type: Optional[str] = Query(None, description="LOW_STOCK | OUT_OF_STOCK"),
    is_read: Optional[bool] = Query(None),
    is_resolved: Optional[bool] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=2000),
    db: Session = Depends(get_db),
):
    if alert_type is not None:
        alert_type = alert_type.strip().upper()
        if alert_type not in ALERT_TYPES:
            raise HTTPException(status_code=400, detail="Unknown alert type: {}".format(alert_type))
    return list_alerts(
        db,
        product_id=product_id,
        supplier_id=supplier_id,
        alert_type=alert_type,
        is_read=is_read,
        is_resolved=is_resolved,
        limit=limit,
    )


@router.get("/unread-count", response_model=UnreadAlertCount)
def unread_alert_count(supplier_id: Optional[int] = Query(None), db: Session = Depends(get_db)):
    return UnreadAlertCount(unread=count_unread_alerts(db, supplier_id=supplier_id))


@router.get("/{alert_id}", response_model=StockAlertRead)
def get_stock_alert(alert_id: int, db: Session = Depends(get_db)):
    alert = get_alert(db, alert_id)
    if alert is None:
        raise _alert_not_found()
    return alert


@router.post("/{alert_id}/read", response_model=StockAlertRead)
def read_alert(
    alert_id: int,
    db: Session = Depends(get_db),
    user_id: Optional[int] = Depends(current_user_id),
):
    try:
        alert = mark_alert_read(db, alert_id, user_id=user_id)
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    if alert is None:
        raise _alert_not_found()
    return alert


@router.post("/{alert_id}/resolve", response_model=StockAlertRead)
def resolve_alert(
    alert_id: int,
    db: Session = Depends(get_db),
    user_id: Optional[int] = Depends(current_user_id),
):
    try:
        alert = mark_alert_resolved(db, alert_id, user_id=user_id)
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    if alert is None:
        raise _alert_not_found()
    return alert


__all__ = ["router"]
