from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from stock_engine.core.constants import INVENTORY_STATUSES
from stock_engine.core.exceptions import InventoryConflictError, PersistenceError
from stock_engine.dependencies import current_user_id, get_db
from stock_engine.schemas.inventory import (
    BulkInventoryUpdate,
    BulkItemResultRead,
    BulkUpdateResponse,
    InventoryCreate,
    InventoryRead,
    InventoryUpdate,
    QuantityAdjust,
    QuantitySet,
)
from stock_engine.services.batch_service import bulk_update_quantities
from stock_engine.services.inventory_service import (
    adjust_quantity,
    create_inventory,
    get_inventory,
    list_inventory,
    set_quantity,
    update_inventory,
)

router = APIRouter(prefix="/inventory", tags=["Inventory"])


def _not_found(product_id=None, supplier_id=None, inventory_id=None):
    if inventory_id is not None:
        detail = "Inventory {} not found.".format(inventory_id)
    else:
        detail = "Inventory not found for product {} and supplier {}.".format(product_id, supplier_id)
    return HTTPException(status_code=404, detail=detail)


@router.get("", response_model=List[InventoryRead])
def list_inventory_records(
    product_id: Optional[int] = Query(None),
    supplier_id: Optional[int] = Query(None),
    status: Optional[str] = Query(None, description="IN_STOCK | LOW_STOCK | OUT_OF_STOCK | DISCONTINUED | BACKORDER"),
    low_stock: bool = Query(False),
    out_of_stock: bool = Query(False),
    db: Session = Depends(get_db),
):
    if status is not None:
        status = status.strip().upper()
        if status not in INVENTORY_STATUSES:
            raise HTTPException(status_code=400, detail="Unknown inventory status: {}".format(status))
    return list_inventory(
        db,
        product_id=product_id,
        supplier_id=supplier_id,
        status=status,
        low_stock=low_stock,
        out_of_stock=out_of_stock,
    )


@router.post("", response_model=InventoryRead, status_code=201)
def create_inventory_record(
    payload: InventoryCreate,
    db: Session = Depends(get_db),
    user_id: Optional[int] = Depends(current_user_id),
):
    try:
        return create_inventory(db, payload.model_dump(), user_id=user_id)
    except InventoryConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@router.post("/bulk-update", response_model=BulkUpdateResponse)
def bulk_update(
    payload: BulkInventoryUpdate,
    db: Session = Depends(get_db),
    user_id: Optional[int] = Depends(current_user_id),
):
    result = bulk_update_quantities(
        db,
        payload.items,
        supplier_id=payload.supplier_id,
        user_id=user_id,
        reason=payload.reason,
        notes=payload.notes,
    )
    return BulkUpdateResponse(
        batch_id=result.batch_id,
        success_count=result.success_count,
        failure_count=result.failure_count,
        results=[BulkItemResultRead.model_validate(item) for item in result.results],
    )


@router.patch("/{inventory_id}", response_model=InventoryRead)
def patch_inventory_record(
    inventory_id: int,
    payload: InventoryUpdate,
    db: Session = Depends(get_db),
    user_id: Optional[int] = Depends(current_user_id),
):
    patch = payload.model_dump(exclude_unset=True)
    reason = patch.pop("reason", None)
    try:
        record = update_inventory(
            db,
            inventory_id,
            patch,
            user_id=user_id,
            reason=reason,
        )
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    if record is None:
        raise _not_found(inventory_id=inventory_id)
    return record


@router.get("/{product_id}/{supplier_id}", response_model=InventoryRead)
def get_inventory_record(product_id: int, supplier_id: int, db: Session = Depends(get_db)):
    record = get_inventory(db, product_id, supplier_id)
    if record is None:
        raise _not_found(product_id, supplier_id)
    return record


@router.put("/{product_id}/{supplier_id}/quantity", response_model=InventoryRead)
def set_inventory_quantity(
    product_id: int,
    supplier_id: int,
    payload: QuantitySet,
    db: Session = Depends(get_db),
    user_id: Optional[int] = Depends(current_user_id),
):
    try:
        record = set_quantity(
            db,
            product_id,
            supplier_id,
            payload.quantity,
            reason=payload.reason,
            user_id=user_id,
            notes=payload.notes,
        )
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    if record is None:
        raise _not_found(product_id, supplier_id)
    return record


@router.post("/{product_id}/{supplier_id}/adjust", response_model=InventoryRead)
def adjust_inventory_quantity(
    product_id: int,
    supplier_id: int,
    payload: QuantityAdjust,
    db: Session = Depends(get_db),
    user_id: Optional[int] = Depends(current_user_id),
):
    try:
        record = adjust_quantity(
            db,
            product_id,
            supplier_id,
            payload.delta,
            reason=payload.reason,
            user_id=user_id,
            notes=payload.notes,
        )
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    if record is None:
        raise _not_found(product_id, supplier_id)
    return record


__all__ = ["router"]
