import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import BigInteger, cast, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cafeops.db.database import get_async_session
from cafeops.db.inventory import CATEGORY_OTHER, MAX_STOCK, NAMED_CATEGORIES
from cafeops.db.models import (
    InventoryHistory as InventoryHistoryModel,
    InventoryItem as InventoryItemModel,
)
from cafeops.schemas.inventory import (
    InventoryHistoryOut,
    InventoryItemOut,
    InventoryItemWrite,
    InventoryStatusUpdate,
    StockChangeOut,
    StockChangeRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

HISTORY_LIMIT = 50


async def _get_item_or_404(db: AsyncSession, item_id: int) -> InventoryItemModel:
    res = await db.execute(select(InventoryItemModel).where(InventoryItemModel.id == item_id))
    item = res.scalar_one_or_none()
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    return item


async def _apply_stock_change(
    *,
    db: AsyncSession,
    item_id: int,
    change_type: str,
    quantity: int,
    reason: Optional[str],
) -> int:
    """
    Adjust stock and append one ledger row, all-or-nothing.

    The read-compute-write is a single conditional UPDATE, so two concurrent
    changes on the same item cannot both start from the same stale value. An
    "out" that would take stock below zero matches no row and is rejected in
    full (never clamped). An "in" past MAX_STOCK is rejected the same way.

    Returns the new stock value. Caller commits.
    """
    delta = quantity if change_type == "in" else -quantity
    stock = InventoryItemModel.current_stock
    # widened so the bound checks cannot overflow a 32-bit column
    candidate = cast(stock, BigInteger) + delta

    res = await db.execute(
        update(InventoryItemModel)
        .where(InventoryItemModel.id == item_id)
        .where(candidate >= 0)
        .where(candidate <= MAX_STOCK)
        .values(current_stock=stock + delta, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    if not res.rowcount:
        exists = await db.scalar(select(InventoryItemModel.id).where(InventoryItemModel.id == item_id))
        if exists is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
        if change_type == "in":
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Stock limit exceeded")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Insufficient stock")

    db.add(
        InventoryHistoryModel(
            item_id=item_id,
            change_type=change_type,
            quantity=quantity,
            reason=reason,
        )
    )
    await db.flush()

    new_stock = await db.scalar(select(stock).where(InventoryItemModel.id == item_id))
    return int(new_stock)


@router.get("", response_model=List[InventoryItemOut])
async def list_inventory(
    category: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session),
):
    """
    List items with the derived is_low_stock flag.

    - category=<name> matches exactly.
    - category=other means no category, or one outside the named buckets.
    """
    stmt = select(InventoryItemModel)
    if category:
        if category == CATEGORY_OTHER:
            stmt = stmt.where(
                or_(
                    InventoryItemModel.category.is_(None),
                    InventoryItemModel.category.not_in(NAMED_CATEGORIES),
                )
            )
        else:
            stmt = stmt.where(InventoryItemModel.category == category)

    res = await db.execute(stmt.order_by(InventoryItemModel.category, InventoryItemModel.item_name))
    return [InventoryItemOut(**it.to_schema) for it in res.scalars().all()]


@router.get("/alerts", response_model=List[InventoryItemOut])
async def list_low_stock_alerts(db: AsyncSession = Depends(get_async_session)):
    res = await db.execute(
        select(InventoryItemModel)
        .where(InventoryItemModel.current_stock <= InventoryItemModel.minimum_stock)
        .order_by(InventoryItemModel.category, InventoryItemModel.item_name)
    )
    return [InventoryItemOut(**it.to_schema) for it in res.scalars().all()]


@router.get("/{item_id}", response_model=InventoryItemOut)
async def get_inventory_item(item_id: int, db: AsyncSession = Depends(get_async_session)):
    item = await _get_item_or_404(db, item_id)
    return InventoryItemOut(**item.to_schema)


@router.get("/{item_id}/history", response_model=List[InventoryHistoryOut])
async def list_inventory_history(
    item_id: int,
    limit: int = Query(HISTORY_LIMIT, ge=1, le=HISTORY_LIMIT),
    db: AsyncSession = Depends(get_async_session),
):
    """Most recent ledger rows for one item, newest first."""
    res = await db.execute(
        select(InventoryHistoryModel, InventoryItemModel.item_name)
        .join(InventoryItemModel, InventoryHistoryModel.item_id == InventoryItemModel.id)
        .where(InventoryHistoryModel.item_id == item_id)
        .order_by(InventoryHistoryModel.created_at.desc(), InventoryHistoryModel.id.desc())
        .limit(limit)
    )
    return [
        InventoryHistoryOut(
            id=h.id,
            item_id=h.item_id,
            item_name=item_name,
            change_type=h.change_type,
            quantity=int(h.quantity),
            reason=h.reason,
            created_at=h.created_at,
        )
        for (h, item_name) in res.all()
    ]


@router.post("", response_model=InventoryItemOut, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(
    payload: InventoryItemWrite,
    db: AsyncSession = Depends(get_async_session),
):
    item = InventoryItemModel(**payload.model_dump())
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return InventoryItemOut(**item.to_schema)


@router.put("/{item_id}", response_model=InventoryItemOut)
async def update_inventory_item(
    item_id: int,
    payload: InventoryItemWrite,
    db: AsyncSession = Depends(get_async_session),
):
    """Full replace of the editable fields. Status has its own endpoint."""
    item = await _get_item_or_404(db, item_id)
    for field, value in payload.model_dump().items():
        setattr(item, field, value)

    await db.commit()
    await db.refresh(item)
    return InventoryItemOut(**item.to_schema)


@router.post("/{item_id}/stock-change", response_model=StockChangeOut)
async def change_stock(
    item_id: int,
    payload: StockChangeRequest,
    db: AsyncSession = Depends(get_async_session),
):
    try:
        new_stock = await _apply_stock_change(
            db=db,
            item_id=item_id,
            change_type=payload.change_type,
            quantity=payload.quantity,
            reason=payload.reason,
        )
        await db.commit()
    except HTTPException as e:
        await db.rollback()
        logger.warning(
            "Stock change rejected: item=%s %s %s (%s)",
            item_id, payload.change_type, payload.quantity, e.detail,
        )
        raise
    except Exception:
        await db.rollback()
        logger.exception("Stock change failed: item=%s", item_id)
        raise

    logger.info("Stock change: item=%s %s %s -> %s", item_id, payload.change_type, payload.quantity, new_stock)
    return StockChangeOut(message="Stock updated", item_id=item_id, new_stock=new_stock)


@router.patch("/{item_id}/status")
async def update_inventory_status(
    item_id: int,
    payload: InventoryStatusUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    res = await db.execute(
        update(InventoryItemModel)
        .where(InventoryItemModel.id == item_id)
        .values(status=payload.status, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    if not res.rowcount:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    await db.commit()
    return {"message": "Status updated", "status": payload.status}


@router.delete("/{item_id}")
async def delete_inventory_item(
    item_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    # inventory_history rows go with the item (ON DELETE CASCADE)
    res = await db.execute(
        delete(InventoryItemModel)
        .where(InventoryItemModel.id == item_id)
        .execution_options(synchronize_session=False)
    )
    if not res.rowcount:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    await db.commit()
    return {"message": "Inventory item deleted"}
