from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cafeops.core.converters import month_bounds
from cafeops.core.shift_parser import parse_shift_text
from cafeops.db.database import get_async_session
from cafeops.db.models import DailyFlag as DailyFlagModel, Shift as ShiftModel
from cafeops.schemas.shifts import (
    ShiftDraft,
    ShiftRead,
    ShiftTextParseRequest,
    ShiftUnderstaffedOut,
    ShiftWrite,
    UnderstaffedDay,
)

router = APIRouter()


async def _get_shift_or_404(db: AsyncSession, shift_id: int) -> ShiftModel:
    res = await db.execute(select(ShiftModel).where(ShiftModel.id == shift_id))
    shift = res.scalar_one_or_none()
    if not shift:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found")
    return shift


@router.get("", response_model=List[ShiftRead])
async def list_shifts(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: AsyncSession = Depends(get_async_session),
):
    """List shifts, optionally bounded by an inclusive date range."""
    stmt = select(ShiftModel)
    if start_date:
        stmt = stmt.where(ShiftModel.date >= start_date)
    if end_date:
        stmt = stmt.where(ShiftModel.date <= end_date)
    res = await db.execute(stmt.order_by(ShiftModel.date, ShiftModel.start_time, ShiftModel.id))
    return [ShiftRead(**s.to_schema) for s in res.scalars().all()]


@router.get("/date/{shift_date}", response_model=List[ShiftRead])
async def list_shifts_for_date(
    shift_date: date,
    db: AsyncSession = Depends(get_async_session),
):
    res = await db.execute(
        select(ShiftModel)
        .where(ShiftModel.date == shift_date)
        .order_by(ShiftModel.start_time, ShiftModel.id)
    )
    return [ShiftRead(**s.to_schema) for s in res.scalars().all()]


@router.get("/understaffed", response_model=List[UnderstaffedDay])
async def list_understaffed_days(
    request: Request,
    month: str = Query(..., description="YYYY-MM"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Days of a month that need attention.

    A day is listed when it has a manual daily flag, or when it has at least one
    shift but fewer than MINIMUM_STAFF_COUNT. The per-shift is_understaffed
    marker is a separate mechanism and is not considered here.
    """
    try:
        first, last = month_bounds(month)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    minimum = request.app.state.settings.minimum_staff_count

    counts_res = await db.execute(
        select(ShiftModel.date, func.count(ShiftModel.id))
        .where(ShiftModel.date >= first, ShiftModel.date <= last)
        .group_by(ShiftModel.date)
    )
    counts = {d: int(n) for d, n in counts_res.all()}

    flags_res = await db.execute(
        select(DailyFlagModel.date)
        .where(DailyFlagModel.date >= first, DailyFlagModel.date <= last)
        .where(DailyFlagModel.is_flagged.is_(True))
    )
    flagged = set(flags_res.scalars().all())

    out = []
    for day in sorted(set(counts) | flagged):
        n = counts.get(day, 0)
        if day in flagged or 0 < n < minimum:
            out.append(UnderstaffedDay(date=day, shift_count=n, is_flagged=day in flagged))
    return out


@router.post("/parse", response_model=ShiftDraft, response_model_exclude_none=True)
async def parse_shift(payload: ShiftTextParseRequest):
    """Pre-fill a shift form from free text. Nothing is stored."""
    return ShiftDraft(**parse_shift_text(payload.text))


@router.get("/{shift_id}", response_model=ShiftRead)
async def get_shift(shift_id: int, db: AsyncSession = Depends(get_async_session)):
    shift = await _get_shift_or_404(db, shift_id)
    return ShiftRead(**shift.to_schema)


@router.post("", response_model=ShiftRead, status_code=status.HTTP_201_CREATED)
async def create_shift(
    payload: ShiftWrite,
    db: AsyncSession = Depends(get_async_session),
):
    shift = ShiftModel(**payload.model_dump())
    db.add(shift)
    await db.commit()
    await db.refresh(shift)
    return ShiftRead(**shift.to_schema)


@router.put("/{shift_id}", response_model=ShiftRead)
async def update_shift(
    shift_id: int,
    payload: ShiftWrite,
    db: AsyncSession = Depends(get_async_session),
):
    shift = await _get_shift_or_404(db, shift_id)

    # Full replace: optional fields left out of the body are cleared
    for field, value in payload.model_dump().items():
        setattr(shift, field, value)

    await db.commit()
    await db.refresh(shift)
    return ShiftRead(**shift.to_schema)


@router.patch("/{shift_id}/understaffed", response_model=ShiftUnderstaffedOut)
async def toggle_shift_understaffed(
    shift_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    shift = await _get_shift_or_404(db, shift_id)
    shift.is_understaffed = not bool(shift.is_understaffed)
    await db.commit()
    return ShiftUnderstaffedOut(id=shift.id, is_understaffed=bool(shift.is_understaffed))


@router.delete("/{shift_id}")
async def delete_shift(
    shift_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    res = await db.execute(
        delete(ShiftModel)
        .where(ShiftModel.id == shift_id)
        .execution_options(synchronize_session=False)
    )
    if not res.rowcount:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found")
    await db.commit()
    return {"message": "Shift deleted"}
