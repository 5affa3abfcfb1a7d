from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from cafeops.core.converters import month_bounds
from cafeops.db.database import get_async_session
from cafeops.db.models import DailyFlag as DailyFlagModel
from cafeops.schemas.flags import DailyFlagRead, DailyFlagUpsert

router = APIRouter()


def _insert_for(db: AsyncSession):
    # ON CONFLICT DO UPDATE lives in the dialect-specific insert()
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    raise RuntimeError(f"Daily flag upsert is not supported on the {dialect!r} dialect")


@router.get("", response_model=List[DailyFlagRead])
async def list_flags_for_month(
    month: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session),
):
    if not month:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="month query parameter is required")
    try:
        first, last = month_bounds(month)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    res = await db.execute(
        select(DailyFlagModel)
        .where(DailyFlagModel.date >= first, DailyFlagModel.date <= last)
        .order_by(DailyFlagModel.date)
    )
    return [DailyFlagRead(**f.to_schema) for f in res.scalars().all()]


@router.post("", response_model=DailyFlagRead)
async def upsert_flag(
    payload: DailyFlagUpsert,
    db: AsyncSession = Depends(get_async_session),
):
    """Set or clear the manual flag for one date. Unflagging is is_flagged=false."""
    insert = _insert_for(db)
    stmt = insert(DailyFlagModel).values(date=payload.date, is_flagged=payload.is_flagged)
    stmt = stmt.on_conflict_do_update(
        index_elements=[DailyFlagModel.date],
        set_={"is_flagged": stmt.excluded.is_flagged},
    )
    await db.execute(stmt)
    await db.commit()
    return DailyFlagRead(date=payload.date, is_flagged=payload.is_flagged)
