from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cafeops.db.database import get_async_session
from cafeops.db.models import Notice as NoticeModel
from cafeops.schemas.notices import (
    MarkAllReadOut,
    NoticeRead,
    NoticeReadStatusUpdate,
    NoticeWrite,
    UnreadCount,
)

router = APIRouter()


async def _get_notice_or_404(db: AsyncSession, notice_id: int) -> NoticeModel:
    res = await db.execute(select(NoticeModel).where(NoticeModel.id == notice_id))
    notice = res.scalar_one_or_none()
    if not notice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notice not found")
    return notice


@router.get("", response_model=List[NoticeRead])
async def list_notices(
    priority: Optional[str] = None,
    is_read: Optional[bool] = None,
    db: AsyncSession = Depends(get_async_session),
):
    stmt = select(NoticeModel)
    if priority:
        stmt = stmt.where(NoticeModel.priority == priority)
    if is_read is not None:
        stmt = stmt.where(NoticeModel.is_read.is_(is_read))
    res = await db.execute(stmt.order_by(NoticeModel.created_at.desc(), NoticeModel.id.desc()))
    return [NoticeRead(**n.to_schema) for n in res.scalars().all()]


@router.get("/unread-count", response_model=UnreadCount)
async def count_unread_notices(db: AsyncSession = Depends(get_async_session)):
    count = await db.scalar(select(func.count(NoticeModel.id)).where(NoticeModel.is_read.is_(False)))
    return UnreadCount(count=int(count or 0))


@router.patch("/mark-all-read", response_model=MarkAllReadOut)
async def mark_all_notices_read(db: AsyncSession = Depends(get_async_session)):
    """Mark every unread notice read. The count only includes rows that changed."""
    res = await db.execute(
        update(NoticeModel)
        .where(NoticeModel.is_read.is_(False))
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return MarkAllReadOut(message="All notices marked as read", updated_count=int(res.rowcount or 0))


@router.get("/{notice_id}", response_model=NoticeRead)
async def get_notice(notice_id: int, db: AsyncSession = Depends(get_async_session)):
    notice = await _get_notice_or_404(db, notice_id)
    return NoticeRead(**notice.to_schema)


@router.post("", response_model=NoticeRead, status_code=status.HTTP_201_CREATED)
async def create_notice(
    payload: NoticeWrite,
    db: AsyncSession = Depends(get_async_session),
):
    notice = NoticeModel(**payload.model_dump(), is_read=False)
    db.add(notice)
    await db.commit()
    await db.refresh(notice)
    return NoticeRead(**notice.to_schema)


@router.put("/{notice_id}", response_model=NoticeRead)
async def update_notice(
    notice_id: int,
    payload: NoticeWrite,
    db: AsyncSession = Depends(get_async_session),
):
    notice = await _get_notice_or_404(db, notice_id)
    for field, value in payload.model_dump().items():
        setattr(notice, field, value)

    await db.commit()
    await db.refresh(notice)
    return NoticeRead(**notice.to_schema)


@router.patch("/{notice_id}/read-status", response_model=NoticeRead)
async def set_notice_read_status(
    notice_id: int,
    payload: NoticeReadStatusUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    notice = await _get_notice_or_404(db, notice_id)
    notice.is_read = payload.is_read
    await db.commit()
    await db.refresh(notice)
    return NoticeRead(**notice.to_schema)


@router.delete("/{notice_id}")
async def delete_notice(
    notice_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    """Only notices that have been read may be deleted."""
    notice = await _get_notice_or_404(db, notice_id)
    if not notice.is_read:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only read notices can be deleted",
        )

    # is_read is re-checked in the DELETE itself
    res = await db.execute(
        delete(NoticeModel)
        .where(NoticeModel.id == notice_id, NoticeModel.is_read.is_(True))
        .execution_options(synchronize_session=False)
    )
    if not res.rowcount:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only read notices can be deleted",
        )
    await db.commit()
    return {"message": "Notice deleted"}
