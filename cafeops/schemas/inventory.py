from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, StrictInt, field_validator

from cafeops.db.inventory import DEFAULT_UNIT, MAX_STOCK

ChangeType = Literal["in", "out"]
ItemStatus = Literal["needs_reorder", "in_stock"]


class InventoryItemWrite(BaseModel):
    """Body for create and full update. Stock counters never go below zero."""
    item_name: str
    current_stock: StrictInt = Field(default=0, ge=0, le=MAX_STOCK)
    minimum_stock: StrictInt = Field(default=0, ge=0, le=MAX_STOCK)
    unit: Optional[str] = DEFAULT_UNIT
    category: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("item_name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v

    @field_validator("current_stock", "minimum_stock", mode="before")
    @classmethod
    def _null_is_zero(cls, v):
        return 0 if v is None else v

    @field_validator("unit")
    @classmethod
    def _default_unit(cls, v: Optional[str]) -> str:
        v = (v or "").strip()
        return v or DEFAULT_UNIT

    @field_validator("category", "notes")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class InventoryItemOut(BaseModel):
    id: int
    item_name: str
    current_stock: int
    minimum_stock: int
    unit: str
    category: Optional[str] = None
    notes: Optional[str] = None
    status: str
    is_low_stock: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StockChangeRequest(BaseModel):
    change_type: ChangeType
    quantity: StrictInt = Field(gt=0, le=MAX_STOCK)
    reason: Optional[str] = None

    @field_validator("reason")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class StockChangeOut(BaseModel):
    message: str
    item_id: int
    new_stock: int


class InventoryStatusUpdate(BaseModel):
    status: ItemStatus


class InventoryHistoryOut(BaseModel):
    id: int
    item_id: int
    item_name: str
    change_type: ChangeType
    quantity: int
    reason: Optional[str] = None
    created_at: datetime
