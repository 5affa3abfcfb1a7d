from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from . import DEFAULT_UNIT, STATUS_IN_STOCK


class InventoryItem(Base):
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_name = Column(String, nullable=False)
    current_stock = Column(Integer, nullable=False, default=0)
    minimum_stock = Column(Integer, nullable=False, default=0)
    unit = Column(String, nullable=False, default=DEFAULT_UNIT)
    category = Column(String, nullable=True, index=True)
    notes = Column(Text, nullable=True)

    # 'needs_reorder' | 'in_stock', set by hand from the clients
    status = Column(String, nullable=False, default=STATUS_IN_STOCK)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    history = relationship(
        "InventoryHistory",
        back_populates="item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_low_stock(self) -> bool:
        return int(self.current_stock or 0) <= int(self.minimum_stock or 0)

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "item_name": self.item_name,
            "current_stock": int(self.current_stock or 0),
            "minimum_stock": int(self.minimum_stock or 0),
            "unit": self.unit,
            "category": self.category,
            "notes": self.notes,
            "status": self.status,
            "is_low_stock": self.is_low_stock,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
