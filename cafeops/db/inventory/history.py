from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class InventoryHistory(Base):
    __tablename__ = "inventory_history"
    __table_args__ = (
        CheckConstraint("change_type IN ('in', 'out')", name="ck_inventory_history_change_type"),
        CheckConstraint("quantity > 0", name="ck_inventory_history_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(
        Integer,
        ForeignKey("inventory.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    change_type = Column(String(3), nullable=False)  # 'in' | 'out'
    quantity = Column(Integer, nullable=False)
    reason = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now(), index=True)

    item = relationship("InventoryItem", back_populates="history")
