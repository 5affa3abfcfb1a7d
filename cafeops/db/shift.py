from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from .database import Base


class Shift(Base):
    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_name = Column(String, nullable=False)
    date = Column(Date, nullable=False, index=True)
    # Local time of day, "HH:MM". No ordering check between the two.
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    position = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    # Shift-level marker, independent of DailyFlag
    is_understaffed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "employee_name": self.employee_name,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "position": self.position,
            "notes": self.notes,
            "is_understaffed": bool(self.is_understaffed),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
