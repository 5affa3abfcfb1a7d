from sqlalchemy import Boolean, Column, Date

from .database import Base


class DailyFlag(Base):
    """Manual "understaffed" marker for a whole day, keyed by date."""
    __tablename__ = "daily_flags"

    date = Column(Date, primary_key=True)
    is_flagged = Column(Boolean, nullable=False, default=False)

    @property
    def to_schema(self):
        return {"date": self.date, "is_flagged": bool(self.is_flagged)}
