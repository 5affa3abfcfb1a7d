from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from .database import Base

PRIORITIES = ("high", "normal", "low")
DEFAULT_PRIORITY = "normal"


class Notice(Base):
    __tablename__ = "notices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    priority = Column(String, nullable=False, default=DEFAULT_PRIORITY, index=True)
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    author = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now(), index=True)
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "priority": self.priority,
            "is_read": bool(self.is_read),
            "author": self.author,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
