import uuid
from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from signage.db import Base


class Schedule(Base):
    __tablename__ = "schedule"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    playlist_id = Column(String(36), ForeignKey("playlist.id"), nullable=False)
    display_id = Column(String(36), ForeignKey("display.id"), nullable=False)
    start_date = Column(String(10), nullable=True)  # YYYY-MM-DD, inclusive
    end_date = Column(String(10), nullable=True)  # YYYY-MM-DD, inclusive
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM
    priority = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
