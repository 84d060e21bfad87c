import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime
from signage.db import Base


class Display(Base):
    __tablename__ = "display"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    location = Column(String, nullable=True)
    screen_width = Column(Integer, nullable=True)
    screen_height = Column(Integer, nullable=True)
    orientation = Column(String(16), default="LANDSCAPE")
    last_seen = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
