from datetime import datetime
from sqlalchemy import Column, DateTime, String
from signage.db import Base

DISPLAY_RUNTIME_SCROLL_PX_PER_SECOND_KEY = "display_runtime_scroll_px_per_second"


class SystemSetting(Base):
    __tablename__ = "system_setting"
    key = Column(String(128), primary_key=True)
    value = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
