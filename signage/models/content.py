import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, BigInteger, DateTime
from signage.db import Base

CONTENT_TYPES = {"IMAGE", "VIDEO", "PDF"}


class Content(Base):
    __tablename__ = "content"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False)
    type = Column(String(16), nullable=False)
    mime_type = Column(String, nullable=True)
    file_key = Column(String, nullable=True)
    file_size = Column(BigInteger, nullable=True)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    duration = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
