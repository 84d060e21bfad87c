import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from signage.db import Base

PLAYLIST_DRAFT = "DRAFT"
PLAYLIST_IN_USE = "IN_USE"


class Playlist(Base):
    __tablename__ = "playlist"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    status = Column(String(16), nullable=False, default=PLAYLIST_DRAFT)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class PlaylistItem(Base):
    __tablename__ = "playlist_item"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    playlist_id = Column(String(36), ForeignKey("playlist.id"), nullable=False)
    content_id = Column(String(36), ForeignKey("content.id"), nullable=False)
    sequence = Column(Integer, nullable=False)
    duration = Column(Integer, nullable=False)
