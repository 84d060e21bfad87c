"""
Shared fixtures: an isolated in-memory database per test and a FastAPI
client wired to it.
"""

import os

os.environ["SIGNAGE_DATABASE_URL"] = "sqlite://"
os.environ["SIGNAGE_SCHEDULE_TIMEZONE"] = "UTC"
os.environ["SIGNAGE_API_KEY"] = ""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from signage.db import get_db, init_db
from signage.main import app
from signage.models.content import Content
from signage.models.display import Display
from signage.models.playlist import Playlist, PlaylistItem


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite engine with the full schema."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Generator[Session, None, None]:
    SessionLocal = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_engine) -> Generator[TestClient, None, None]:
    """TestClient whose requests use the per-test database."""
    SessionLocal = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def portrait_display(db_session: Session) -> Display:
    display = Display(name="Lobby", screen_width=1080, screen_height=1920, orientation="PORTRAIT")
    db_session.add(display)
    db_session.commit()
    db_session.refresh(display)
    return display


@pytest.fixture
def scrolling_playlist(db_session: Session) -> Playlist:
    """40s of content where the poster overflows a 1080x1920 screen by 100px (45s at 24 px/s)."""
    poster = Content(title="Tall poster", type="IMAGE", width=1080, height=2020)
    clip = Content(title="Clip", type="VIDEO", width=1920, height=1080, duration=30)
    playlist = Playlist(name="Morning")
    db_session.add_all([poster, clip, playlist])
    db_session.commit()
    db_session.add_all(
        [
            PlaylistItem(playlist_id=playlist.id, content_id=poster.id, sequence=10, duration=10),
            PlaylistItem(playlist_id=playlist.id, content_id=clip.id, sequence=20, duration=30),
        ]
    )
    db_session.commit()
    db_session.refresh(playlist)
    return playlist
