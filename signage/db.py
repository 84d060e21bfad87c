from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from signage.config import DATABASE_URL


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if url in {"sqlite://", "sqlite:///:memory:"}:
        # One shared connection, otherwise every session sees an empty database.
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    # Register every model on Base.metadata before creating tables.
    import signage.models.content  # noqa: F401
    import signage.models.display  # noqa: F401
    import signage.models.playlist  # noqa: F401
    import signage.models.schedule  # noqa: F401
    import signage.models.system_setting  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    ensure_sqlite_schema(target)


def ensure_sqlite_schema(bind=None) -> None:
    """
    Lightweight runtime schema patching for SQLite.

    `Base.metadata.create_all()` won't add new columns to existing tables.
    This keeps local/dev installs working without requiring Alembic.
    """
    target = bind or engine
    if target.dialect.name != "sqlite":
        return

    with target.begin() as conn:
        schedule_cols = conn.execute(text("PRAGMA table_info(schedule)")).fetchall()
        schedule_col_names = {row[1] for row in schedule_cols}  # (cid, name, type, notnull, dflt_value, pk)
        if "priority" not in schedule_col_names:
            conn.execute(text("ALTER TABLE schedule ADD COLUMN priority INTEGER DEFAULT 0"))
        if "is_active" not in schedule_col_names:
            conn.execute(text("ALTER TABLE schedule ADD COLUMN is_active INTEGER DEFAULT 1"))
        if "start_date" not in schedule_col_names:
            conn.execute(text("ALTER TABLE schedule ADD COLUMN start_date VARCHAR(10)"))
        if "end_date" not in schedule_col_names:
            conn.execute(text("ALTER TABLE schedule ADD COLUMN end_date VARCHAR(10)"))
        conn.execute(text("UPDATE schedule SET priority=0 WHERE priority IS NULL"))
        conn.execute(text("UPDATE schedule SET is_active=1 WHERE is_active IS NULL"))
        conn.execute(text("UPDATE schedule SET start_date=NULL WHERE trim(start_date)=''"))
        conn.execute(text("UPDATE schedule SET end_date=NULL WHERE trim(end_date)=''"))

        playlist_cols = conn.execute(text("PRAGMA table_info(playlist)")).fetchall()
        playlist_col_names = {row[1] for row in playlist_cols}
        if "status" not in playlist_col_names:
            conn.execute(text("ALTER TABLE playlist ADD COLUMN status VARCHAR(16) DEFAULT 'DRAFT'"))
        conn.execute(text("UPDATE playlist SET status='DRAFT' WHERE status IS NULL OR trim(status)=''"))

        display_cols = conn.execute(text("PRAGMA table_info(display)")).fetchall()
        display_col_names = {row[1] for row in display_cols}
        if "screen_width" not in display_col_names:
            conn.execute(text("ALTER TABLE display ADD COLUMN screen_width INTEGER"))
        if "screen_height" not in display_col_names:
            conn.execute(text("ALTER TABLE display ADD COLUMN screen_height INTEGER"))
        conn.execute(
            text(
                "UPDATE display SET screen_width=NULL, screen_height=NULL "
                "WHERE screen_width <= 0 OR screen_height <= 0"
            )
        )
