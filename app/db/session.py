"""Engine, session factory and the request-scoped session dependency."""

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.services.geo import haversine_km

DATABASE_URL = str(settings.database_url)


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
        # one shared connection, otherwise every session sees an empty database
        kwargs["poolclass"] = StaticPool
    return kwargs


def register_sqlite_functions(dbapi_connection, _connection_record) -> None:
    """Expose ``haversine_km`` to SQLite, matching the PostgreSQL function."""
    dbapi_connection.create_function("haversine_km", 4, haversine_km, deterministic=True)


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
if engine.dialect.name == "sqlite":
    event.listen(engine, "connect", register_sqlite_functions)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """Yield a session and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
