"""Database initialization utilities."""

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.db.base import Base
from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)

# Same formula as app.services.geo.haversine_km (R = 6371.0 km).
HAVERSINE_FUNCTION_SQL = """
CREATE OR REPLACE FUNCTION haversine_km(
    lat1 double precision,
    lng1 double precision,
    lat2 double precision,
    lng2 double precision
) RETURNS double precision AS $$
    SELECT 2 * 6371.0 * asin(sqrt(least(1.0,
        power(sin(radians(lat2 - lat1) / 2), 2)
        + cos(radians(lat1)) * cos(radians(lat2)) * power(sin(radians(lng2 - lng1) / 2), 2)
    )))
$$ LANGUAGE sql IMMUTABLE STRICT PARALLEL SAFE
"""


def create_distance_function(engine: Engine) -> None:
    """Install ``haversine_km`` server side (SQLite gets it per connection)."""
    if engine.dialect.name != "postgresql":
        return
    with engine.connect() as conn:
        conn.execute(text(HAVERSINE_FUNCTION_SQL))
        conn.commit()


def init_db(engine: Engine = default_engine) -> None:
    """Create the distance function and all tables."""
    from app import models  # noqa: F401

    create_distance_function(engine)
    Base.metadata.create_all(bind=engine)
    logger.info("database initialised (%s)", engine.dialect.name)
