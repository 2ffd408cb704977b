"""
Place query index creation
--------------------------
Composite indexes backing the status + coordinate predicates used by radius
and map-viewport searches, plus the common listing sorts.
"""

import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import text  # noqa: E402
from sqlalchemy.exc import SQLAlchemyError  # noqa: E402

from app.db.session import engine  # noqa: E402

INDEXES = {
    "places_status_lat_lng_idx": (
        "CREATE INDEX IF NOT EXISTS places_status_lat_lng_idx "
        "ON places (status, latitude, longitude) "
        "WHERE latitude IS NOT NULL AND longitude IS NOT NULL"
    ),
    "places_status_rating_visits_idx": (
        "CREATE INDEX IF NOT EXISTS places_status_rating_visits_idx "
        "ON places (status, rating DESC, visit_count DESC)"
    ),
    "places_status_created_idx": (
        "CREATE INDEX IF NOT EXISTS places_status_created_idx ON places (status, created_at DESC)"
    ),
    "blogs_status_created_idx": (
        "CREATE INDEX IF NOT EXISTS blogs_status_created_idx ON blogs (status, created_at DESC)"
    ),
}


def create_indexes() -> None:
    """Create each index, reporting failures without stopping."""
    print("Creating indexes...")
    with engine.connect() as conn:
        for name, ddl in INDEXES.items():
            print(f"  - {name}")
            try:
                conn.execute(text(ddl))
                conn.commit()
            except SQLAlchemyError as exc:
                print(f"    failed: {exc}")
                conn.rollback()
    print("\nDone")


if __name__ == "__main__":
    create_indexes()
