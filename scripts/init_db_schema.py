"""
Database schema initialisation
------------------------------
Creates the haversine_km distance function and all tables.
"""

import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# make the app package importable when run as a plain script
sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import inspect  # noqa: E402

from app.db.init_db import init_db  # noqa: E402
from app.db.session import engine  # noqa: E402


def init_db_schema() -> None:
    """Create distance function and tables, then list the tables."""
    print("Initialising database schema...")
    init_db(engine)
    print("Tables and haversine_km function ready")

    print("\nTables:")
    for name in sorted(inspect(engine).get_table_names()):
        print(f"  - {name}")


if __name__ == "__main__":
    init_db_schema()
