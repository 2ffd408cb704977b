"""
Place bulk loader
-----------------
Reads a places.jsonl file and inserts each record through the place service,
so every row gets a generated slug and the usual validation.
"""

from __future__ import annotations

import argparse
import json
import sys
import traceback
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy.orm import Session  # noqa: E402

from app.core.errors import ServiceError  # noqa: E402
from app.db.session import SessionLocal  # noqa: E402
from app.schemas.place import PlaceCreate  # noqa: E402
from app.services.places import create_place  # noqa: E402

# only the first few problems are printed
LOG_LIMIT = 5


def iter_jsonl(path: Path):
    """Yield one dict per non-empty, parseable line."""
    with path.open("r", encoding="utf-8") as fp:
        for line in fp:
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                continue


def load_places(jsonl_path: Path, db: Session, publish: bool = False) -> tuple[int, int, int]:
    """Insert the records in ``jsonl_path``; returns (success, skipped, failed)."""
    success = 0
    skipped = 0
    failed = 0

    for lineno, record in enumerate(iter_jsonl(jsonl_path), start=1):
        if publish:
            record.setdefault("status", "published")
        try:
            payload = PlaceCreate.model_validate(record)
        except ValidationError as exc:
            skipped += 1
            if skipped <= LOG_LIMIT:
                fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
                print(f"[SKIP] record {lineno}: invalid {fields}", file=sys.stderr)
            continue

        try:
            create_place(db, payload)
            success += 1
            if success % 10 == 0:
                print(f"[INFO] {success} places loaded...", file=sys.stderr)
        except ServiceError as exc:
            # create_place already rolled back
            failed += 1
            if failed <= LOG_LIMIT:
                print(f"[FAIL] record {lineno} ({payload.name}): {exc}", file=sys.stderr)
        except Exception:
            failed += 1
            if failed == 1:
                print(f"[FAIL] record {lineno} ({payload.name}) first error:", file=sys.stderr)
                print(traceback.format_exc(), file=sys.stderr)

    return success, skipped, failed


def main() -> None:
    parser = argparse.ArgumentParser(description="Load places.jsonl into the database")
    parser.add_argument(
        "--file",
        type=Path,
        default=Path("places.jsonl"),
        help="path to the places JSONL file (default: ./places.jsonl)",
    )
    parser.add_argument(
        "--publish",
        action="store_true",
        help="mark records without an explicit status as published",
    )
    args = parser.parse_args()

    if not args.file.exists():
        raise SystemExit(f"File not found: {args.file}")

    db = SessionLocal()
    try:
        print(f"Loading places from {args.file}...")
        success, skipped, failed = load_places(args.file, db, publish=args.publish)

        print("\n" + "=" * 60)
        print("Place load finished")
        print("=" * 60)
        print(f"  loaded:  {success}")
        print(f"  skipped: {skipped}")
        print(f"  failed:  {failed}")
        print("=" * 60)
    finally:
        db.close()


if __name__ == "__main__":
    main()
