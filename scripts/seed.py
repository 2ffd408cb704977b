"""
Sample data seeding
-------------------
Categories, tags, a handful of published places around Cordova, Cebu and one
blog post. Categories and tags are upserted by slug; places and the blog are
only created when their name/title is not present yet.
"""

from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.db.init_db import init_db  # noqa: E402
from app.db.session import SessionLocal  # noqa: E402
from app.models import Blog, Category, Place, Tag  # noqa: E402
from app.services.slug import generate_slug  # noqa: E402

CATEGORIES = [
    {"name": "Attractions", "slug": "attractions", "icon": "🎡", "display_order": 1},
    {"name": "Restaurants", "slug": "restaurants", "icon": "🍴", "display_order": 2},
    {"name": "Hotels", "slug": "hotels", "icon": "🏨", "display_order": 3},
    {"name": "Beaches", "slug": "beaches", "icon": "🏖️", "display_order": 4},
    {"name": "Museums", "slug": "museums", "icon": "🏛️", "display_order": 5},
    {"name": "Travel Guides", "slug": "travel-guides", "icon": "📖", "display_order": 6},
]

TAGS = [
    {"name": "Family Friendly", "slug": "family-friendly"},
    {"name": "Romantic", "slug": "romantic"},
    {"name": "Adventure", "slug": "adventure"},
    {"name": "Cultural", "slug": "cultural"},
    {"name": "Nature", "slug": "nature"},
    {"name": "Budget", "slug": "budget"},
    {"name": "Luxury", "slug": "luxury"},
]

PLACES = [
    {
        "name": "Bantayan sa Hari",
        "description": "Restored Spanish-era watchtower overlooking the Cebu Strait.",
        "city": "Cordova",
        "country": "Philippines",
        "latitude": 10.2500,
        "longitude": 123.9450,
        "place_type": "landmark",
        "category": "attractions",
        "tags": ["cultural", "budget"],
        "rating": 4.4,
    },
    {
        "name": "Lantaw Floating Restaurant",
        "description": "Seafood restaurant on stilts with sunset views of the city skyline.",
        "city": "Cordova",
        "country": "Philippines",
        "latitude": 10.2561,
        "longitude": 123.9428,
        "place_type": "restaurant",
        "category": "restaurants",
        "tags": ["romantic", "family-friendly"],
        "rating": 4.6,
    },
    {
        "name": "Day-as Mangrove Boardwalk",
        "description": "Bamboo walkway through a protected mangrove forest.",
        "city": "Cordova",
        "country": "Philippines",
        "latitude": 10.2475,
        "longitude": 123.9536,
        "place_type": "park",
        "category": "attractions",
        "tags": ["nature", "family-friendly"],
        "rating": 4.2,
    },
    {
        "name": "Gilutongan Island Marine Sanctuary",
        "description": "Snorkelling and diving site with coral gardens and reef fish.",
        "city": "Cordova",
        "country": "Philippines",
        "latitude": 10.2089,
        "longitude": 123.9897,
        "place_type": "beach",
        "category": "beaches",
        "tags": ["adventure", "nature"],
        "rating": 4.7,
    },
    {
        "name": "Cordova Heritage Museum",
        "description": "Local history collection housed in the old municipal hall.",
        "city": "Cordova",
        "country": "Philippines",
        "latitude": None,
        "longitude": None,
        "place_type": "museum",
        "category": "museums",
        "tags": ["cultural"],
        "rating": 3.9,
    },
]

BLOG = {
    "title": "A Day Trip Around Cordova",
    "excerpt": "Watchtowers, mangroves and a floating dinner.",
    "content": "Start at Bantayan sa Hari, walk the Day-as mangroves and end with dinner at Lantaw.",
    "author_name": "Travel Desk",
    "category": "travel-guides",
    "tags": ["cultural", "nature"],
    "places": ["Bantayan sa Hari", "Day-as Mangrove Boardwalk", "Lantaw Floating Restaurant"],
}


def _upsert_by_slug(db: Session, model, rows: list[dict]) -> dict[str, object]:
    by_slug = {}
    for row in rows:
        obj = db.execute(select(model).where(model.slug == row["slug"])).scalar_one_or_none()
        if obj is None:
            obj = model(**row)
            db.add(obj)
        by_slug[row["slug"]] = obj
    db.flush()
    return by_slug


def seed(db: Session) -> None:
    categories = _upsert_by_slug(db, Category, CATEGORIES)
    tags = _upsert_by_slug(db, Tag, TAGS)
    print(f"categories: {len(categories)}, tags: {len(tags)}")

    places = {}
    for row in PLACES:
        existing = db.execute(select(Place).where(Place.name == row["name"])).scalar_one_or_none()
        if existing is not None:
            places[row["name"]] = existing
            continue
        data = {k: v for k, v in row.items() if k not in ("category", "tags")}
        place = Place(
            **data,
            slug=generate_slug(row["name"]),
            status="published",
            published_at=func.now(),
            category=categories[row["category"]],
            tags=[tags[t] for t in row["tags"]],
        )
        db.add(place)
        places[row["name"]] = place
        print(f"  + place {row['name']}")

    if db.execute(select(Blog).where(Blog.title == BLOG["title"])).scalar_one_or_none() is None:
        db.add(
            Blog(
                title=BLOG["title"],
                slug=generate_slug(BLOG["title"]),
                excerpt=BLOG["excerpt"],
                content=BLOG["content"],
                author_name=BLOG["author_name"],
                status="published",
                published_at=func.now(),
                category=categories[BLOG["category"]],
                tags=[tags[t] for t in BLOG["tags"]],
                related_places=[places[name] for name in BLOG["places"]],
            )
        )
        print(f"  + blog {BLOG['title']}")

    db.commit()


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        seed(db)
        print("Seeding complete")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
