from __future__ import annotations

import itertools
import os
import sys
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

# settings read the environment at import time, so this must come first
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

from fastapi.testclient import TestClient  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.db.session import SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Blog, Category, Place, Tag  # noqa: E402
from app.services.media import get_media_storage  # noqa: E402

_ids = itertools.count(1)


class FakeStorage:
    """In-memory stand-in for the S3 bucket."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        self.objects[key] = data
        return f"http://storage.test/media/{key}"

    def exists(self, key: str) -> bool:
        return key in self.objects

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage():
    fake = FakeStorage()
    app.dependency_overrides[get_media_storage] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_media_storage, None)


@pytest.fixture
def client(storage):
    return TestClient(app)


@pytest.fixture
def make_place(db):
    """Insert a place directly; published unless told otherwise."""

    def _make(name: str = "Place", **fields: Any) -> Place:
        fields.setdefault("status", "published")
        fields.setdefault("description", f"{name} description")
        place = Place(name=name, slug=f"test-place-{next(_ids)}", **fields)
        db.add(place)
        db.commit()
        db.refresh(place)
        return place

    return _make


@pytest.fixture
def make_blog(db):
    def _make(title: str = "Blog", **fields: Any) -> Blog:
        fields.setdefault("status", "published")
        fields.setdefault("content", f"{title} content")
        blog = Blog(title=title, slug=f"test-blog-{next(_ids)}", **fields)
        db.add(blog)
        db.commit()
        db.refresh(blog)
        return blog

    return _make


@pytest.fixture
def category(db) -> Category:
    obj = Category(name="Attractions", slug="attractions", icon="🎡", display_order=1)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@pytest.fixture
def tags(db) -> list[Tag]:
    objs = [Tag(name="Nature", slug="nature"), Tag(name="Budget", slug="budget")]
    db.add_all(objs)
    db.commit()
    for obj in objs:
        db.refresh(obj)
    return objs
