"""URL slug generation for places and blogs."""

from __future__ import annotations

import re
import time

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def generate_slug(text: str, now_ms: int | None = None) -> str:
    """Return ``<stem>-<6 digits>``.

    The suffix is the low six digits of the current time in milliseconds, so
    two same-named records almost never collide; the unique constraint on the
    slug column is still what guarantees uniqueness.
    """
    stem = _NON_ALNUM.sub("-", (text or "").lower()).strip("-") or "item"
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{stem}-{now_ms % 1_000_000:06d}"
