"""Expose schemas for easier import."""

from app.schemas.common import PageMeta  # noqa: F401
from app.schemas.category import CategoryOut, TagOut  # noqa: F401
from app.schemas.media import MediaListResponse, MediaOut  # noqa: F401
from app.schemas.place import (  # noqa: F401
    PlaceCreate,
    PlaceListResponse,
    PlaceOut,
    PlaceQuery,
    PlaceUpdate,
)
from app.schemas.blog import (  # noqa: F401
    BlogCreate,
    BlogListResponse,
    BlogOut,
    BlogQuery,
    BlogUpdate,
    CommentCreate,
    CommentOut,
)
from app.schemas.search import SearchResponse, TrendingResponse  # noqa: F401
