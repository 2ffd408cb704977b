"""Import every model so metadata is complete before create_all."""

from app.models.media import Media  # noqa: F401
from app.models.place import Place, PlaceStatus, PlaceType  # noqa: F401
from app.models.blog import Blog  # noqa: F401
from app.models.category import Category, Tag  # noqa: F401
from app.models.comment import Comment  # noqa: F401
