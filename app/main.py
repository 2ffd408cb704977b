"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

from fastapi import FastAPI

# Load environment variables from .env file
load_dotenv()

from app import models  # noqa: F401,E402
from app.api.routes import router  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.db.init_db import init_db  # noqa: E402

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database artifacts."""
    logger.info("starting %s", settings.project_name)
    init_db()
    yield


app = FastAPI(title=settings.project_name, lifespan=lifespan)
app.include_router(router, prefix=settings.api_v1_prefix)


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Basic sanity endpoint."""
    return {"message": "Tourism Places API is running"}


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Health check endpoint for Docker."""
    return {"status": "healthy"}
