import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.http.contents import router as contents_router
from app.core.config import settings, configure_logging
from app.core.db import create_tables
from app.core.exceptions import ApiException, api_exception_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings)
    if settings.create_tables:
        await create_tables()
        logger.info("Database tables ensured")
    yield


app = FastAPI(
    title="Contents API",
    description="Content feed endpoints: create, read, update, delete, list, like and unlike",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ApiException, api_exception_handler)

app.include_router(contents_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Service banner"""
    return {
        "message": "Contents API",
        "version": settings.api_version,
        "docs": "/docs"
    }
