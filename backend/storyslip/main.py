"""FastAPI application entry point. Registers middleware, error handlers and API routers."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from storyslip.config import settings
from storyslip.database import Base, engine
import storyslip.models  # noqa: F401 - registers model metadata
from storyslip.routers import auth, websites, contents, content_sync

logging.getLogger("storyslip").setLevel(settings.LOG_LEVEL.upper())
logger = logging.getLogger("storyslip.main")

app = FastAPI(
    title="StorySlip API",
    description="Multi-tenant content management API: content, version history and collaborative editing locks",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register all routers
app.include_router(auth.router)
app.include_router(websites.router)
app.include_router(contents.router)
app.include_router(content_sync.router)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("[db] %s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.on_event("startup")
def ensure_schema():
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "StorySlip API"}
