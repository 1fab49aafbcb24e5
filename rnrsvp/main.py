"""RNRSVP lunch coordination web application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from rnrsvp.core.config import STATIC_DIR, settings
from rnrsvp.core.database import create_db_and_tables, engine
from rnrsvp.models import get_meeting_settings
from rnrsvp.routes import (
    agendas,
    ical,
    messages,
    pages,
    participants,
    quarterly,
    rsvps,
)
from rnrsvp.routes import settings as settings_routes

# Configure logging
settings.log_dir.mkdir(parents=True, exist_ok=True)
log_file = settings.log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    # Startup
    # Reachability is checked by rnrsvp.__main__ before uvicorn starts
    logger.info("Starting RNRSVP application")
    create_db_and_tables()
    with Session(engine) as session:
        get_meeting_settings(session)
    logger.info("Database initialized successfully")
    yield
    # Shutdown
    logger.info("RNRSVP application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Participants, RSVPs, agendas and calendar export for a recurring lunch",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for external access
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Turn unexpected store failures into a 500 carrying the driver message."""
    logger.exception(f"Database error on {request.method} {request.url.path}")
    detail = str(getattr(exc, "orig", None) or exc)
    return JSONResponse(status_code=500, content={"detail": detail})


# Mount static files
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Include routers
app.include_router(settings_routes.router)
app.include_router(participants.router)
app.include_router(rsvps.router)
app.include_router(agendas.router)
app.include_router(messages.router)
app.include_router(ical.router)
app.include_router(quarterly.router)
app.include_router(pages.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
