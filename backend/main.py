"""
Main module for the FastAPI application.
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studybridge.__version__ import __version__
from studybridge.core.config import settings
from studybridge.core.errors import register_exception_handlers
from studybridge.core.logging import setup_logging
from studybridge.db.session import Database
from studybridge.auth.routes import router as auth_router
from studybridge.api.v1.users import router as users_router
from studybridge.api.v1.connections import router as connections_router
from studybridge.api.v1.messages import router as messages_router
from studybridge.api.v1.blocks import router as blocks_router
from studybridge.api.v1.rooms import router as rooms_router
from studybridge.api.ws import router as ws_router
from studybridge.ws.connection_manager import ConnectionManager
from studybridge.ws.events import WebSocketEventHandler

setup_logging(settings.LOG_LEVEL)

# Setup logging
logger = logging.getLogger(__name__)

# Lifespan event handler
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan event handler - opens the database handle on startup and
    disposes it on shutdown.

    The schema is not created here; run ``alembic upgrade head`` before
    starting the service.
    """
    app.state.database = Database.from_settings(settings)
    logger.info(f"{settings.PROJECT_NAME} {__version__} starting")

    yield

    await app.state.database.dispose()
    logger.info(f"{settings.PROJECT_NAME} shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Backend for the StudyBridge study collaboration app",
    version=__version__,
    lifespan=lifespan,
)

# Initialize the WebSocket connection manager and event handler
ws_manager = ConnectionManager()
app.state.ws_event_handler = WebSocketEventHandler(ws_manager)

# Configure CORS
if settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS if isinstance(settings.CORS_ORIGINS, list) else [settings.CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

# Include routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(connections_router)
app.include_router(messages_router)
app.include_router(blocks_router)
app.include_router(rooms_router)
app.include_router(ws_router)


@app.get("/")
async def root():
    """
    Root endpoint for health checks.
    """
    return {"message": "StudyBridge API is running"}

@app.get("/health")
async def health():
    """
    Health check endpoint.
    """
    return {"status": "ok"}

@app.get("/version", tags=["health"])
async def get_version():
    """
    Get API version and feature flags.
    """
    from studybridge.core.version import get_version_info
    return get_version_info()


if __name__ == "__main__":
    """
    Run the application directly.
    """
    import uvicorn

    port = int(os.getenv("API_PORT", settings.API_PORT))
    host = os.getenv("API_HOST", settings.API_HOST)

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
    )
