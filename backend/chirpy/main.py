"""Chirpy - short message posting API."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from chirpy.api.errors import register_error_handlers
from chirpy.config import get_settings
from chirpy.services.metrics import HitCounter

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    from chirpy.database import Base, engine

    # Import all models so they're registered with Base
    from chirpy import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title=settings.app_name,
    description="Post short messages and follow what others chirp",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.hit_counter = HitCounter()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.middleware("http")
async def count_fileserver_hits(request: Request, call_next):
    """Count every request served by the /app file server."""
    if request.url.path == "/app" or request.url.path.startswith("/app/"):
        request.app.state.hit_counter.increment()
    return await call_next(request)


@app.get("/api/healthz", response_class=PlainTextResponse)
async def health_check():
    """Health check endpoint."""
    return "OK"


# Import and include routers
from chirpy.api import admin, auth, chirps, users, webhooks  # noqa: E402

app.include_router(users.router, prefix="/api")
app.include_router(auth.router, prefix="/api")
app.include_router(chirps.router, prefix="/api")
app.include_router(webhooks.router, prefix="/api")
app.include_router(admin.router)

app.mount("/app", StaticFiles(directory=settings.filepath_root, html=True), name="app")
