"""
Main application module for the polyline offset backend.

This file sets up the FastAPI application, configures CORS so browser
clients can make cross-origin requests, and exposes a simple health
check endpoint.  Routers for the stateless offset API and the
polyline registry are included under the `/api` namespace.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes_offset import router as offset_router
from .api.routes_polylines import router as polylines_router

# The init_db function creates tables in the SQLite database if they do
# not already exist.
from .services.polylines_store import init_db  # type: ignore


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    # Initialise the database before any requests are processed.  The
    # init_db function is idempotent and safe to call multiple times.
    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        init_db()
        yield

    app = FastAPI(title="Polyline offset", lifespan=lifespan)

    # Allow all origins by default.  In production you should restrict
    # this to the domains that are allowed to access your API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint for monitoring and deployment probes.
    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(offset_router, prefix="/api", tags=["offset"])
    app.include_router(polylines_router, prefix="/api", tags=["polylines"])

    return app


# Create the application instance.  Uvicorn will import this when
# running `uvicorn app.main:app` from within the backend directory.
app = create_app()
