"""FastAPI web application for FocusFlow."""

import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from focusflow.api.routers import analytics, auth, pomodoro
from focusflow.database.database import DATABASE_URL, Database
from focusflow.errors import FocusFlowError

load_dotenv()

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

# Comma-separated list of allowed frontend origins
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    database.init_schema()
    try:
        yield
    finally:
        database.dispose()


async def focusflow_error_handler(request: Request, exc: FocusFlowError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    content = {"detail": exc.message}
    if exc.errors:
        content["errors"] = [e.model_dump() for e in exc.errors]
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": "Validation failed", "errors": errors})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Something went wrong!"})


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the application around a database.

    The app owns the database lifecycle: schema is initialised on startup and
    the engine disposed on shutdown.
    """
    app = FastAPI(
        title="FocusFlow API",
        description="Pomodoro session tracking and productivity analytics",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.database = database or Database(DATABASE_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
        return response

    app.add_exception_handler(FocusFlowError, focusflow_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(auth.router)
    app.include_router(pomodoro.router)
    app.include_router(analytics.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": VERSION}

    return app


app = create_app()
