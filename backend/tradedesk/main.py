"""
tradedesk Backend - FastAPI Application

Stock trading backend: user signup and login, a holdings ledger kept up to
date by order placement, position snapshots and the order log.
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tradedesk.config import get_settings
from tradedesk.core.middleware import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from tradedesk.database.connections import close_connections, get_mongo_client, ping_mongo
from tradedesk.database.databases import trading_db
from tradedesk.database.indexes import create_indexes
from tradedesk.routers import auth, health, holdings, orders, positions
from tradedesk.services.approval_sweeper import ApprovalSweeper

settings = get_settings()

# ==================== Logging Setup ====================

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("tradedesk")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Connect to MongoDB (the server does not start without it)
    - Create indexes
    - Start the order approval sweep

    Shutdown:
    - Stop the sweep
    - Close all database connections
    """
    logger.info("Starting up %s backend...", settings.app_name)

    client = await get_mongo_client()
    try:
        await ping_mongo(client)
        await create_indexes(client)
    except PyMongoError as e:
        logger.critical("MongoDB connection error: %s", e)
        raise
    logger.info("Connected to MongoDB, indexes created")

    sweeper = None
    if settings.approval_sweep_enabled:
        sweeper = ApprovalSweeper(
            client[trading_db.DB_NAME],
            interval_seconds=settings.approval_sweep_interval_seconds,
        )
        sweeper.start()
    app.state.approval_sweeper = sweeper

    yield

    # Shutdown
    logger.info("Shutting down %s backend...", settings.app_name)
    if sweeper is not None:
        await sweeper.stop()
    await close_connections()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title=f"{settings.app_name} API",
    description="""
## Stock Trading Backend API

### Features
- **Authentication**: Signup and login issuing a JWT session cookie
- **Holdings**: Per-ticker quantity, weighted average cost and last price
- **Orders**: BUY/SELL placement updating holdings, plus the order log
- **Positions**: Read-only position snapshots

### Authentication
Signup and login set an HTTP-only `token` cookie (also returned in the body).
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# Middleware runs outermost-last-added: CORS wraps everything
if settings.rate_limit_enabled:
    app.add_middleware(RateLimitMiddleware)
if settings.security_headers_enabled:
    app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Name the unmatched route on 404s; everything else keeps the default shape."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={"detail": f"Resource not found: {request.method} {request.url.path}"},
        )
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    content = {"detail": "Internal Server Error"}
    if not settings.is_production:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(holdings.router)
app.include_router(positions.router)
app.include_router(orders.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": f"{settings.app_name} API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }


def run():
    """Console entry point."""
    uvicorn.run("tradedesk.main:app", host="0.0.0.0", port=settings.port)
