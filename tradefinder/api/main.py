"""
FastAPI application factory and configuration.

This follows the application factory pattern, making testing easier
and allowing for different configurations (dev, test, prod).
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import AppSettings, FeedConfig, TradeConfig, ValuationConfig
from ..external.cache import TTLCache
from ..external.league_store import InMemoryLeagueStore, LeagueStore, RedisLeagueStore
from ..external.player_feed import PlayerFeed
from ..external.sleeper_client import SleeperClient
from ..trades.analyzer import TradeAnalyzer
from .middleware.cors import setup_cors
from .routes.health import router as health_router
from .routes.league import router as league_router
from .routes.players import router as players_router
from .routes.trades import router as trades_router


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(level=level.upper(),
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up Fantasy Trade Finder API...")
    logger.info(f"League store: {type(app.state.league_store).__name__}")
    logger.info("Startup complete")

    yield

    logger.info("Shutting down Fantasy Trade Finder API...")
    await app.state.player_feed.close()
    await app.state.league_store.close()
    logger.info("Shutdown complete")


def build_league_store(settings: AppSettings) -> LeagueStore:
    if settings.redis_url:
        return RedisLeagueStore.from_url(settings.redis_url, key=settings.league_key)

    logger.warning("No redis_url configured, league data is kept in memory only")
    return InMemoryLeagueStore()


def create_app(config: Optional[Dict[str, Any]] = None,
               league_store: Optional[LeagueStore] = None,
               player_feed: Optional[PlayerFeed] = None,
               trade_analyzer: Optional[TradeAnalyzer] = None) -> FastAPI:
    """
    Application factory function.

    Args:
        config: Overrides for AppSettings (which otherwise come from the
            environment / .env)
        league_store: League persistence; built from settings when omitted
        player_feed: Player catalog source; a Sleeper-backed feed when omitted
        trade_analyzer: Configured trade engine; default policy when omitted
    """
    settings = AppSettings(**(config or {}))
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.title,
        description=settings.description,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,  # Disable docs in prod
        redoc_url="/redoc" if settings.debug else None,
    )

    feed_config = FeedConfig()
    app.state.settings = settings
    app.state.league_store = league_store or build_league_store(settings)
    app.state.player_feed = player_feed or PlayerFeed(
        SleeperClient(),
        cache=TTLCache(ttl_seconds=settings.players_cache_ttl),
        config=feed_config,
    )
    app.state.trade_analyzer = trade_analyzer or TradeAnalyzer(ValuationConfig(), TradeConfig())

    setup_cors(app, settings.cors_origins)

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add response time header for monitoring."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests for monitoring and debugging."""
        start_time = time.time()

        logger.info(f"Request: {request.method} {request.url}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"Response: {response.status_code} - {process_time:.3f}s - {request.method} {request.url.path}"
        )

        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with consistent format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "type": "http_error",
                    "message": exc.detail,
                    "status_code": exc.status_code,
                }
            }
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors."""
        return JSONResponse(
            status_code=422,
            content={
                "error": {
                    "type": "validation_error",
                    "message": "Request validation failed",
                    "details": jsonable_errors(exc),
                }
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unexpected error: {exc}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "type": "internal_error",
                    "message": "An unexpected error occurred",
                    # Don't leak error details in production
                    "details": str(exc) if settings.debug else None,
                }
            }
        )

    app.include_router(health_router, prefix="/api/v1", tags=["health"])
    app.include_router(league_router, prefix="/api/v1", tags=["league"])
    app.include_router(players_router, prefix="/api/v1", tags=["players"])
    app.include_router(trades_router, prefix="/api/v1", tags=["trades"])

    @app.get("/")
    async def root():
        """Root endpoint with basic API information."""
        return {
            "name": settings.title,
            "version": settings.version,
            "description": settings.description,
            "docs_url": "/docs" if settings.debug else None,
            "health_check": "/api/v1/health",
        }

    return app


def jsonable_errors(exc: RequestValidationError):
    # Error contexts can hold exception objects that JSONResponse cannot encode
    return [{key: value for key, value in error.items() if key != "ctx"} for error in exc.errors()]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tradefinder.api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
