import argparse
import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from typing import List, Optional

import aiohttp
import uvicorn
from fastapi import FastAPI

from app.core.config import settings
from app.core.exceptions import CatArtError, cat_art_exception_handler
from app.core.middleware import RequestLoggingMiddleware
from app.presentation.api.v1.routers import cat_art

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure logging: console always, rotating file when log_file is set"""
    log_handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        log_dir = os.path.dirname(settings.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        log_handlers.append(
            RotatingFileHandler(
                settings.log_file,
                maxBytes=settings.log_file_max_bytes,
                backupCount=settings.log_file_backup_count,
                encoding="utf-8",
            )
        )
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format=settings.log_format,
        datefmt=settings.log_date_format,
        handlers=log_handlers,
        force=True,
    )


def create_http_session() -> aiohttp.ClientSession:
    """Build the outbound HTTP session shared by every request"""
    return aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=settings.http_timeout),
        connector=aiohttp.TCPConnector(limit=settings.http_pool_limit),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info("Starting %s...", settings.api_title)
    owns_session = getattr(app.state, "http_session", None) is None
    if owns_session:
        app.state.http_session = create_http_session()
    try:
        yield
    finally:
        logger.info("Shutting down %s...", settings.api_title)
        if owns_session:
            await app.state.http_session.close()
            app.state.http_session = None


def create_application() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.http_session = None

    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(CatArtError, cat_art_exception_handler)
    app.include_router(cat_art.router)

    return app


configure_logging()

# Create application instance
app = create_application()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=settings.api_description)
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="TCP port")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level)
    logger.info("Listening on %s:%d", args.host, args.port)
    # uvicorn stops accepting on SIGINT/SIGTERM and drains in-flight requests
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_config=None,
        timeout_graceful_shutdown=settings.graceful_shutdown_timeout,
    )


if __name__ == "__main__":
    main()
