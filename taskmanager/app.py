"""
Task Manager - FastAPI Application Entrypoint

This module builds the FastAPI application with:
- CORS and response middleware
- User, list and task routes
- Database lifecycle management

create_app takes the Settings instance explicitly; the module-level `app`
is built from environment settings for `uvicorn taskmanager.app:app`.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskmanager import __version__
from taskmanager.auth.routes import router as users_router
from taskmanager.config import Settings, settings, validate_settings
from taskmanager.database import get_engine, get_session_factory, init_db
from taskmanager.gateway.middleware import EXPOSED_HEADERS, SecurityMiddleware
from taskmanager.lists.routes import router as lists_router


logger = logging.getLogger(__name__)


def configure_logging(config: Settings) -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or missing fields are a 400, not FastAPI's default 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "ValidationError", "detail": jsonable_encoder(exc.errors())},
    )


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around a single Settings instance.
    
    Startup fails with ConfigurationError if SECRET_KEY or DATABASE_URL
    is missing.
    """
    config = config or settings
    configure_logging(config)
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
            - Validate required configuration
            - Create the engine and tables
        
        Shutdown:
            - Dispose the engine
        """
        validate_settings(config)
        
        engine = get_engine(config.DATABASE_URL)
        init_db(engine)
        app.state.db_engine = engine
        app.state.db_session_factory = get_session_factory(engine)
        logger.info("Database initialized")
        
        yield
        
        engine.dispose()
        logger.info("Database engine disposed")
    
    app = FastAPI(
        title="Task Manager",
        description="Lists and tasks with access/refresh token authentication",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type", *EXPOSED_HEADERS],
        expose_headers=EXPOSED_HEADERS,
    )
    app.add_middleware(SecurityMiddleware)
    
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    
    app.include_router(users_router)
    app.include_router(lists_router)
    
    @app.get("/health")
    async def health_check():
        """Liveness check for local dev tooling."""
        return {"status": "healthy", "version": __version__}
    
    return app


app = create_app()
