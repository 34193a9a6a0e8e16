# app/main.py
"""
FoodHub - Food ordering service
Main Application Entry Point
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from dotenv import load_dotenv
load_dotenv()

from app.core.config import Settings, get_settings
from app.core.database import Database
from app.core.exceptions import OrderServiceError
from app.core.logging_config import setup_logging
from app.api.v1.api import api_router

logger = logging.getLogger(__name__)


# ========================================
# LIFESPAN EVENT
# ========================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database handle on startup and release it on shutdown"""
    settings: Settings = app.state.settings

    # ===== STARTUP =====
    setup_logging(settings)
    db = Database.from_settings(settings)
    db.create_all()
    app.state.db = db

    logger.info(f"[Startup] {settings.APP_NAME} {settings.VERSION} ready ({settings.ENVIRONMENT})")
    for route in app.routes:
        methods = sorted(getattr(route, "methods", None) or [])
        if methods and route.path.startswith("/api/"):
            logger.debug(f"[Startup]   {', '.join(methods):12} {route.path}")

    yield

    # ===== SHUTDOWN =====
    db.dispose()
    logger.info("[Shutdown] Server stopped")


# ========================================
# ERROR HANDLERS
# ========================================
async def order_service_error_handler(request: Request, exc: OrderServiceError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code, "retryable": exc.retryable},
    )


async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"[Database] {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Storage unavailable", "code": "STORAGE_ERROR", "retryable": True},
    )


# ========================================
# CREATE APP
# ========================================
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(OrderServiceError, order_service_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)

    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/health")
    async def health():
        return {"status": "healthy", "app": "foodhub"}

    @app.get("/api/test")
    async def connection_test():
        """Connectivity check for clients"""
        return {
            "status": "success",
            "message": "FoodHub backend is running!",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": [
                f"GET {settings.API_V1_STR}/menu",
                f"POST {settings.API_V1_STR}/customers",
                f"POST {settings.API_V1_STR}/orders",
                f"PUT {settings.API_V1_STR}/orders/status",
            ],
        }

    return app


app = create_app()
