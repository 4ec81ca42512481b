"""
SocietyDesk Backend - FastAPI Application
Visitor lifecycle, amenity booking and emergency coordination
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from societydesk import __version__
from societydesk.config import settings
from societydesk.context import AppContext, build_context
from societydesk.exceptions import SocietyDeskError, ValidationError
from societydesk.routers import alerts, amenities, bookings, dashboard, visitors

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

logger = logging.getLogger("http")


async def handle_domain_error(request: Request, exc: SocietyDeskError):
    body = {"detail": exc.message, "error_code": exc.error_code}
    if isinstance(exc, ValidationError):
        body["errors"] = exc.errors
    if exc.details:
        body["details"] = exc.details
    logger.info(
        f"DOMAIN_ERROR | {request.method} {request.url.path} "
        f"status={exc.status_code} code={exc.error_code} detail={exc.message}"
    )
    return JSONResponse(status_code=exc.status_code, content=body)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Residential visitor management and amenity booking",
        version=__version__,
    )
    app.state.context = context or build_context()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SocietyDeskError, handle_domain_error)

    # Include routers
    app.include_router(visitors.router, prefix=f"{settings.API_PREFIX}/visitors", tags=["visitors"])
    app.include_router(amenities.router, prefix=f"{settings.API_PREFIX}/amenities", tags=["amenities"])
    app.include_router(bookings.router, prefix=f"{settings.API_PREFIX}/bookings", tags=["bookings"])
    app.include_router(alerts.router, prefix=f"{settings.API_PREFIX}/alerts", tags=["alerts"])
    app.include_router(dashboard.router, prefix=f"{settings.API_PREFIX}/dashboard", tags=["dashboard"])

    @app.get("/")
    async def root():
        return {"message": settings.APP_NAME, "status": "running"}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        logger.info(f"➡️ REQUEST {request.method} {request.url}")

        response = await call_next(request)

        duration = (time.time() - start) * 1000
        logger.info(
            f"✅ RESPONSE {request.method} {request.url} | "
            f"Status: {response.status_code} | Time: {duration:.2f}ms"
        )
        return response

    return app


app = create_app()
