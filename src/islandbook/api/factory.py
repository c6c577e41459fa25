"""FastAPI application factory."""

from fastapi import FastAPI, Request, Response

from islandbook.domain.booking import BookingService
from islandbook.infra.settings import load_booking_policy
from islandbook.observability.correlation import (
    CORRELATION_ID_HEADER,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from islandbook.observability.logging import get_logger

from .routers import public
from .routes import reservations, vacancy

logger = get_logger(__name__)


def create_app(service: BookingService | None = None) -> FastAPI:
    """Create the FastAPI app.

    Args:
        service: Booking service to serve. If None, one is built from the
                 ISLAND_* policy environment variables.

    Returns:
        Configured FastAPI application.
    """
    if service is None:
        service = BookingService(load_booking_policy())

    app = FastAPI(
        title="Island Booking",
        docs_url=None,
        redoc_url=None,
    )
    app.state.booking_service = service

    logger.info(
        "booking policy loaded",
        extra={
            "extra_fields": {
                "min_days_ahead": service.policy.min_days_ahead,
                "max_consecutive_days": service.policy.max_consecutive_days,
                "max_days_ahead": service.policy.max_days_ahead,
            }
        },
    )

    # Correlation ID middleware
    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        cid = resolve_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        token = set_correlation_id(cid)
        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response
        finally:
            reset_correlation_id(token)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        logger.warning(
            "request failed",
            exc_info=exc,
            extra={"extra_fields": {"method": request.method, "path": request.url.path}},
        )
        return Response(status_code=503)

    app.include_router(public.router)
    app.include_router(reservations.router)
    app.include_router(vacancy.router)

    return app
