"""FastAPI dependencies."""

from fastapi import Request

from islandbook.domain.booking import BookingService


def get_booking_service(request: Request) -> BookingService:
    """Return the booking service built by create_app()."""
    return request.app.state.booking_service
