"""Mapping of booking outcomes to HTTP responses.

validation_error and duplicate_range carry a message meant for the guest
and map to 400 {"message": ...}. not_found and storage_unavailable map to
an empty 404 / 503 so no storage detail leaks out.
"""

from fastapi import Response
from fastapi.responses import JSONResponse

from islandbook.domain.outcomes import BookingError

_STATUS_BY_KIND = {
    "validation_error": 400,
    "duplicate_range": 400,
    "not_found": 404,
    "storage_unavailable": 503,
}


def error_response(error: BookingError) -> Response:
    status_code = _STATUS_BY_KIND[error.kind]
    if error.message is not None and status_code == 400:
        return JSONResponse(status_code=status_code, content={"message": error.message})
    return Response(status_code=status_code)
