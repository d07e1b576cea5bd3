from fastapi import HTTPException, status
from smart_campus.utils.errors import ConflictError, NotFoundError, ValidationError
from smart_campus.utils.interval import format_time


def conflict_detail(e: ConflictError) -> str:
    existing = e.booking
    return (
        "This booking overlaps with an existing booking: "
        f"{existing.course} from {format_time(existing.start_time)} "
        f"to {format_time(existing.end_time)}"
    )


def http_error(e: Exception) -> HTTPException:
    """Translate a campus error into the HTTP response the caller renders."""
    if isinstance(e, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=conflict_detail(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
