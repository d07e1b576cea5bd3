class CampusError(Exception):
    """Base class for errors raised by campus operations."""


class ValidationError(CampusError):
    """Malformed input: empty field, unparseable time, inverted interval."""


class NotFoundError(CampusError):
    """Unknown classroom, booking, student or resource."""


class ConflictError(CampusError):
    """A proposed interval overlaps an existing booking in the same classroom."""

    def __init__(self, booking, message=None):
        self.booking = booking
        super().__init__(message or f"Conflicts with existing booking {booking.course}")


class PersistenceError(CampusError):
    """Load or save failure at the collection store."""
