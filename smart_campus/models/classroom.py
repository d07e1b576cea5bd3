import threading
from typing import Iterable, List, Optional, Tuple
from smart_campus.models.booking import Booking
from smart_campus.utils.errors import ConflictError, ValidationError
from smart_campus.utils.interval import TimeInterval, overlaps, to_minute, validate_interval
from smart_campus.utils.validation_helpers import require_text, validate_capacity


def find_conflict(bookings: Iterable[Booking], interval: TimeInterval) -> Optional[Booking]:
    """Return the first booking whose interval overlaps `interval`, if any."""
    for existing in bookings:
        if overlaps(interval, existing.interval):
            return existing
    return None


class Classroom:
    """
    Aggregate root for a room and its bookings.

    No two bookings held by one classroom ever overlap. Every mutation runs
    under the classroom's own lock, so rooms can be mutated in parallel while
    each room sees its commands one at a time.
    """

    def __init__(self, room_number: str, type: str, capacity: int):
        self.room_number = require_text(room_number, "Room number")
        self.type = require_text(type, "Type")
        self.capacity = validate_capacity(capacity)
        self._bookings: List[Booking] = []
        self.lock = threading.RLock()

    @property
    def bookings(self) -> Tuple[Booking, ...]:
        with self.lock:
            return tuple(self._bookings)

    @property
    def booking_count(self) -> int:
        return len(self._bookings)

    def _prepare(self, course: str, interval: TimeInterval) -> Tuple[str, TimeInterval]:
        course = require_text(course, "Course")
        interval = TimeInterval(to_minute(interval.start), to_minute(interval.end))
        return course, validate_interval(interval)

    def find_conflict(self, interval: TimeInterval, exclude: Booking = None) -> Optional[Booking]:
        with self.lock:
            others = (b for b in self._bookings if b is not exclude)
            return find_conflict(others, interval)

    def add_booking(self, course: str, interval: TimeInterval, booking_id: str = None) -> Booking:
        course, interval = self._prepare(course, interval)
        with self.lock:
            conflict = self.find_conflict(interval)
            if conflict is not None:
                raise ConflictError(conflict)
            booking = Booking(self, course, interval, id=booking_id)
            self._bookings.append(booking)
            return booking

    def edit_booking(self, booking: Booking, course: str, interval: TimeInterval) -> Booking:
        course, interval = self._prepare(course, interval)
        with self.lock:
            if not any(b is booking for b in self._bookings):
                raise ValidationError(
                    f"Booking {booking.id} does not belong to classroom {self.room_number}"
                )
            conflict = self.find_conflict(interval, exclude=booking)
            if conflict is not None:
                raise ConflictError(conflict)
            booking.course = course
            booking.interval = interval
            return booking

    def remove_booking(self, booking: Booking) -> None:
        with self.lock:
            self._bookings = [b for b in self._bookings if b is not booking]

    def to_record(self) -> dict:
        return {
            "room_number": self.room_number,
            "type": self.type,
            "capacity": self.capacity,
            "bookings": [b.to_record() for b in self.bookings],
        }

    def __repr__(self) -> str:
        return f"{self.room_number} ({self.type}, capacity {self.capacity})"
