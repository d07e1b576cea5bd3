from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, List, Optional
from smart_campus.models.booking import Booking
from smart_campus.models.classroom import Classroom
from smart_campus.utils.errors import ValidationError
from smart_campus.utils.interval import TimeInterval, validate_interval


def list_all_bookings(classrooms: Iterable[Classroom]) -> Iterator[Booking]:
    """Bookings of every classroom, in classroom order then insertion order."""
    for classroom in classrooms:
        yield from classroom.bookings


def find_classroom(classrooms: Iterable[Classroom], room_number: str) -> Optional[Classroom]:
    room_number = (room_number or "").strip().lower()
    for classroom in classrooms:
        if classroom.room_number.lower() == room_number:
            return classroom
    return None


def find_booking(classrooms: Iterable[Classroom], booking_id: str) -> Optional[Booking]:
    for booking in list_all_bookings(classrooms):
        if booking.id == booking_id:
            return booking
    return None


def find_available_classrooms(
    classrooms: Iterable[Classroom], interval: TimeInterval, required_capacity: int = 0
) -> List[Classroom]:
    """
    Classrooms large enough for `required_capacity` that are free for the
    whole interval, smallest sufficient room first.
    """
    validate_interval(interval)
    available = [
        room for room in classrooms
        if room.capacity >= required_capacity and room.find_conflict(interval) is None
    ]
    return sorted(available, key=lambda room: room.capacity)


def available_slots(
    classroom: Classroom,
    day: date,
    duration: int = 60,
    day_start: int = 8,
    day_end: int = 18,
) -> List[TimeInterval]:
    """
    Free slots of `duration` minutes in the classroom between `day_start`
    and `day_end` o'clock on `day`.
    """
    if duration <= 0:
        raise ValidationError("Duration must be positive")

    opening = datetime.combine(day, datetime.min.time()) + timedelta(hours=day_start)
    closing = datetime.combine(day, datetime.min.time()) + timedelta(hours=day_end)
    step = timedelta(minutes=duration)

    busy = sorted(
        (b.interval for b in classroom.bookings
         if b.start_time < closing and b.end_time > opening),
        key=lambda interval: interval.start,
    )

    slots = []
    current = opening
    for interval in busy:
        while current + step <= interval.start:
            slots.append(TimeInterval(current, current + step))
            current += step
        current = max(current, interval.end)

    while current + step <= closing:
        slots.append(TimeInterval(current, current + step))
        current += step
    return slots
