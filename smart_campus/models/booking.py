import uuid
import weakref
from datetime import datetime
from smart_campus.utils.interval import TimeInterval


class Booking:
    """
    A course's reservation of one classroom for one time interval.

    Bookings are created and removed only by their Classroom, which is the sole
    owner. The back-reference is weak so it never keeps a classroom alive.
    """

    def __init__(self, classroom, course: str, interval: TimeInterval, id: str = None):
        self.id = id or uuid.uuid4().hex
        self._classroom = weakref.ref(classroom)
        self.course = course
        self.interval = interval

    @property
    def classroom(self):
        return self._classroom()

    @property
    def room_number(self):
        classroom = self.classroom
        return classroom.room_number if classroom is not None else None

    @property
    def start_time(self) -> datetime:
        return self.interval.start

    @property
    def end_time(self) -> datetime:
        return self.interval.end

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "course": self.course,
            "start_time": self.start_time.isoformat(timespec="minutes"),
            "end_time": self.end_time.isoformat(timespec="minutes"),
        }

    def __repr__(self) -> str:
        return f"{self.course}: {self.room_number} ({self.interval})"
