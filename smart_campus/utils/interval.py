from dataclasses import dataclass
from datetime import datetime
from smart_campus.utils.errors import ValidationError

TIME_FORMAT = "%d-%m-%Y %H:%M"


def to_minute(value: datetime) -> datetime:
    """Drop seconds and microseconds; the booking clock runs at minute granularity."""
    return value.replace(second=0, microsecond=0)


@dataclass(frozen=True)
class TimeInterval:
    start: datetime
    end: datetime

    @classmethod
    def from_text(cls, start: str, end: str) -> "TimeInterval":
        return cls(parse_time(start, "start"), parse_time(end, "end"))

    @property
    def minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def __str__(self) -> str:
        return f"{format_time(self.start)} to {format_time(self.end)}"


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """
    Half-open overlap test.
    An interval ending exactly when the other begins does not overlap it.
    """
    return a.start < b.end and b.start < a.end


def is_valid(interval: TimeInterval) -> bool:
    return interval.end > interval.start


def validate_interval(interval: TimeInterval) -> TimeInterval:
    if not is_valid(interval):
        raise ValidationError("End time must be after start time")
    return interval


def parse_time(value: str, field: str = "time") -> datetime:
    """Parse `dd-mm-yyyy HH:MM` text into a datetime."""
    if value is None or not value.strip():
        raise ValidationError(f"Missing {field} time")
    try:
        return datetime.strptime(value.strip(), TIME_FORMAT)
    except ValueError:
        raise ValidationError(
            f"Invalid {field} time '{value}', expected format dd-mm-yyyy hh:mm"
        )


def format_time(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)
