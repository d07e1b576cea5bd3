import pytest
from datetime import date, datetime, timedelta

from smart_campus.models.classroom import Classroom
from smart_campus.utils.errors import ValidationError
from smart_campus.utils.interval import TimeInterval
from smart_campus.utils.scheduler import (
    available_slots,
    find_available_classrooms,
    find_booking,
    find_classroom,
    list_all_bookings,
)

DAY = datetime(2026, 10, 20)


def span(start_hour, end_hour):
    return TimeInterval(DAY + timedelta(hours=start_hour), DAY + timedelta(hours=end_hour))


@pytest.fixture
def rooms():
    r101 = Classroom("R101", "Lecture Hall", 120)
    r202 = Classroom("R202", "Computer Lab", 30)
    r305 = Classroom("R305", "Seminar Room", 20)
    r101.add_booking("CS101", span(9, 11))
    r202.add_booking("ENG201", span(13, 16))
    r202.add_booking("NET300", span(9, 10))
    return [r101, r202, r305]


def test_list_all_bookings_in_classroom_then_insertion_order(rooms):
    listed = list(list_all_bookings(rooms))
    assert [(b.room_number, b.course) for b in listed] == [
        ("R101", "CS101"),
        ("R202", "ENG201"),
        ("R202", "NET300"),
    ]


def test_list_all_bookings_is_restartable(rooms):
    assert list(list_all_bookings(rooms)) == list(list_all_bookings(rooms))


def test_find_classroom_ignores_case(rooms):
    assert find_classroom(rooms, "r202") is rooms[1]
    assert find_classroom(rooms, "R999") is None


def test_find_booking_by_id(rooms):
    net = rooms[1].bookings[1]
    assert find_booking(rooms, net.id) is net
    assert find_booking(rooms, "missing") is None


def test_find_available_classrooms_smallest_first(rooms):
    free = find_available_classrooms(rooms, span(9, 10))
    assert [r.room_number for r in free] == ["R305"]

    free = find_available_classrooms(rooms, span(11, 12), required_capacity=25)
    assert [r.room_number for r in free] == ["R202", "R101"]


def test_find_available_classrooms_rejects_invalid_interval(rooms):
    with pytest.raises(ValidationError):
        find_available_classrooms(rooms, span(12, 11))


def test_available_slots_skip_bookings(rooms):
    slots = available_slots(rooms[0], date(2026, 10, 20), duration=60)
    starts = [s.start.hour for s in slots]
    assert starts == [8, 11, 12, 13, 14, 15, 16, 17]


def test_available_slots_empty_room_fills_the_day(rooms):
    slots = available_slots(rooms[2], date(2026, 10, 20), duration=120)
    assert len(slots) == 5
    assert slots[0].start == DAY + timedelta(hours=8)
    assert slots[-1].end == DAY + timedelta(hours=18)


def test_available_slots_rejects_non_positive_duration(rooms):
    with pytest.raises(ValidationError):
        available_slots(rooms[0], date(2026, 10, 20), duration=0)
