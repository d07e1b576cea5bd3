import gc
import random
import threading
import pytest
from datetime import datetime, timedelta

from smart_campus.models.classroom import Classroom
from smart_campus.utils.errors import ConflictError, ValidationError
from smart_campus.utils.interval import TimeInterval, overlaps

DAY = datetime(2026, 10, 20)


def at(hour, minute=0):
    return DAY + timedelta(hours=hour, minutes=minute)


def span(start, end):
    return TimeInterval(start, end)


@pytest.fixture
def r101():
    room = Classroom("R101", "Lecture Hall", 120)
    room.add_booking("CS101", span(at(9), at(11)))
    return room


def assert_no_overlaps(classroom):
    bookings = classroom.bookings
    for i, a in enumerate(bookings):
        for b in bookings[i + 1:]:
            assert not overlaps(a.interval, b.interval), f"{a} overlaps {b}"


def test_add_back_to_back_booking(r101):
    eng = r101.add_booking("ENG201", span(at(11), at(12)))
    assert [b.course for b in r101.bookings] == ["CS101", "ENG201"]
    assert eng.classroom is r101
    assert eng.room_number == "R101"


def test_add_overlapping_booking_reports_conflict(r101):
    cs101 = r101.bookings[0]
    with pytest.raises(ConflictError) as exc:
        r101.add_booking("MATH1", span(at(10), at(10, 30)))
    assert exc.value.booking is cs101
    assert len(r101.bookings) == 1


@pytest.mark.parametrize("course", ["", "   ", None])
def test_add_rejects_empty_course(r101, course):
    with pytest.raises(ValidationError):
        r101.add_booking(course, span(at(13), at(14)))
    assert len(r101.bookings) == 1


def test_add_rejects_invalid_interval_before_conflict_check(r101):
    # overlaps CS101 but is inverted, so validation wins
    with pytest.raises(ValidationError):
        r101.add_booking("MATH1", span(at(10), at(9, 30)))
    with pytest.raises(ValidationError):
        r101.add_booking("MATH1", span(at(13), at(13)))


def test_add_truncates_to_minutes(r101):
    booking = r101.add_booking("LAB", span(at(13).replace(second=42), at(14).replace(microsecond=7)))
    assert booking.start_time == at(13)
    assert booking.end_time == at(14)


def test_edit_with_unchanged_values_succeeds(r101):
    cs101 = r101.bookings[0]
    r101.edit_booking(cs101, cs101.course, cs101.interval)
    assert r101.bookings == (cs101,)


def test_edit_into_overlap_with_self_only_succeeds(r101):
    cs101 = r101.bookings[0]
    r101.edit_booking(cs101, "CS102", span(at(10), at(12)))
    assert cs101.course == "CS102"
    assert cs101.interval == span(at(10), at(12))


def test_edit_conflict_leaves_booking_unchanged(r101):
    cs101 = r101.bookings[0]
    eng = r101.add_booking("ENG201", span(at(11), at(12)))
    with pytest.raises(ConflictError) as exc:
        r101.edit_booking(cs101, "CS101", span(at(10, 30), at(11, 30)))
    assert exc.value.booking is eng
    assert cs101.course == "CS101"
    assert cs101.interval == span(at(9), at(11))
    assert r101.bookings == (cs101, eng)


def test_edit_validation_failure_leaves_booking_unchanged(r101):
    cs101 = r101.bookings[0]
    with pytest.raises(ValidationError):
        r101.edit_booking(cs101, "", span(at(14), at(15)))
    with pytest.raises(ValidationError):
        r101.edit_booking(cs101, "CS101", span(at(15), at(14)))
    assert cs101.course == "CS101"
    assert cs101.interval == span(at(9), at(11))


def test_edit_keeps_position_and_identity(r101):
    first = r101.bookings[0]
    second = r101.add_booking("ENG201", span(at(11), at(12)))
    third = r101.add_booking("MATH1", span(at(13), at(14)))
    r101.edit_booking(second, "ENG202", span(at(15), at(16)))
    assert r101.bookings == (first, second, third)
    assert second.course == "ENG202"


def test_edit_booking_of_other_classroom_is_rejected(r101):
    other = Classroom("R202", "Computer Lab", 30)
    foreign = other.add_booking("ENG201", span(at(13), at(14)))
    with pytest.raises(ValidationError):
        r101.edit_booking(foreign, "ENG201", span(at(15), at(16)))
    assert foreign.interval == span(at(13), at(14))


def test_remove_is_idempotent(r101):
    cs101 = r101.bookings[0]
    r101.remove_booking(cs101)
    r101.remove_booking(cs101)
    assert r101.bookings == ()


def test_removed_slot_can_be_booked_again(r101):
    r101.remove_booking(r101.bookings[0])
    r101.add_booking("MATH1", span(at(10), at(10, 30)))
    assert [b.course for b in r101.bookings] == ["MATH1"]


def test_bookings_view_is_a_snapshot(r101):
    view = r101.bookings
    r101.add_booking("ENG201", span(at(11), at(12)))
    assert len(view) == 1
    assert len(r101.bookings) == 2


def test_back_reference_does_not_keep_classroom_alive():
    room = Classroom("R999", "Store", 5)
    booking = room.add_booking("X", span(at(9), at(10)))
    del room
    gc.collect()
    assert booking.classroom is None
    assert booking.room_number is None


@pytest.mark.parametrize("capacity", [0, -5, "ten", True])
def test_classroom_requires_positive_capacity(capacity):
    with pytest.raises(ValidationError):
        Classroom("R1", "Lab", capacity)


def test_random_operations_never_break_invariant():
    rng = random.Random(1234)
    room = Classroom("R303", "Seminar Room", 20)
    for step in range(400):
        start = at(rng.randint(6, 20), rng.choice([0, 15, 30, 45]))
        interval = span(start, start + timedelta(minutes=rng.choice([15, 30, 60, 90, 120])))
        action = rng.choice(["add", "add", "edit", "remove"])
        try:
            if action == "add":
                room.add_booking(f"C{step}", interval)
            elif room.bookings and action == "edit":
                room.edit_booking(rng.choice(room.bookings), f"E{step}", interval)
            elif room.bookings:
                room.remove_booking(rng.choice(room.bookings))
        except ConflictError:
            pass
        assert_no_overlaps(room)


def test_concurrent_adds_and_edits_keep_bookings_disjoint():
    room = Classroom("R404", "Computer Lab", 30)
    start_line = threading.Barrier(8)
    created = []
    errors = []

    def worker(seed):
        rng = random.Random(seed)
        start_line.wait()
        try:
            for step in range(150):
                start = at(rng.randint(6, 20), rng.choice([0, 15, 30, 45]))
                interval = span(start, start + timedelta(minutes=rng.choice([15, 30, 60, 90])))
                try:
                    if rng.random() < 0.6 or not room.bookings:
                        created.append(room.add_booking(f"T{seed}-{step}", interval))
                    else:
                        room.edit_booking(rng.choice(room.bookings), f"T{seed}-{step}", interval)
                except ConflictError:
                    pass
        except Exception as e:  # pylint: disable=broad-except
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(seed,)) for seed in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert_no_overlaps(room)
    bookings = room.bookings
    assert len({id(b) for b in bookings}) == len(bookings)
    assert len({b.id for b in bookings}) == len(bookings)
    assert sorted(b.id for b in bookings) == sorted(b.id for b in created)
