import logging
import threading
from typing import Callable, List, Optional, Tuple
from fastapi import Request
from pydantic import ValidationError as SchemaError
from smart_campus.models.booking import Booking
from smart_campus.models.classroom import Classroom
from smart_campus.models.directory import Directory, seed_sample_data
from smart_campus.models.resource import Resource, validate_settable_status
from smart_campus.models.student import Student
from smart_campus.schemas.records import ClassroomRecord, ResourceRecord, StudentRecord
from smart_campus.utils.errors import CampusError, NotFoundError, PersistenceError, ValidationError
from smart_campus.utils.interval import TimeInterval
from smart_campus.utils.persistence import CollectionStore
from smart_campus.utils import scheduler

logger = logging.getLogger(__name__)

STUDENTS = "students"
CLASSROOMS = "classrooms"
RESOURCES = "resources"


def classroom_from_record(record: dict) -> Classroom:
    data = ClassroomRecord(**record)
    classroom = Classroom(data.room_number, data.type, data.capacity)
    for b in data.bookings:
        classroom.add_booking(b.course, TimeInterval(b.start_time, b.end_time), booking_id=b.id)
    return classroom


def student_from_record(record: dict) -> Student:
    data = StudentRecord(**record)
    return Student(data.id, data.name, data.degree, data.email)


def resource_from_record(record: dict) -> Resource:
    data = ResourceRecord(**record)
    return Resource(data.id, data.name, data.type, data.status, data.checked_out_by)


class CampusSystem:
    """
    One running session: the directories, the store they are flushed to, and
    the commands the HTTP layer issues against them.

    Every mutating command flushes all collections before returning.
    """

    def __init__(self, store: CollectionStore, directory: Directory = None):
        self.store = store
        self.directory = directory or Directory()
        self._save_lock = threading.Lock()

    # ---------- lifecycle ----------

    def _load_collection(self, name: str, build: Callable[[dict], object], key: Callable[[object], str]) -> list:
        try:
            records = self.store.load(name)
        except PersistenceError as e:
            logger.warning(f"{e}; starting '{name}' empty")
            return []
        try:
            items = [build(record) for record in records]
            seen = set()
            for item in items:
                item_key = key(item).lower()
                if item_key in seen:
                    raise ValidationError(f"duplicate key '{key(item)}'")
                seen.add(item_key)
        except (SchemaError, CampusError, TypeError) as e:
            logger.warning(f"Collection '{name}' holds invalid records ({e}); starting empty")
            return []
        return items

    def startup(self, seed: bool = True):
        self.directory.students = self._load_collection(STUDENTS, student_from_record, lambda s: s.id)
        self.directory.classrooms = self._load_collection(
            CLASSROOMS, classroom_from_record, lambda c: c.room_number
        )
        self.directory.resources = self._load_collection(RESOURCES, resource_from_record, lambda r: r.id)
        logger.debug(
            f"Loaded {len(self.directory.students)} students, "
            f"{len(self.directory.classrooms)} classrooms, "
            f"{len(self.directory.resources)} resources"
        )
        if seed and self.directory.is_empty():
            logger.debug("No saved data found, installing sample data")
            seed_sample_data(self.directory)
            self.save_all()

    def shutdown(self):
        self.save_all()

    def save_all(self) -> bool:
        """Flush every collection. Failures are logged; memory stays authoritative."""
        collections = [
            (STUDENTS, self.directory.students),
            (CLASSROOMS, self.directory.classrooms),
            (RESOURCES, self.directory.resources),
        ]
        ok = True
        with self._save_lock:
            for name, items in collections:
                try:
                    self.store.save(name, [item.to_record() for item in list(items)])
                except PersistenceError as e:
                    logger.error(f"Save failed, keeping in-memory state: {e}")
                    ok = False
        return ok

    # ---------- classrooms and bookings ----------

    def get_classroom(self, room_number: str) -> Classroom:
        classroom = scheduler.find_classroom(self.directory.classrooms, room_number)
        if classroom is None:
            raise NotFoundError(f"Classroom {room_number} not found")
        return classroom

    def find_booking(self, booking_id: str) -> Optional[Booking]:
        return scheduler.find_booking(self.directory.classrooms, booking_id)

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.find_booking(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} not found")
        return booking

    def add_classroom(self, room_number: str, type: str, capacity: int) -> Classroom:
        classroom = Classroom(room_number, type, capacity)
        with self.directory.lock:
            if scheduler.find_classroom(self.directory.classrooms, classroom.room_number):
                raise ValidationError(f"Classroom {classroom.room_number} already exists")
            self.directory.classrooms.append(classroom)
        self.save_all()
        return classroom

    def add_booking(self, room_number: Optional[str], course: str, start: str, end: str) -> Booking:
        if room_number is None or not room_number.strip():
            raise ValidationError("A classroom must be selected")
        classroom = self.get_classroom(room_number)
        interval = TimeInterval.from_text(start, end)
        booking = classroom.add_booking(course, interval)
        self.save_all()
        return booking

    def edit_booking(self, booking: Booking, course: str, start: str, end: str) -> Booking:
        classroom = booking.classroom
        if classroom is None:
            raise NotFoundError(f"Booking {booking.id} no longer belongs to a classroom")
        interval = TimeInterval.from_text(start, end)
        classroom.edit_booking(booking, course, interval)
        self.save_all()
        return booking

    def delete_booking(self, booking: Booking):
        classroom = booking.classroom
        if classroom is not None:
            classroom.remove_booking(booking)
        self.save_all()

    def list_bookings_for(self, classroom: Classroom) -> Tuple[Booking, ...]:
        return classroom.bookings

    def list_all_bookings(self) -> List[Booking]:
        return list(scheduler.list_all_bookings(self.directory.classrooms))

    def find_available_classrooms(self, start: str, end: str, required_capacity: int = 0) -> List[Classroom]:
        interval = TimeInterval.from_text(start, end)
        return scheduler.find_available_classrooms(self.directory.classrooms, interval, required_capacity)

    # ---------- students ----------

    def find_student(self, student_id: str) -> Optional[Student]:
        student_id = student_id.strip().lower()
        return next((s for s in self.directory.students if s.id.lower() == student_id), None)

    def get_student(self, student_id: str) -> Student:
        student = self.find_student(student_id)
        if student is None:
            raise NotFoundError(f"Student {student_id} not found")
        return student

    def search_students(self, term: str) -> Optional[Student]:
        return next((s for s in self.directory.students if s.matches(term)), None)

    def add_student(self, id: str, name: str, degree: str, email: str) -> Student:
        student = Student(id, name, degree, email)
        with self.directory.lock:
            if self.find_student(student.id):
                raise ValidationError(f"Student ID {student.id} already exists")
            self.directory.students.append(student)
        self.save_all()
        return student

    def edit_student(self, student: Student, name: str, degree: str, email: str) -> Student:
        student.update(name, degree, email)
        self.save_all()
        return student

    def delete_student(self, student: Student):
        with self.directory.lock:
            self.directory.students = [s for s in self.directory.students if s is not student]
        self.save_all()

    def checked_out_to(self, student_id: str) -> List[Resource]:
        return [r for r in self.directory.resources if r.checked_out_by == student_id]

    # ---------- resources ----------

    def find_resource(self, resource_id: str) -> Optional[Resource]:
        resource_id = resource_id.strip().lower()
        return next((r for r in self.directory.resources if r.id.lower() == resource_id), None)

    def get_resource(self, resource_id: str) -> Resource:
        resource = self.find_resource(resource_id)
        if resource is None:
            raise NotFoundError(f"Resource {resource_id} not found")
        return resource

    def search_resources(self, term: str) -> Optional[Resource]:
        return next((r for r in self.directory.resources if r.matches(term)), None)

    def add_resource(self, id: str, name: str, type: str, status: str) -> Resource:
        resource = Resource(id, name, type, validate_settable_status(status))
        with self.directory.lock:
            if self.find_resource(resource.id):
                raise ValidationError(f"Resource ID {resource.id} already exists")
            self.directory.resources.append(resource)
        self.save_all()
        return resource

    def edit_resource(self, resource: Resource, name: str, type: str, status: str) -> Resource:
        resource.update(name, type, status)
        self.save_all()
        return resource

    def delete_resource(self, resource: Resource):
        with self.directory.lock:
            self.directory.resources = [r for r in self.directory.resources if r is not resource]
        self.save_all()

    def check_out_resource(self, resource: Resource, student_id: str) -> Resource:
        student_id = (student_id or "").strip()
        if not student_id:
            raise ValidationError("Student ID cannot be empty")
        student = self.find_student(student_id)
        if student is None:
            raise ValidationError(
                f"Student ID {student_id} not found. Only registered students can check out resources"
            )
        resource.check_out(student.id)
        self.save_all()
        return resource

    def return_resource(self, resource: Resource) -> Resource:
        resource.check_in()
        self.save_all()
        return resource


def get_campus(request: Request) -> CampusSystem:
    """Provide the running CampusSystem."""
    return request.app.state.campus
