import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List
from smart_campus.models.classroom import Classroom
from smart_campus.models.resource import Resource, AVAILABLE, CHECKED_OUT
from smart_campus.models.student import Student
from smart_campus.utils.interval import TimeInterval, to_minute


@dataclass
class Directory:
    """In-memory registries owned by one CampusSystem."""
    students: List[Student] = field(default_factory=list)
    classrooms: List[Classroom] = field(default_factory=list)
    resources: List[Resource] = field(default_factory=list)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def is_empty(self) -> bool:
        return not (self.students or self.classrooms or self.resources)


def seed_sample_data(directory: Directory, now: datetime = None):
    now = to_minute(now or datetime.now())

    directory.students.extend([
        Student("S1001", "Josh Williams", "Animation", "JWilliams@SmartUni.edu"),
        Student("S1002", "Maria Kool", "Engineering", "MKool@SmartUni.edu"),
        Student("S1003", "Nico Robin", "Ancient History", "NRobin@SmartUni.edu"),
        Student("S1004", "Ben Leslie", "Culinary Arts", "BLeslie@SmartUni.edu"),
    ])

    r101 = Classroom("R101", "Lecture Hall", 120)
    r202 = Classroom("R202", "Computer Lab", 30)
    r305 = Classroom("R305", "Seminar Room", 20)
    directory.classrooms.extend([r101, r202, r305])

    tomorrow = now + timedelta(days=1)
    r101.add_booking("CS101", TimeInterval(tomorrow, tomorrow + timedelta(hours=2)))
    later = now + timedelta(days=2)
    r202.add_booking("ENG201", TimeInterval(later, later + timedelta(hours=3)))

    directory.resources.extend([
        Resource("B001", "Advanced Java Programming", "Book", AVAILABLE),
        Resource("L002", "Microscope", "Lab Equipment", CHECKED_OUT),
        Resource("C003", "Arduino Kit", "Electronics", AVAILABLE),
    ])
