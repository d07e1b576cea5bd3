from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional


class BookingRecord(BaseModel):
    id: str
    course: str
    start_time: datetime
    end_time: datetime


class ClassroomRecord(BaseModel):
    room_number: str
    type: str
    capacity: int
    bookings: List[BookingRecord] = []


class StudentRecord(BaseModel):
    id: str
    name: str
    degree: str
    email: str


class ResourceRecord(BaseModel):
    id: str
    name: str
    type: str
    status: str
    checked_out_by: Optional[str] = None
