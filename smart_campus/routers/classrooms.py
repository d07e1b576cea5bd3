from fastapi import APIRouter, Depends, status
from typing import List
from smart_campus.campus import CampusSystem, get_campus
from smart_campus.schemas.booking import BookingBase, BookingResponse
from smart_campus.schemas.classroom import ClassroomCreate, ClassroomResponse
from smart_campus.utils.errors import CampusError
from smart_campus.utils.http_errors import http_error
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/classrooms",
    tags=["classrooms"],
)


@router.post("/", response_model=ClassroomResponse, status_code=status.HTTP_201_CREATED)
def create_classroom(classroom: ClassroomCreate, campus: CampusSystem = Depends(get_campus)):
    """
    Add a new classroom.
    Room numbers are unique, ignoring case.
    """
    try:
        db_classroom = campus.add_classroom(classroom.room_number, classroom.type, classroom.capacity)
    except CampusError as e:
        logger.error(f"Classroom rejected: {e}")
        raise http_error(e)
    logger.debug(f"Created classroom: {db_classroom.room_number}")
    return db_classroom


@router.get("/", response_model=List[ClassroomResponse])
def get_classrooms(skip: int = 0, limit: int = 100, campus: CampusSystem = Depends(get_campus)):
    """
    Retrieve all classrooms in directory order.
    """
    return campus.directory.classrooms[skip:skip + limit]


@router.get("/available/", response_model=List[ClassroomResponse])
def get_available_classrooms(
    start: str,
    end: str,
    capacity: int = 0,
    campus: CampusSystem = Depends(get_campus),
):
    """
    Classrooms free for the whole interval with at least `capacity` seats,
    smallest first.
    """
    try:
        return campus.find_available_classrooms(start, end, capacity)
    except CampusError as e:
        logger.error(f"Availability lookup failed: {e}")
        raise http_error(e)


@router.get("/{room_number}", response_model=ClassroomResponse)
def get_classroom(room_number: str, campus: CampusSystem = Depends(get_campus)):
    try:
        return campus.get_classroom(room_number)
    except CampusError as e:
        logger.error(f"Classroom not found: {room_number}")
        raise http_error(e)


@router.get("/{room_number}/bookings", response_model=List[BookingResponse])
def get_classroom_bookings(room_number: str, campus: CampusSystem = Depends(get_campus)):
    """
    Bookings of one classroom in the order they were made.
    """
    try:
        classroom = campus.get_classroom(room_number)
    except CampusError as e:
        logger.error(f"Classroom not found: {room_number}")
        raise http_error(e)
    return list(campus.list_bookings_for(classroom))


@router.post(
    "/{room_number}/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_classroom_booking(
    room_number: str,
    booking: BookingBase,
    campus: CampusSystem = Depends(get_campus),
):
    """
    Book this classroom for a course.
    """
    try:
        db_booking = campus.add_booking(room_number, booking.course, booking.start_time, booking.end_time)
    except CampusError as e:
        logger.error(f"Booking rejected for room {room_number}: {e}")
        raise http_error(e)
    logger.debug(f"Created booking: {db_booking.id} in {db_booking.room_number}")
    return db_booking
