from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from datetime import date
from smart_campus.campus import CampusSystem, get_campus
from smart_campus.schemas.booking import BookingCreate, BookingUpdate, BookingResponse, SlotResponse
from smart_campus.utils.errors import CampusError
from smart_campus.utils.http_errors import http_error
from smart_campus.utils.interval import format_time
from smart_campus.utils.scheduler import available_slots
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
)


@router.post(
    "/",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
    description="Book a classroom for a course. Rejected if it overlaps another booking of the same classroom."
)
def create_booking(
    booking: BookingCreate,
    campus: CampusSystem = Depends(get_campus),
):
    """
    Create a new booking.

    - **room_number**: Classroom to book.
    - **course**: Course label, cannot be empty.
    - **start_time**: Start time, `dd-mm-yyyy hh:mm`.
    - **end_time**: End time, `dd-mm-yyyy hh:mm`, strictly after start.

    Returns the created booking.
    """
    logger.debug(f"Creating booking for room: {booking.room_number}, course: {booking.course}")
    try:
        db_booking = campus.add_booking(
            booking.room_number, booking.course, booking.start_time, booking.end_time
        )
    except CampusError as e:
        logger.error(f"Booking rejected for room {booking.room_number}: {e}")
        raise http_error(e)
    logger.debug(f"Created booking: {db_booking.id} in {db_booking.room_number}")
    return db_booking


@router.get(
    "/",
    response_model=List[BookingResponse],
    summary="List all bookings",
    description="Bookings of every classroom, classroom by classroom in insertion order."
)
def get_bookings(
    skip: int = 0,
    limit: int = 100,
    campus: CampusSystem = Depends(get_campus),
):
    """
    Retrieve bookings across all classrooms.

    - **skip**: Number of bookings to skip.
    - **limit**: Maximum number of bookings to return.
    """
    bookings = campus.list_all_bookings()[skip:skip + limit]
    logger.debug(f"Retrieved {len(bookings)} bookings")
    return bookings


@router.get(
    "/available_slots/",
    response_model=List[SlotResponse],
    summary="List available time slots",
    description="Retrieve free time slots for a classroom on a specific date."
)
def get_available_slots(
    room_number: str,
    date: date,
    duration: int = 60,
    campus: CampusSystem = Depends(get_campus),
):
    """
    List available time slots for a classroom between 8:00 and 18:00.

    - **room_number**: Classroom to check.
    - **date**: Date to check (e.g., 2025-05-04).
    - **duration**: Duration of each slot in minutes (default: 60).
    """
    logger.debug(f"Fetching available slots for room: {room_number}, date: {date}, duration: {duration} minutes")
    try:
        classroom = campus.get_classroom(room_number)
        slots = available_slots(classroom, date, duration)
    except CampusError as e:
        logger.error(f"Available slots failed for room {room_number}: {e}")
        raise http_error(e)
    logger.debug(f"Found {len(slots)} available slots for room: {room_number}")
    return [{"start_time": slot.start, "end_time": slot.end} for slot in slots]


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking by ID",
)
def get_booking(
    booking_id: str,
    campus: CampusSystem = Depends(get_campus),
):
    try:
        booking = campus.get_booking(booking_id)
    except CampusError as e:
        logger.error(f"Booking not found: {booking_id}")
        raise http_error(e)
    return booking


@router.put(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Update a booking",
    description="Change a booking's course and times. The booking keeps its classroom and its place in the list."
)
def update_booking(
    booking_id: str,
    booking_update: BookingUpdate,
    campus: CampusSystem = Depends(get_campus),
):
    """
    Update a booking. Omitted fields keep their current value.

    The new times are checked against every other booking of the same
    classroom; on any failure the booking stays exactly as it was.
    """
    try:
        db_booking = campus.get_booking(booking_id)
    except CampusError as e:
        logger.error(f"Booking not found: {booking_id}")
        raise http_error(e)

    course = booking_update.course if booking_update.course is not None else db_booking.course
    start = booking_update.start_time if booking_update.start_time is not None else format_time(db_booking.start_time)
    end = booking_update.end_time if booking_update.end_time is not None else format_time(db_booking.end_time)

    try:
        campus.edit_booking(db_booking, course, start, end)
    except CampusError as e:
        logger.error(f"Update rejected for booking {booking_id}: {e}")
        raise http_error(e)
    logger.debug(f"Updated booking: {booking_id}, {db_booking.interval}")
    return db_booking


@router.delete(
    "/{booking_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a booking",
)
def delete_booking(
    booking_id: str,
    campus: CampusSystem = Depends(get_campus),
):
    booking = campus.find_booking(booking_id)
    if booking is None:
        logger.error(f"Booking not found: {booking_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    campus.delete_booking(booking)
    logger.debug(f"Deleted booking: {booking_id}")
    return None
