from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from smart_campus.campus import CampusSystem, get_campus
from smart_campus.schemas.student import (
    StudentCreate,
    StudentUpdate,
    StudentResponse,
    StudentDetailResponse,
)
from smart_campus.utils.errors import CampusError
from smart_campus.utils.http_errors import http_error
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/students",
    tags=["students"],
)


def student_detail(campus, student):
    checked_out = [f"{r.name} ({r.id})" for r in campus.checked_out_to(student.id)]
    return StudentDetailResponse(
        id=student.id,
        name=student.name,
        degree=student.degree,
        email=student.email,
        checked_out=checked_out,
    )


@router.post("/", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(student: StudentCreate, campus: CampusSystem = Depends(get_campus)):
    """
    Register a student. IDs are unique and the email must be a .edu address.
    """
    try:
        db_student = campus.add_student(student.id, student.name, student.degree, student.email)
    except CampusError as e:
        logger.error(f"Student rejected: {e}")
        raise http_error(e)
    logger.debug(f"Created student: {db_student.id}")
    return db_student


@router.get("/", response_model=List[StudentResponse])
def get_students(skip: int = 0, limit: int = 100, campus: CampusSystem = Depends(get_campus)):
    return campus.directory.students[skip:skip + limit]


@router.get("/search/", response_model=StudentDetailResponse)
def search_students(term: str, campus: CampusSystem = Depends(get_campus)):
    """
    First student whose ID equals `term` or whose name contains it, ignoring case.
    """
    student = campus.search_students(term)
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No student found")
    return student_detail(campus, student)


@router.get("/{student_id}", response_model=StudentDetailResponse)
def get_student(student_id: str, campus: CampusSystem = Depends(get_campus)):
    try:
        student = campus.get_student(student_id)
    except CampusError as e:
        raise http_error(e)
    return student_detail(campus, student)


@router.put("/{student_id}", response_model=StudentResponse)
def update_student(student_id: str, student_update: StudentUpdate, campus: CampusSystem = Depends(get_campus)):
    try:
        student = campus.get_student(student_id)
        campus.edit_student(student, student_update.name, student_update.degree, student_update.email)
    except CampusError as e:
        logger.error(f"Update rejected for student {student_id}: {e}")
        raise http_error(e)
    logger.debug(f"Updated student: {student_id}")
    return student


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(student_id: str, campus: CampusSystem = Depends(get_campus)):
    try:
        student = campus.get_student(student_id)
    except CampusError as e:
        logger.error(f"Student not found: {student_id}")
        raise http_error(e)
    campus.delete_student(student)
    logger.debug(f"Deleted student: {student_id}")
    return None
