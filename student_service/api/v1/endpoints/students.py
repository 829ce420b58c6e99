from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from student_service.api.deps import get_db
from student_service.core.exceptions import NotFoundError
from student_service.models.student import Student
from student_service.schemas.student import (
    MessageResponse,
    StudentPayload,
    StudentRead,
    validate_create,
    validate_update,
)
from student_service.services.student import student as crud_student

router = APIRouter()


def _get_or_404(db: Session, student_id: int) -> Student:
    student = crud_student.get_student(db, student_id=student_id)
    if student is None:
        raise NotFoundError()
    return student


@router.get("", response_model=List[StudentRead])
def get_students(
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db)
):
    """
    List students

    - **skip**: skip the first n records (default: 0)
    - **limit**: maximum number of records (default: all)
    """
    return crud_student.get_students(db, skip=skip, limit=limit)


@router.get("/{student_id}", response_model=StudentRead)
def get_student(
    student_id: int,
    db: Session = Depends(get_db)
):
    """
    Get one student by id
    """
    return _get_or_404(db, student_id)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_student(
    request: Request,
    response: Response,
    payload: Optional[StudentPayload] = None,
    db: Session = Depends(get_db)
):
    """
    Create a student

    Required:
    - **name**: up to 50 characters
    - **domain**: up to 50 characters
    - **gpa**: number
    - **email**: up to 120 characters, unique
    """
    data = validate_create(payload)
    student = crud_student.create_student(db=db, student=data)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{student.id}"
    return {"message": "Student added successfully!"}


@router.put("/{student_id}", response_model=MessageResponse)
def update_student(
    student_id: int,
    payload: Optional[StudentPayload] = None,
    db: Session = Depends(get_db)
):
    """
    Update any subset of name, domain, gpa and email
    """
    student = _get_or_404(db, student_id)
    data = validate_update(payload)
    crud_student.update_student(db=db, db_student=student, student=data)
    return {"message": "Student updated successfully!"}


@router.delete("/{student_id}", response_model=MessageResponse)
def delete_student(
    student_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete a student
    """
    student = _get_or_404(db, student_id)
    crud_student.delete_student(db=db, db_student=student)
    return {"message": "Student deleted successfully!"}
