import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import (
    DataError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.orm import Session

from student_service.core.exceptions import (
    ConflictError,
    StoreUnavailableError,
    ValidationError,
)
from student_service.models.student import Student
from student_service.schemas.student import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def is_duplicate_email(error: IntegrityError) -> bool:
    """True when the failed write hit the unique index on students.email"""
    orig = error.orig
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION:
        diag = getattr(orig, "diag", None)
        constraint = getattr(diag, "constraint_name", None) or ""
        return "email" in constraint
    # SQLite: "UNIQUE constraint failed: students.email"
    return "UNIQUE constraint failed: students.email" in str(orig)


@contextmanager
def store_errors(db: Session) -> Iterator[None]:
    """
    Translate store failures into API errors.

    The session is rolled back first so a failed write leaves nothing behind.
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        if is_duplicate_email(e):
            logger.info("Duplicate email rejected by unique index")
            raise ConflictError() from e
        logger.warning(f"Store rejected write: {e.orig.__class__.__name__}")
        raise ValidationError("Invalid data") from e
    except DataError as e:
        db.rollback()
        logger.info(f"Store rejected value: {e.orig.__class__.__name__}")
        raise ValidationError("Invalid data") from e
    except (OperationalError, InterfaceError, PoolTimeoutError) as e:
        db.rollback()
        logger.error(f"Store unavailable: {e.__class__.__name__}")
        raise StoreUnavailableError() from e


def get_student(db: Session, student_id: int) -> Optional[Student]:
    """Fetch one student by id, None when absent"""
    with store_errors(db):
        return db.get(Student, student_id)


def get_students(db: Session, skip: int = 0, limit: Optional[int] = None) -> List[Student]:
    """List students ordered by id, with optional pagination"""
    stmt = select(Student).order_by(Student.id).offset(skip)
    if limit is not None:
        stmt = stmt.limit(limit)
    with store_errors(db):
        return list(db.scalars(stmt).all())


def create_student(db: Session, student: StudentCreate) -> Student:
    """Insert a new student, the store assigns the id"""
    db_student = Student(
        name=student.name,
        domain=student.domain,
        gpa=student.gpa,
        email=student.email,
    )
    with store_errors(db):
        db.add(db_student)
        db.commit()
        db.refresh(db_student)
    logger.info(f"Created student id={db_student.id}")
    return db_student


def update_student(db: Session, db_student: Student, student: StudentUpdate) -> Student:
    """Apply only the fields that were provided"""
    changes = student.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(db_student, field, value)
    with store_errors(db):
        db.commit()
        db.refresh(db_student)
    logger.info(f"Updated student id={db_student.id} fields={sorted(changes)}")
    return db_student


def delete_student(db: Session, db_student: Student) -> None:
    student_id = db_student.id
    with store_errors(db):
        db.delete(db_student)
        db.commit()
    logger.info(f"Deleted student id={student_id}")
