from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from student_service.core.database import Database


def get_database(request: Request) -> Database:
    """Store handle created by the application lifespan."""
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency that yields a database session per request.
    The session is closed once the request is done, even on error.
    """
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
