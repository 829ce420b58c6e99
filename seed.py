import logging

from sqlalchemy.orm import Session

from student_service.core.config import settings
from student_service.core.database import Database
from student_service.core.logging import setup_logging
from student_service.models.student import Student

logger = logging.getLogger(__name__)

SAMPLE_STUDENTS = [
    {"name": "Alice", "domain": "Computer Science", "gpa": 3.8, "email": "alice@example.com"},
    {"name": "Bob", "domain": "Mathematics", "gpa": 3.4, "email": "bob@example.com"},
    {"name": "Carol", "domain": "Physics", "gpa": 3.6, "email": "carol@example.com"},
]


def seed_data(db: Session) -> int:
    """
    Insert sample students into an empty table.

    Returns the number of rows inserted, 0 if the table already had data.
    """
    # Skip if there is already data to avoid duplicates
    if db.query(Student).first():
        logger.info("Database already contains data. Skipping seed.")
        return 0

    logger.info("Seeding data...")
    try:
        db.add_all([Student(**row) for row in SAMPLE_STUDENTS])
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Seeded {len(SAMPLE_STUDENTS)} students")
    return len(SAMPLE_STUDENTS)


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    database = Database(settings)
    db = database.session()
    try:
        seed_data(db)
    finally:
        db.close()  # Always close the connection
        database.dispose()
