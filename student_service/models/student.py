from sqlalchemy import Column, Float, Integer, String
from student_service.core.database import Base


class Student(Base):
    __tablename__ = "students"
    # Ids are never reused after a delete (SQLite needs AUTOINCREMENT for that)
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    domain = Column(String(50), nullable=False)
    gpa = Column(Float, nullable=False)
    email = Column(String(120), unique=True, index=True, nullable=False)

    def __repr__(self):
        return f"<Student id={self.id} email={self.email!r}>"
