from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, FiniteFloat

from student_service.core.exceptions import ValidationError

STUDENT_FIELDS = ("name", "domain", "gpa", "email")


class StudentPayload(BaseModel):
    """Request body as sent by the client: every field may be missing."""
    name: Optional[str] = Field(default=None, max_length=50)
    domain: Optional[str] = Field(default=None, max_length=50)
    gpa: Optional[FiniteFloat] = None
    # Stored exactly as sent, no normalisation
    email: Optional[str] = Field(default=None, max_length=120)

    model_config = ConfigDict(extra="ignore")


class StudentCreate(BaseModel):
    name: str
    domain: str
    gpa: float
    email: str


class StudentUpdate(BaseModel):
    name: Optional[str] = None
    domain: Optional[str] = None
    gpa: Optional[float] = None
    email: Optional[str] = None


class StudentRead(BaseModel):
    id: int
    name: str
    domain: str
    gpa: float
    email: str

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


def _present_fields(payload: Optional[StudentPayload]) -> dict:
    if payload is None:
        return {}
    # null counts as absent
    return {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None
    }


def validate_create(payload: Optional[StudentPayload]) -> StudentCreate:
    """All four fields must be present, otherwise nothing gets written."""
    fields = _present_fields(payload)
    if any(key not in fields for key in STUDENT_FIELDS):
        raise ValidationError("Missing data")
    return StudentCreate(**fields)


def validate_update(payload: Optional[StudentPayload]) -> StudentUpdate:
    """
    At least one recognised field must be present.

    The returned model only has the provided fields set, so
    ``model_dump(exclude_unset=True)`` yields exactly what to change.
    """
    fields = _present_fields(payload)
    if not fields:
        raise ValidationError("No valid fields provided")
    return StudentUpdate(**fields)
