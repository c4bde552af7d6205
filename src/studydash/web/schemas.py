"""Pydantic schemas for the Web API.

Python attributes are snake_case; JSON uses camelCase aliases (userId,
startTime, ...). Response models read straight from store records.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from studydash import __version__


class CamelModel(BaseModel):
    """Base model with camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _ensure_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# =============================================================================
# USER SCHEMAS
# =============================================================================


class UserResponse(CamelModel):
    """A user, without the password."""

    id: int
    username: str
    full_name: str
    email: str
    avatar_url: str | None = None


# =============================================================================
# COURSE SCHEMAS
# =============================================================================


class CourseResponse(CamelModel):
    id: int
    name: str
    code: str
    instructor: str
    description: str | None = None
    icon_name: str
    icon_color: str


class EnrollmentResponse(CamelModel):
    id: int
    user_id: int
    course_id: int
    progress: int
    grade: str | None = None


class EnrollmentWithCourseResponse(EnrollmentResponse):
    """An enrollment with its course embedded."""

    course: CourseResponse


class ProgressUpdate(CamelModel):
    """Request body for progress changes.

    progress is a whole number in 0..100. JSON numbers such as 50.0 are
    accepted; strings, booleans and fractions are not.
    """

    progress: int = Field(..., ge=0, le=100)

    @field_validator("progress", mode="before")
    @classmethod
    def _whole_number(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("progress must be a number")
        if isinstance(value, float) and not value.is_integer():
            raise ValueError("progress must be a whole number")
        return int(value)


class GradeUpdate(CamelModel):
    grade: str = Field(..., min_length=1, max_length=10)


# =============================================================================
# STUDY SESSION SCHEMAS
# =============================================================================


class StudySessionCreate(CamelModel):
    """Request body for recording a study session.

    duration is in seconds. Zero is accepted; minimum session length is a
    client concern.
    """

    user_id: int
    course_id: int
    topic: str | None = None
    duration: int = Field(..., ge=0)
    start_time: datetime

    @field_validator("start_time")
    @classmethod
    def _start_time_utc(cls, value: datetime) -> datetime:
        return _ensure_utc(value)


class StudySessionResponse(CamelModel):
    id: int
    user_id: int
    course_id: int
    topic: str | None = None
    duration: int
    start_time: datetime


class StudySessionWithCourseResponse(StudySessionResponse):
    course: CourseResponse


class RecentStudySessionResponse(CamelModel):
    """Condensed session for the dashboard tracker."""

    id: int
    subject: str
    topic: str | None = None
    duration: str


# =============================================================================
# NOTE SCHEMAS
# =============================================================================


class NoteCreate(CamelModel):
    """Request body for creating a note."""

    user_id: int
    course_id: int
    title: str = Field(..., min_length=1, max_length=200)
    content: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        return _ensure_utc(value)


class NoteResponse(CamelModel):
    id: int
    user_id: int
    course_id: int
    title: str
    content: str
    created_at: datetime


class NoteWithCourseResponse(NoteResponse):
    course: CourseResponse


class RecentNoteResponse(CamelModel):
    """Note summary: truncated preview and relative date."""

    id: int
    title: str
    preview: str
    date: str


# =============================================================================
# MATERIAL SCHEMAS
# =============================================================================


class MaterialResponse(CamelModel):
    id: int
    course_id: int
    title: str
    description: str
    type: str
    priority: str
    progress: int
    icon_name: str


class MaterialWithCourseResponse(MaterialResponse):
    course: CourseResponse


class MaterialProgressResponse(CamelModel):
    id: int
    user_id: int
    material_id: int
    progress: int


# =============================================================================
# SUBJECT SCHEMAS
# =============================================================================


class SubjectResponse(CamelModel):
    id: int
    name: str


class SubjectProgressResponse(CamelModel):
    id: int
    user_id: int
    subject_id: int
    progress: int
    subject: SubjectResponse


# =============================================================================
# NOTIFICATION SCHEMAS
# =============================================================================


class NotificationResponse(CamelModel):
    id: int
    user_id: int
    title: str
    message: str
    type: str
    read: bool
    created_at: datetime


class UnreadCountResponse(BaseModel):
    count: int


class MarkAllReadResponse(BaseModel):
    updated: int


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = __version__
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
