"""Domain records held by the entity store.

Records are plain dataclasses; joined shapes live in the repository as
separate view types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """A dashboard user."""

    id: int
    username: str
    password: str
    full_name: str
    email: str
    avatar_url: str | None = None


@dataclass
class Course:
    """A course offered to students."""

    id: int
    name: str
    code: str
    instructor: str
    icon_name: str
    icon_color: str
    description: str | None = None


@dataclass
class UserCourse:
    """Enrollment of a user in a course."""

    id: int
    user_id: int
    course_id: int
    progress: int = 0
    grade: str | None = None


@dataclass
class StudySession:
    """A timed study session. Duration is in seconds."""

    id: int
    user_id: int
    course_id: int
    duration: int
    start_time: datetime
    topic: str | None = None


@dataclass
class Note:
    id: int
    user_id: int
    course_id: int
    title: str
    content: str
    created_at: datetime


@dataclass
class StudyMaterial:
    """A recommended study item (book, video, assignment, ...)."""

    id: int
    course_id: int
    title: str
    description: str
    type: str
    priority: str
    icon_name: str
    progress: int = 0


@dataclass
class UserMaterialProgress:
    id: int
    user_id: int
    material_id: int
    progress: int = 0


@dataclass
class Subject:
    id: int
    name: str


@dataclass
class UserSubjectProgress:
    id: int
    user_id: int
    subject_id: int
    progress: int = 0


@dataclass
class Notification:
    """A message for the user. Type is success, warning or info."""

    id: int
    user_id: int
    title: str
    message: str
    type: str
    created_at: datetime
    read: bool = False
