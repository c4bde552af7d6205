"""Dashboard repository: joins and queries over the entity store.

Produces the denormalized shapes the dashboard needs (an enrollment with
its course, a note with its course, ...) and applies ordering and limits.

Joins assume referential integrity. A dangling foreign key raises
NotFoundError instead of producing a partial view.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

import structlog

from studydash.store.entities import (
    Course,
    Note,
    Notification,
    StudyMaterial,
    StudySession,
    Subject,
    User,
    UserCourse,
    UserMaterialProgress,
    UserSubjectProgress,
)
from studydash.store.entity_store import Collection, EntityStore
from studydash.store.errors import NotFoundError

logger = structlog.get_logger(__name__)

# Lower value = recommended first when progress is equal
MATERIAL_TYPE_PRIORITY = {
    "assignment": 1,
    "book": 2,
    "video": 3,
}
UNKNOWN_TYPE_PRIORITY = 999


# =============================================================================
# VIEWS
# =============================================================================


@dataclass
class EnrollmentView:
    enrollment: UserCourse
    course: Course


@dataclass
class StudySessionView:
    session: StudySession
    course: Course


@dataclass
class NoteView:
    note: Note
    course: Course


@dataclass
class MaterialView:
    material: StudyMaterial
    course: Course


@dataclass
class SubjectProgressView:
    progress: UserSubjectProgress
    subject: Subject


def material_sort_key(material: StudyMaterial) -> tuple[int, int]:
    """Least progress first, then assignment < book < video < anything else."""
    return (
        material.progress,
        MATERIAL_TYPE_PRIORITY.get(material.type, UNKNOWN_TYPE_PRIORITY),
    )


# =============================================================================
# REPOSITORY
# =============================================================================


class DashboardRepository:
    """Query and mutation operations for the dashboard."""

    def __init__(self, store: EntityStore):
        self.store = store

    # -- joins ---------------------------------------------------------------

    def _course(self, course_id: int) -> Course:
        course = self.store.get(Collection.COURSES, course_id)
        if course is None:
            raise NotFoundError("Course", course_id)
        return course

    def _subject(self, subject_id: int) -> Subject:
        subject = self.store.get(Collection.SUBJECTS, subject_id)
        if subject is None:
            raise NotFoundError("Subject", subject_id)
        return subject

    # -- users ---------------------------------------------------------------

    def get_user(self, user_id: int) -> User | None:
        return self.store.get(Collection.USERS, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        matches = self.store.list(Collection.USERS, lambda u: u.username == username)
        return matches[0] if matches else None

    def create_user(
        self,
        username: str,
        password: str,
        full_name: str,
        email: str,
        avatar_url: str | None = None,
    ) -> User:
        """Create a user. Usernames must be unique.

        Raises:
            ValueError: If the username is already taken
        """
        if self.get_user_by_username(username) is not None:
            raise ValueError(f"Username '{username}' already exists")
        return self.store.create(
            Collection.USERS,
            username=username,
            password=password,
            full_name=full_name,
            email=email,
            avatar_url=avatar_url,
        )

    # -- courses -------------------------------------------------------------

    def get_course(self, course_id: int) -> Course | None:
        return self.store.get(Collection.COURSES, course_id)

    def list_courses(self) -> list[Course]:
        return self.store.list(Collection.COURSES)

    def create_course(
        self,
        name: str,
        code: str,
        instructor: str,
        icon_name: str,
        icon_color: str,
        description: str | None = None,
    ) -> Course:
        return self.store.create(
            Collection.COURSES,
            name=name,
            code=code,
            instructor=instructor,
            icon_name=icon_name,
            icon_color=icon_color,
            description=description,
        )

    # -- enrollments ---------------------------------------------------------

    def get_user_courses(self, user_id: int) -> list[EnrollmentView]:
        """Enrollments of a user with their courses, in creation order."""
        enrollments = self.store.list(
            Collection.USER_COURSES, lambda uc: uc.user_id == user_id
        )
        return [EnrollmentView(uc, self._course(uc.course_id)) for uc in enrollments]

    def create_user_course(
        self,
        user_id: int,
        course_id: int,
        progress: int = 0,
        grade: str | None = None,
    ) -> UserCourse:
        return self.store.create(
            Collection.USER_COURSES,
            user_id=user_id,
            course_id=course_id,
            progress=progress,
            grade=grade,
        )

    def update_user_course_progress(self, enrollment_id: int, progress: int) -> UserCourse:
        return self.store.update(Collection.USER_COURSES, enrollment_id, progress=progress)

    def update_user_course_grade(self, enrollment_id: int, grade: str) -> UserCourse:
        return self.store.update(Collection.USER_COURSES, enrollment_id, grade=grade)

    # -- study sessions ------------------------------------------------------

    def get_study_sessions(self, user_id: int) -> list[StudySessionView]:
        sessions = self.store.list(
            Collection.STUDY_SESSIONS, lambda s: s.user_id == user_id
        )
        return [StudySessionView(s, self._course(s.course_id)) for s in sessions]

    def get_recent_study_sessions(self, user_id: int, limit: int) -> list[StudySessionView]:
        """Most recent sessions first, at most `limit` of them.

        sorted() is stable, so sessions sharing a start time keep creation order.
        """
        sessions = self.store.list(
            Collection.STUDY_SESSIONS, lambda s: s.user_id == user_id
        )
        sessions = sorted(sessions, key=lambda s: s.start_time, reverse=True)[:limit]
        return [StudySessionView(s, self._course(s.course_id)) for s in sessions]

    def create_study_session(
        self,
        user_id: int,
        course_id: int,
        duration: int,
        start_time: datetime,
        topic: str | None = None,
    ) -> StudySession:
        session = self.store.create(
            Collection.STUDY_SESSIONS,
            user_id=user_id,
            course_id=course_id,
            duration=duration,
            start_time=start_time,
            topic=topic,
        )
        logger.info(
            "study_session_created",
            session_id=session.id,
            course_id=course_id,
            duration=duration,
        )
        return session

    # -- notes ---------------------------------------------------------------

    def get_notes(self, user_id: int) -> list[NoteView]:
        notes = self.store.list(Collection.NOTES, lambda n: n.user_id == user_id)
        return [NoteView(n, self._course(n.course_id)) for n in notes]

    def get_recent_notes(self, user_id: int, limit: int) -> list[NoteView]:
        notes = self.store.list(Collection.NOTES, lambda n: n.user_id == user_id)
        notes = sorted(notes, key=lambda n: n.created_at, reverse=True)[:limit]
        return [NoteView(n, self._course(n.course_id)) for n in notes]

    def get_note(self, note_id: int) -> NoteView | None:
        note = self.store.get(Collection.NOTES, note_id)
        if note is None:
            return None
        return NoteView(note, self._course(note.course_id))

    def create_note(
        self,
        user_id: int,
        course_id: int,
        title: str,
        content: str,
        created_at: datetime,
    ) -> Note:
        note = self.store.create(
            Collection.NOTES,
            user_id=user_id,
            course_id=course_id,
            title=title,
            content=content,
            created_at=created_at,
        )
        logger.info("note_created", note_id=note.id, course_id=course_id)
        return note

    # -- study materials -----------------------------------------------------

    def get_study_material(self, material_id: int) -> StudyMaterial | None:
        return self.store.get(Collection.STUDY_MATERIALS, material_id)

    def get_study_materials(self, course_id: int) -> list[StudyMaterial]:
        return self.store.list(
            Collection.STUDY_MATERIALS, lambda m: m.course_id == course_id
        )

    def get_recommended_materials(self, user_id: int) -> list[MaterialView]:
        """Materials of the user's enrolled courses, most in need of attention first."""
        enrolled = {
            uc.course_id
            for uc in self.store.list(
                Collection.USER_COURSES, lambda uc: uc.user_id == user_id
            )
        }
        materials = self.store.list(
            Collection.STUDY_MATERIALS, lambda m: m.course_id in enrolled
        )
        materials = sorted(materials, key=material_sort_key)
        return [MaterialView(m, self._course(m.course_id)) for m in materials]

    def create_study_material(
        self,
        course_id: int,
        title: str,
        description: str,
        type: str,
        priority: str,
        icon_name: str,
        progress: int = 0,
    ) -> StudyMaterial:
        return self.store.create(
            Collection.STUDY_MATERIALS,
            course_id=course_id,
            title=title,
            description=description,
            type=type,
            priority=priority,
            icon_name=icon_name,
            progress=progress,
        )

    # -- material progress ---------------------------------------------------

    def get_user_material_progress(
        self, user_id: int, material_id: int
    ) -> UserMaterialProgress | None:
        matches = self.store.list(
            Collection.USER_MATERIAL_PROGRESS,
            lambda p: p.user_id == user_id and p.material_id == material_id,
        )
        return matches[0] if matches else None

    def create_user_material_progress(
        self, user_id: int, material_id: int, progress: int = 0
    ) -> UserMaterialProgress:
        return self.store.create(
            Collection.USER_MATERIAL_PROGRESS,
            user_id=user_id,
            material_id=material_id,
            progress=progress,
        )

    def update_user_material_progress(
        self, progress_id: int, progress: int
    ) -> UserMaterialProgress:
        return self.store.update(
            Collection.USER_MATERIAL_PROGRESS, progress_id, progress=progress
        )

    def upsert_user_material_progress(
        self, user_id: int, material_id: int, progress: int
    ) -> UserMaterialProgress:
        """Set the progress cell for (user, material), creating it on first use.

        Raises:
            NotFoundError: If the material does not exist
        """
        if self.get_study_material(material_id) is None:
            raise NotFoundError("StudyMaterial", material_id)

        existing = self.get_user_material_progress(user_id, material_id)
        if existing is not None:
            row = self.update_user_material_progress(existing.id, progress)
        else:
            row = self.create_user_material_progress(user_id, material_id, progress)

        logger.info(
            "material_progress_saved",
            material_id=material_id,
            progress=progress,
            created=existing is None,
        )
        return row

    # -- subjects ------------------------------------------------------------

    def get_subject(self, subject_id: int) -> Subject | None:
        return self.store.get(Collection.SUBJECTS, subject_id)

    def list_subjects(self) -> list[Subject]:
        return self.store.list(Collection.SUBJECTS)

    def create_subject(self, name: str) -> Subject:
        return self.store.create(Collection.SUBJECTS, name=name)

    def get_user_subject_progress(self, user_id: int) -> list[SubjectProgressView]:
        rows = self.store.list(
            Collection.USER_SUBJECT_PROGRESS, lambda p: p.user_id == user_id
        )
        return [SubjectProgressView(p, self._subject(p.subject_id)) for p in rows]

    def create_user_subject_progress(
        self, user_id: int, subject_id: int, progress: int = 0
    ) -> UserSubjectProgress:
        return self.store.create(
            Collection.USER_SUBJECT_PROGRESS,
            user_id=user_id,
            subject_id=subject_id,
            progress=progress,
        )

    def update_user_subject_progress(
        self, progress_id: int, progress: int
    ) -> UserSubjectProgress:
        return self.store.update(
            Collection.USER_SUBJECT_PROGRESS, progress_id, progress=progress
        )

    # -- notifications -------------------------------------------------------

    def get_notifications(self, user_id: int) -> list[Notification]:
        """Notifications of a user, newest first."""
        notifications = self.store.list(
            Collection.NOTIFICATIONS, lambda n: n.user_id == user_id
        )
        return sorted(notifications, key=lambda n: n.created_at, reverse=True)

    def get_unread_notification_count(self, user_id: int) -> int:
        return self.store.count(
            Collection.NOTIFICATIONS, lambda n: n.user_id == user_id and not n.read
        )

    def create_notification(
        self,
        user_id: int,
        title: str,
        message: str,
        type: str,
        created_at: datetime,
        read: bool = False,
    ) -> Notification:
        return self.store.create(
            Collection.NOTIFICATIONS,
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            created_at=created_at,
            read=read,
        )

    def mark_notification_as_read(self, notification_id: int) -> Notification:
        """Set read=True on a notification.

        Raises:
            NotFoundError: If the notification does not exist
        """
        notification = self.store.update(
            Collection.NOTIFICATIONS, notification_id, read=True
        )
        logger.info("notification_marked_read", notification_id=notification_id)
        return notification

    def mark_all_notifications_as_read(self, user_id: int) -> int:
        """Mark every unread notification of a user as read.

        Each notification is updated independently; there is no rollback if
        one update fails part way through.

        Returns:
            Number of notifications that changed
        """
        unread = self.store.list(
            Collection.NOTIFICATIONS, lambda n: n.user_id == user_id and not n.read
        )
        for notification in unread:
            self.store.update(Collection.NOTIFICATIONS, notification.id, read=True)
        logger.info("notifications_marked_read", user_id=user_id, updated=len(unread))
        return len(unread)
