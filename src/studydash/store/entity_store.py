"""In-memory entity store.

One table per entity type, each a dict keyed by id with its own
auto-incrementing counter. Ids start at 1 and are never reused.

Usage:
    store = EntityStore()
    note = store.create(Collection.NOTES, user_id=1, course_id=1, ...)
    store.get(Collection.NOTES, note.id)
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

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
from studydash.store.errors import NotFoundError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Collection(str, Enum):
    """Names of the store's collections."""

    USERS = "users"
    COURSES = "courses"
    USER_COURSES = "user_courses"
    STUDY_SESSIONS = "study_sessions"
    NOTES = "notes"
    STUDY_MATERIALS = "study_materials"
    USER_MATERIAL_PROGRESS = "user_material_progress"
    SUBJECTS = "subjects"
    USER_SUBJECT_PROGRESS = "user_subject_progress"
    NOTIFICATIONS = "notifications"


RECORD_TYPES: dict[Collection, type] = {
    Collection.USERS: User,
    Collection.COURSES: Course,
    Collection.USER_COURSES: UserCourse,
    Collection.STUDY_SESSIONS: StudySession,
    Collection.NOTES: Note,
    Collection.STUDY_MATERIALS: StudyMaterial,
    Collection.USER_MATERIAL_PROGRESS: UserMaterialProgress,
    Collection.SUBJECTS: Subject,
    Collection.USER_SUBJECT_PROGRESS: UserSubjectProgress,
    Collection.NOTIFICATIONS: Notification,
}


class Table(Generic[T]):
    """A keyed collection of records of one type."""

    def __init__(self, record_type: type[T]):
        self.record_type = record_type
        self._rows: dict[int, T] = {}
        self._next_id = 1

    @property
    def entity_name(self) -> str:
        return self.record_type.__name__

    def insert(self, **fields: Any) -> T:
        """Store a new record under the next id and return it."""
        if "id" in fields:
            raise ValueError(f"{self.entity_name} ids are assigned by the store")
        record = self.record_type(id=self._next_id, **fields)
        self._rows[self._next_id] = record
        self._next_id += 1
        return record

    def get(self, record_id: int) -> T | None:
        return self._rows.get(record_id)

    def rows(self, predicate: Callable[[T], bool] | None = None) -> list[T]:
        """Records in creation order, optionally filtered."""
        if predicate is None:
            return list(self._rows.values())
        return [row for row in self._rows.values() if predicate(row)]

    def update(self, record_id: int, **changes: Any) -> T:
        """Replace a stored record with a copy carrying the changes.

        Raises:
            NotFoundError: If no record has this id
            ValueError: If the changes try to rewrite the id
        """
        if "id" in changes:
            raise ValueError(f"{self.entity_name} ids are immutable")
        current = self._rows.get(record_id)
        if current is None:
            raise NotFoundError(self.entity_name, record_id)
        updated = dataclasses.replace(current, **changes)
        self._rows[record_id] = updated
        return updated

    def __len__(self) -> int:
        return len(self._rows)


class EntityStore:
    """All collections of the dashboard.

    The store has no notion of users or joins; that lives in
    DashboardRepository. A process holds a single instance, passed
    explicitly to whatever needs it.
    """

    def __init__(self):
        self._tables: dict[Collection, Table[Any]] = {
            collection: Table(record_type)
            for collection, record_type in RECORD_TYPES.items()
        }

    def table(self, collection: Collection | str) -> Table[Any]:
        """Get the table for a collection name."""
        return self._tables[Collection(collection)]

    def create(self, collection: Collection | str, **data: Any) -> Any:
        """Create a record and return it with its assigned id."""
        record = self.table(collection).insert(**data)
        logger.debug("record_created", collection=Collection(collection).value, id=record.id)
        return record

    def get(self, collection: Collection | str, record_id: int) -> Any | None:
        return self.table(collection).get(record_id)

    def list(
        self,
        collection: Collection | str,
        predicate: Callable[[Any], bool] | None = None,
    ) -> list[Any]:
        return self.table(collection).rows(predicate)

    def update(self, collection: Collection | str, record_id: int, **changes: Any) -> Any:
        """Merge changes into a stored record.

        Raises:
            NotFoundError: If the record does not exist
        """
        record = self.table(collection).update(record_id, **changes)
        logger.debug(
            "record_updated",
            collection=Collection(collection).value,
            id=record_id,
            fields=sorted(changes),
        )
        return record

    def count(
        self,
        collection: Collection | str,
        predicate: Callable[[Any], bool] | None = None,
    ) -> int:
        if predicate is None:
            return len(self.table(collection))
        return len(self.table(collection).rows(predicate))
