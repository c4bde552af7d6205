"""Tests for DashboardRepository joins and queries."""

from datetime import datetime, timedelta, timezone

import pytest

from studydash.store.entity_store import Collection
from studydash.store.errors import NotFoundError
from studydash.store.repository import material_sort_key

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def course(repo):
    return repo.create_course(
        name="Advanced Mathematics",
        code="MATH 301",
        instructor="Dr. Sarah Johnson",
        icon_name="square-root-alt",
        icon_color="primary",
    )


@pytest.fixture
def other_course(repo):
    return repo.create_course(
        name="Physics II",
        code="PHYS 202",
        instructor="Prof. Michael Chen",
        icon_name="atom",
        icon_color="warning",
    )


def _material(repo, course_id, progress, type_, title=None):
    return repo.create_study_material(
        course_id=course_id,
        title=title or f"{type_}-{progress}",
        description="d",
        type=type_,
        priority="High Priority",
        icon_name=type_,
        progress=progress,
    )


class TestUsers:
    """Tests for user operations."""

    def test_create_and_get_user(self, repo):
        """Created users can be fetched by id and username."""
        user = repo.create_user("alexj", "pw", "Alex Johnson", "alex@u.edu")
        assert repo.get_user(user.id) is user
        assert repo.get_user_by_username("alexj") is user
        assert repo.get_user_by_username("nobody") is None

    def test_duplicate_username_rejected(self, repo):
        """Usernames are unique."""
        repo.create_user("alexj", "pw", "Alex Johnson", "alex@u.edu")
        with pytest.raises(ValueError):
            repo.create_user("alexj", "pw2", "Other", "o@u.edu")


class TestUserCourses:
    """Tests for enrollments joined with courses."""

    def test_user_courses_joined_in_creation_order(self, repo, course, other_course):
        """Each enrollment carries its course."""
        repo.create_user_course(1, other_course.id, 60, "B+")
        repo.create_user_course(1, course.id, 75, "A-")
        repo.create_user_course(2, course.id, 10)

        views = repo.get_user_courses(1)
        assert [v.course.code for v in views] == ["PHYS 202", "MATH 301"]
        assert views[0].enrollment.grade == "B+"
        assert views[1].enrollment.progress == 75

    def test_update_progress_and_grade(self, repo, course):
        """Progress and grade are mutable."""
        enrollment = repo.create_user_course(1, course.id)
        repo.update_user_course_progress(enrollment.id, 40)
        updated = repo.update_user_course_grade(enrollment.id, "A")
        assert updated.progress == 40
        assert updated.grade == "A"

    def test_update_unknown_enrollment(self, repo):
        """Unknown enrollment raises NotFoundError."""
        with pytest.raises(NotFoundError):
            repo.update_user_course_progress(5, 40)

    def test_dangling_course_reference_raises(self, repo):
        """Joins assume integrity and fail loudly when it is broken."""
        repo.create_user_course(1, 99)
        with pytest.raises(NotFoundError):
            repo.get_user_courses(1)


class TestRecentStudySessions:
    """Tests for get_recent_study_sessions."""

    def test_sorted_newest_first_and_limited(self, repo, course):
        """At most `limit` sessions, newest first, only the user's."""
        for hours_ago in (5, 1, 30, 2):
            repo.create_study_session(
                user_id=1,
                course_id=course.id,
                duration=600,
                start_time=NOW - timedelta(hours=hours_ago),
                topic=f"t{hours_ago}",
            )
        repo.create_study_session(
            user_id=2, course_id=course.id, duration=60, start_time=NOW, topic="other"
        )

        views = repo.get_recent_study_sessions(1, 3)
        assert [v.session.topic for v in views] == ["t1", "t2", "t5"]
        assert all(v.session.user_id == 1 for v in views)
        assert all(v.course.id == course.id for v in views)

    def test_ties_keep_creation_order(self, repo, course):
        """Sessions with equal start times stay in insertion order."""
        for topic in ("first", "second", "third"):
            repo.create_study_session(
                user_id=1, course_id=course.id, duration=60, start_time=NOW, topic=topic
            )
        views = repo.get_recent_study_sessions(1, 5)
        assert [v.session.topic for v in views] == ["first", "second", "third"]

    def test_zero_duration_allowed(self, repo, course):
        """The store accepts zero-length sessions."""
        session = repo.create_study_session(
            user_id=1, course_id=course.id, duration=0, start_time=NOW
        )
        assert session.duration == 0
        assert session.topic is None

    def test_all_sessions_joined(self, repo, course, other_course):
        """get_study_sessions returns every session of the user with its course."""
        repo.create_study_session(1, course.id, 60, NOW)
        repo.create_study_session(1, other_course.id, 60, NOW - timedelta(days=1))
        views = repo.get_study_sessions(1)
        assert [v.course.name for v in views] == ["Advanced Mathematics", "Physics II"]


class TestNotes:
    """Tests for note queries."""

    def test_recent_notes_newest_first(self, repo, course):
        """Notes sorted by created_at descending, limited."""
        for days_ago in (3, 0, 1):
            repo.create_note(
                user_id=1,
                course_id=course.id,
                title=f"n{days_ago}",
                content="c",
                created_at=NOW - timedelta(days=days_ago),
            )
        views = repo.get_recent_notes(1, 2)
        assert [v.note.title for v in views] == ["n0", "n1"]

    def test_get_note(self, repo, course):
        """get_note joins the course; unknown ids give None."""
        note = repo.create_note(1, course.id, "Title", "Body", NOW)
        view = repo.get_note(note.id)
        assert view.note is note
        assert view.course.code == "MATH 301"
        assert repo.get_note(99) is None


class TestRecommendedMaterials:
    """Tests for get_recommended_materials."""

    def test_ascending_progress(self, repo, course, other_course):
        """Least progress first across enrolled courses."""
        repo.create_user_course(1, course.id)
        repo.create_user_course(1, other_course.id)
        _material(repo, course.id, 80, "book")
        _material(repo, other_course.id, 15, "assignment")
        _material(repo, course.id, 0, "video")

        views = repo.get_recommended_materials(1)
        assert [(v.material.progress, v.material.type) for v in views] == [
            (0, "video"),
            (15, "assignment"),
            (80, "book"),
        ]

    def test_type_priority_breaks_ties(self, repo, course):
        """assignment < book < video < unknown types at equal progress."""
        repo.create_user_course(1, course.id)
        for type_ in ("podcast", "video", "book", "assignment"):
            _material(repo, course.id, 20, type_)

        views = repo.get_recommended_materials(1)
        assert [v.material.type for v in views] == [
            "assignment",
            "book",
            "video",
            "podcast",
        ]

    def test_only_enrolled_courses(self, repo, course, other_course):
        """Materials of courses the user is not enrolled in are excluded."""
        repo.create_user_course(1, course.id)
        _material(repo, course.id, 50, "book", title="mine")
        _material(repo, other_course.id, 0, "assignment", title="not mine")

        views = repo.get_recommended_materials(1)
        assert [v.material.title for v in views] == ["mine"]
        assert views[0].course.id == course.id

    def test_sort_key_unknown_type_last(self, repo, course):
        """material_sort_key ranks unknown types after known ones."""
        known = _material(repo, course.id, 10, "video")
        unknown = _material(repo, course.id, 10, "quiz")
        assert material_sort_key(known) < material_sort_key(unknown)

    def test_materials_by_course(self, repo, course, other_course):
        """get_study_materials filters by course."""
        _material(repo, course.id, 10, "book")
        _material(repo, other_course.id, 10, "book")
        assert len(repo.get_study_materials(course.id)) == 1


class TestMaterialProgress:
    """Tests for the (user, material) progress cell."""

    def test_upsert_creates_then_updates(self, repo, course):
        """First upsert creates the row, second mutates it."""
        material = _material(repo, course.id, 0, "book")

        first = repo.upsert_user_material_progress(1, material.id, 30)
        second = repo.upsert_user_material_progress(1, material.id, 70)

        assert first.id == second.id
        assert second.progress == 70
        assert repo.store.count(Collection.USER_MATERIAL_PROGRESS) == 1
        assert repo.get_user_material_progress(1, material.id).progress == 70

    def test_upsert_separate_users(self, repo, course):
        """Each user has their own cell."""
        material = _material(repo, course.id, 0, "book")
        repo.upsert_user_material_progress(1, material.id, 30)
        repo.upsert_user_material_progress(2, material.id, 40)
        assert repo.store.count(Collection.USER_MATERIAL_PROGRESS) == 2

    def test_upsert_unknown_material(self, repo):
        """Unknown material raises NotFoundError."""
        with pytest.raises(NotFoundError):
            repo.upsert_user_material_progress(1, 12, 30)


class TestSubjects:
    """Tests for subject progress."""

    def test_subject_progress_joined(self, repo):
        """Progress rows carry their subject."""
        math = repo.create_subject("Math")
        repo.create_user_subject_progress(1, math.id, 85)
        views = repo.get_user_subject_progress(1)
        assert views[0].subject.name == "Math"
        assert views[0].progress.progress == 85

    def test_update_subject_progress(self, repo):
        """Subject progress is mutable."""
        math = repo.create_subject("Math")
        row = repo.create_user_subject_progress(1, math.id)
        assert repo.update_user_subject_progress(row.id, 50).progress == 50


class TestNotifications:
    """Tests for notification queries and mutations."""

    @pytest.fixture
    def notifications(self, repo):
        return [
            repo.create_notification(1, "old", "m", "info", NOW - timedelta(days=1)),
            repo.create_notification(1, "new", "m", "success", NOW - timedelta(minutes=10)),
            repo.create_notification(1, "mid", "m", "warning", NOW - timedelta(hours=1)),
            repo.create_notification(2, "other", "m", "info", NOW),
        ]

    def test_newest_first(self, repo, notifications):
        """Notifications sorted by created_at descending, user-scoped."""
        assert [n.title for n in repo.get_notifications(1)] == ["new", "mid", "old"]

    def test_unread_count(self, repo, notifications):
        """Count covers unread notifications of the user only."""
        assert repo.get_unread_notification_count(1) == 3
        assert repo.get_unread_notification_count(2) == 1

    def test_mark_read_decrements_count(self, repo, notifications):
        """Marking one read lowers the count by exactly one."""
        before = repo.get_unread_notification_count(1)
        updated = repo.mark_notification_as_read(notifications[0].id)
        assert updated.read is True
        assert repo.get_unread_notification_count(1) == before - 1

    def test_mark_read_twice_keeps_count(self, repo, notifications):
        """Marking an already-read notification changes nothing."""
        repo.mark_notification_as_read(notifications[0].id)
        repo.mark_notification_as_read(notifications[0].id)
        assert repo.get_unread_notification_count(1) == 2

    def test_mark_read_unknown(self, repo):
        """Unknown notification raises NotFoundError."""
        with pytest.raises(NotFoundError):
            repo.mark_notification_as_read(404)

    def test_mark_all_read(self, repo, notifications):
        """All unread notifications of the user become read."""
        repo.mark_notification_as_read(notifications[1].id)
        assert repo.mark_all_notifications_as_read(1) == 2
        assert repo.get_unread_notification_count(1) == 0
        assert repo.get_unread_notification_count(2) == 1
