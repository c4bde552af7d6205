"""Demo dataset for the dashboard.

Loaded once at startup so the dashboard has something to show: one user,
five subjects, three courses with enrollments, study sessions, notes,
recommended materials and unread notifications.
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

import structlog

from studydash.store.entity_store import EntityStore
from studydash.store.entities import User
from studydash.store.repository import DashboardRepository

logger = structlog.get_logger(__name__)

ONE_WEEK = timedelta(days=7)

DEMO_USER = {
    "username": "alexj",
    "password": "password123",
    "full_name": "Alex Johnson",
    "email": "alex.j@university.edu",
    "avatar_url": (
        "https://images.unsplash.com/photo-1535713875002-d1d0cf377fde"
        "?ixlib=rb-1.2.1&auto=format&fit=crop&w=256&q=80"
    ),
}

# (subject name, progress %)
DEMO_SUBJECTS = [
    ("Math", 85),
    ("Science", 72),
    ("History", 91),
    ("English", 64),
    ("Computer Science", 78),
]

DEMO_COURSES = [
    {
        "name": "Advanced Mathematics",
        "code": "MATH 301",
        "instructor": "Dr. Sarah Johnson",
        "description": "Advanced topics in calculus and linear algebra",
        "icon_name": "square-root-alt",
        "icon_color": "primary",
    },
    {
        "name": "Physics II",
        "code": "PHYS 202",
        "instructor": "Prof. Michael Chen",
        "description": "Electricity, magnetism, and modern physics",
        "icon_name": "atom",
        "icon_color": "warning",
    },
    {
        "name": "Data Structures & Algorithms",
        "code": "CS 315",
        "instructor": "Dr. Robert Park",
        "description": "Advanced data structures and algorithm design",
        "icon_name": "laptop-code",
        "icon_color": "secondary",
    },
]

# (course index, progress %, grade)
DEMO_ENROLLMENTS = [
    (0, 75, "A-"),
    (1, 60, "B+"),
    (2, 85, "A"),
]

# (course index, topic, duration in seconds)
DEMO_SESSIONS = [
    (0, "Calculus", 80 * 60),
    (1, "Mechanics", 45 * 60),
    (2, "Algorithms", 125 * 60),
]

# (course index, title, content)
DEMO_NOTES = [
    (
        0,
        "Calculus Integration Techniques",
        "Remember the special cases for u-substitution and when to use integration by parts...",
    ),
    (1, "Physics Formulas", "F=ma, E=mc², p=mv, KE=½mv², PE=mgh, ..."),
]

DEMO_MATERIALS = [
    {
        "course": 0,
        "title": "Complete Calculus Chapter 6",
        "description": (
            "You're 80% through this chapter. Finishing it will help with upcoming assignments."
        ),
        "type": "book",
        "priority": "High Priority",
        "progress": 80,
        "icon_name": "book",
    },
    {
        "course": 1,
        "title": "Physics Lab Report",
        "description": "Start your lab report early to ensure you have time for revisions.",
        "type": "assignment",
        "priority": "Due in 3 days",
        "progress": 15,
        "icon_name": "tasks",
    },
    {
        "course": 2,
        "title": "Watch Computer Science Lecture",
        "description": (
            "A new lecture on Data Structures has been uploaded to help with your next assignment."
        ),
        "type": "video",
        "priority": "New Content",
        "progress": 0,
        "icon_name": "video",
    },
]

# (title, message, type, age)
DEMO_NOTIFICATIONS = [
    ("Assignment Graded", "Your Physics Lab Report was graded: A", "success", timedelta(minutes=10)),
    ("Deadline Reminder", "Math Assignment due in 24 hours", "warning", timedelta(hours=1)),
    ("New Course Material", "Biology 101: New lecture notes available", "info", timedelta(days=1)),
]


def _random_recent(rng: random.Random, now: datetime) -> datetime:
    """A random moment within the week before `now`."""
    offset_ms = rng.randrange(int(ONE_WEEK.total_seconds() * 1000))
    return now - timedelta(milliseconds=offset_ms)


def seed_demo_data(
    store: EntityStore,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> User:
    """Populate a store with the demo dataset.

    Meant to run once, on an empty store.

    Args:
        store: Store to populate
        rng: Random source for session and note timestamps
        now: Reference time (defaults to the current UTC time)

    Returns:
        The demo user
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    repo = DashboardRepository(store)

    user = repo.create_user(**DEMO_USER)

    for name, progress in DEMO_SUBJECTS:
        subject = repo.create_subject(name)
        repo.create_user_subject_progress(user.id, subject.id, progress)

    courses = [repo.create_course(**data) for data in DEMO_COURSES]

    for index, progress, grade in DEMO_ENROLLMENTS:
        repo.create_user_course(user.id, courses[index].id, progress, grade)

    for index, topic, duration in DEMO_SESSIONS:
        repo.create_study_session(
            user_id=user.id,
            course_id=courses[index].id,
            duration=duration,
            start_time=_random_recent(rng, now),
            topic=topic,
        )

    for index, title, content in DEMO_NOTES:
        repo.create_note(
            user_id=user.id,
            course_id=courses[index].id,
            title=title,
            content=content,
            created_at=_random_recent(rng, now),
        )

    for material in DEMO_MATERIALS:
        data = dict(material)
        course = courses[data.pop("course")]
        repo.create_study_material(course_id=course.id, **data)

    for title, message, kind, age in DEMO_NOTIFICATIONS:
        repo.create_notification(
            user_id=user.id,
            title=title,
            message=message,
            type=kind,
            created_at=now - age,
        )

    logger.info(
        "demo_data_seeded",
        user_id=user.id,
        courses=len(courses),
        subjects=len(DEMO_SUBJECTS),
        notifications=len(DEMO_NOTIFICATIONS),
    )
    return user
