"""Study session endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, status

from studydash.config.app_config import AppConfig
from studydash.store.errors import NotFoundError
from studydash.store.repository import DashboardRepository, StudySessionView
from studydash.utils.formatting import format_duration, parse_limit
from studydash.web.dependencies import get_config, get_repository, get_user_id
from studydash.web.schemas import (
    CourseResponse,
    RecentStudySessionResponse,
    StudySessionCreate,
    StudySessionResponse,
    StudySessionWithCourseResponse,
)

router = APIRouter(prefix="/api/user/study-sessions", tags=["study-sessions"])


@router.get("", response_model=list[StudySessionWithCourseResponse])
async def list_study_sessions(
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
) -> list[StudySessionWithCourseResponse]:
    """All study sessions of the user, each with its course."""
    return [
        StudySessionWithCourseResponse(
            **asdict(view.session),
            course=CourseResponse.model_validate(view.course),
        )
        for view in repo.get_study_sessions(user_id)
    ]


def _session_to_summary(view: StudySessionView) -> RecentStudySessionResponse:
    return RecentStudySessionResponse(
        id=view.session.id,
        subject=view.course.name,
        topic=view.session.topic,
        duration=format_duration(view.session.duration),
    )


@router.get("/recent", response_model=list[RecentStudySessionResponse])
async def list_recent_study_sessions(
    limit: str | None = Query(default=None),
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
    config: AppConfig = Depends(get_config),
) -> list[RecentStudySessionResponse]:
    """Most recent study sessions, newest first, with formatted durations."""
    count = parse_limit(limit, config.dashboard.recent_limit)
    return [
        _session_to_summary(view)
        for view in repo.get_recent_study_sessions(user_id, count)
    ]


@router.post("", response_model=StudySessionResponse, status_code=status.HTTP_201_CREATED)
async def create_study_session(
    body: StudySessionCreate,
    repo: DashboardRepository = Depends(get_repository),
) -> StudySessionResponse:
    """Record a finished study session."""
    if repo.get_user(body.user_id) is None:
        raise NotFoundError("User", body.user_id)
    if repo.get_course(body.course_id) is None:
        raise NotFoundError("Course", body.course_id)
    session = repo.create_study_session(
        user_id=body.user_id,
        course_id=body.course_id,
        duration=body.duration,
        start_time=body.start_time,
        topic=body.topic,
    )
    return StudySessionResponse.model_validate(session)
