"""Enrollment endpoints for the dashboard user."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from studydash.store.errors import NotFoundError
from studydash.store.repository import DashboardRepository, EnrollmentView
from studydash.web.dependencies import get_repository, get_user_id
from studydash.web.schemas import (
    CourseResponse,
    EnrollmentWithCourseResponse,
    GradeUpdate,
    ProgressUpdate,
)

router = APIRouter(prefix="/api/user/courses", tags=["courses"])


def _enrollment_to_response(view: EnrollmentView) -> EnrollmentWithCourseResponse:
    return EnrollmentWithCourseResponse(
        **asdict(view.enrollment),
        course=CourseResponse.model_validate(view.course),
    )


def _with_course(repo: DashboardRepository, enrollment) -> EnrollmentWithCourseResponse:
    course = repo.get_course(enrollment.course_id)
    if course is None:
        raise NotFoundError("Course", enrollment.course_id)
    return _enrollment_to_response(EnrollmentView(enrollment, course))


@router.get("", response_model=list[EnrollmentWithCourseResponse])
async def list_user_courses(
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
) -> list[EnrollmentWithCourseResponse]:
    """List the user's enrollments, each with its course."""
    return [_enrollment_to_response(view) for view in repo.get_user_courses(user_id)]


@router.patch("/{enrollment_id}/progress", response_model=EnrollmentWithCourseResponse)
async def update_course_progress(
    enrollment_id: int,
    body: ProgressUpdate,
    repo: DashboardRepository = Depends(get_repository),
) -> EnrollmentWithCourseResponse:
    """Set course progress on an enrollment."""
    enrollment = repo.update_user_course_progress(enrollment_id, body.progress)
    return _with_course(repo, enrollment)


@router.patch("/{enrollment_id}/grade", response_model=EnrollmentWithCourseResponse)
async def update_course_grade(
    enrollment_id: int,
    body: GradeUpdate,
    repo: DashboardRepository = Depends(get_repository),
) -> EnrollmentWithCourseResponse:
    """Set the grade on an enrollment."""
    enrollment = repo.update_user_course_grade(enrollment_id, body.grade)
    return _with_course(repo, enrollment)
