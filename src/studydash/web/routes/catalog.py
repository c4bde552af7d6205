"""Course and subject catalog endpoints."""

from fastapi import APIRouter, Depends

from studydash.store.errors import NotFoundError
from studydash.store.repository import DashboardRepository
from studydash.web.dependencies import get_repository
from studydash.web.schemas import CourseResponse, MaterialResponse, SubjectResponse

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/courses", response_model=list[CourseResponse])
async def list_courses(
    repo: DashboardRepository = Depends(get_repository),
) -> list[CourseResponse]:
    """List all courses."""
    return [CourseResponse.model_validate(c) for c in repo.list_courses()]


@router.get("/courses/{course_id}/materials", response_model=list[MaterialResponse])
async def list_course_materials(
    course_id: int,
    repo: DashboardRepository = Depends(get_repository),
) -> list[MaterialResponse]:
    """List study materials of one course."""
    if repo.get_course(course_id) is None:
        raise NotFoundError("Course", course_id)
    return [MaterialResponse.model_validate(m) for m in repo.get_study_materials(course_id)]


@router.get("/subjects", response_model=list[SubjectResponse])
async def list_subjects(
    repo: DashboardRepository = Depends(get_repository),
) -> list[SubjectResponse]:
    """List all subjects."""
    return [SubjectResponse.model_validate(s) for s in repo.list_subjects()]
