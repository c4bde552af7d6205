"""Recommended material endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from studydash.store.repository import DashboardRepository
from studydash.web.dependencies import get_repository, get_user_id
from studydash.web.schemas import (
    CourseResponse,
    MaterialProgressResponse,
    MaterialWithCourseResponse,
    ProgressUpdate,
)

router = APIRouter(prefix="/api/user/materials", tags=["materials"])


@router.get("/recommended", response_model=list[MaterialWithCourseResponse])
async def list_recommended_materials(
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
) -> list[MaterialWithCourseResponse]:
    """Materials of enrolled courses, least progress first."""
    return [
        MaterialWithCourseResponse(
            **asdict(view.material),
            course=CourseResponse.model_validate(view.course),
        )
        for view in repo.get_recommended_materials(user_id)
    ]


@router.patch("/{material_id}/progress", response_model=MaterialProgressResponse)
async def update_material_progress(
    material_id: int,
    body: ProgressUpdate,
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
) -> MaterialProgressResponse:
    """Record the user's progress on a material, creating the row on first use."""
    row = repo.upsert_user_material_progress(user_id, material_id, body.progress)
    return MaterialProgressResponse.model_validate(row)
