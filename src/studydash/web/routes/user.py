"""User profile and subject progress endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from studydash.store.errors import NotFoundError
from studydash.store.repository import DashboardRepository, SubjectProgressView
from studydash.web.dependencies import get_repository, get_user_id
from studydash.web.schemas import (
    ProgressUpdate,
    SubjectProgressResponse,
    SubjectResponse,
    UserResponse,
)

router = APIRouter(prefix="/api/user", tags=["user"])


def _subject_progress_to_response(view: SubjectProgressView) -> SubjectProgressResponse:
    return SubjectProgressResponse(
        **asdict(view.progress),
        subject=SubjectResponse.model_validate(view.subject),
    )


@router.get("", response_model=UserResponse)
async def get_current_user(
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
) -> UserResponse:
    """Get the dashboard user. The password is never returned."""
    user = repo.get_user(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return UserResponse.model_validate(user)


@router.get("/subjects/progress", response_model=list[SubjectProgressResponse])
async def get_subject_progress(
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
) -> list[SubjectProgressResponse]:
    """Progress per subject, each with its subject."""
    return [
        _subject_progress_to_response(view)
        for view in repo.get_user_subject_progress(user_id)
    ]


@router.patch("/subjects/progress/{progress_id}", response_model=SubjectProgressResponse)
async def update_subject_progress(
    progress_id: int,
    body: ProgressUpdate,
    repo: DashboardRepository = Depends(get_repository),
) -> SubjectProgressResponse:
    """Set the progress of one subject progress row."""
    row = repo.update_user_subject_progress(progress_id, body.progress)
    subject = repo.get_subject(row.subject_id)
    if subject is None:
        raise NotFoundError("Subject", row.subject_id)
    return _subject_progress_to_response(SubjectProgressView(row, subject))
