"""Note endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, status

from studydash.config.app_config import AppConfig
from studydash.store.errors import NotFoundError
from studydash.store.repository import DashboardRepository, NoteView
from studydash.utils.formatting import format_distance, note_preview, parse_limit
from studydash.web.dependencies import get_config, get_repository, get_user_id
from studydash.web.schemas import (
    CourseResponse,
    NoteCreate,
    NoteResponse,
    NoteWithCourseResponse,
    RecentNoteResponse,
)

router = APIRouter(prefix="/api/user/notes", tags=["notes"])


def _note_to_response(view: NoteView) -> NoteWithCourseResponse:
    return NoteWithCourseResponse(
        **asdict(view.note),
        course=CourseResponse.model_validate(view.course),
    )


@router.get("", response_model=list[NoteWithCourseResponse])
async def list_notes(
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
) -> list[NoteWithCourseResponse]:
    """All notes of the user, each with its course."""
    return [_note_to_response(view) for view in repo.get_notes(user_id)]


# Declared before /{note_id} so "recent" is not parsed as an id
@router.get("/recent", response_model=list[RecentNoteResponse])
async def list_recent_notes(
    limit: str | None = Query(default=None),
    repo: DashboardRepository = Depends(get_repository),
    user_id: int = Depends(get_user_id),
    config: AppConfig = Depends(get_config),
) -> list[RecentNoteResponse]:
    """Most recent notes with a short preview and a relative date."""
    count = parse_limit(limit, config.dashboard.recent_limit)
    return [
        RecentNoteResponse(
            id=view.note.id,
            title=view.note.title,
            preview=note_preview(view.note.content, config.dashboard.preview_length),
            date=format_distance(view.note.created_at),
        )
        for view in repo.get_recent_notes(user_id, count)
    ]


@router.get("/{note_id}", response_model=NoteWithCourseResponse)
async def get_note(
    note_id: int,
    repo: DashboardRepository = Depends(get_repository),
) -> NoteWithCourseResponse:
    """Get a single note with its course."""
    view = repo.get_note(note_id)
    if view is None:
        raise NotFoundError("Note", note_id)
    return _note_to_response(view)


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    body: NoteCreate,
    repo: DashboardRepository = Depends(get_repository),
) -> NoteResponse:
    """Create a note."""
    if repo.get_user(body.user_id) is None:
        raise NotFoundError("User", body.user_id)
    if repo.get_course(body.course_id) is None:
        raise NotFoundError("Course", body.course_id)
    note = repo.create_note(
        user_id=body.user_id,
        course_id=body.course_id,
        title=body.title,
        content=body.content,
        created_at=body.created_at,
    )
    return NoteResponse.model_validate(note)
