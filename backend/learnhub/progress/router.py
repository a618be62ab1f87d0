"""Progress tracking API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from learnhub.middleware.security import write_route_limit
from learnhub.shared.body import JsonBody, parse_model
from learnhub.shared.dependencies import Store

from .schemas import LessonProgressUpdate, ProgressRecord, ProgressSnapshot
from .service import ProgressService


router = APIRouter(prefix="/api", tags=["progress"])


def get_progress_service(store: Store) -> ProgressService:
    """Get progress service instance."""
    return ProgressService(store)


ProgressServiceDep = Annotated[ProgressService, Depends(get_progress_service)]


@router.patch(
    "/courses/{course_id}/lessons/{lesson_id}/progress",
    dependencies=[Depends(write_route_limit)],
)
async def complete_lesson(
    course_id: str,
    lesson_id: str,
    body: JsonBody,
    service: ProgressServiceDep,
) -> ProgressSnapshot:
    """Mark a lesson completed for a user."""
    update = parse_model(LessonProgressUpdate, body)
    return await service.record_lesson_completion(course_id, lesson_id, update.user_id)


@router.get("/progress/{user_id}")
async def get_user_progress(user_id: str, service: ProgressServiceDep) -> list[ProgressRecord]:
    """Get all progress records of a user."""
    return await service.get_progress_for_user(user_id)
