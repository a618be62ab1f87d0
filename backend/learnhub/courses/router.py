"""Course catalog API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from learnhub.auth import require_admin
from learnhub.middleware.security import write_route_limit
from learnhub.shared.body import JsonBody, parse_model
from learnhub.shared.dependencies import Store

from .schemas import Course, CourseCreate, CourseUpdate, QuizResult, QuizSubmission
from .service import CourseService


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/courses",
    tags=["courses"],
    responses={404: {"description": "Not found"}},
)


def get_course_service(store: Store) -> CourseService:
    """Get course service instance."""
    return CourseService(store)


CourseServiceDep = Annotated[CourseService, Depends(get_course_service)]


@router.get("")
async def list_courses(service: CourseServiceDep) -> list[Course]:
    """List all courses."""
    return await service.list_courses()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin), Depends(write_route_limit)],
)
async def create_course(body: JsonBody, service: CourseServiceDep) -> Course:
    """Create a course (admin only)."""
    data = parse_model(CourseCreate, body)
    return await service.create_course(data)


@router.get("/{course_id}")
async def get_course(course_id: str, service: CourseServiceDep) -> Course:
    """Get a single course."""
    return await service.get_course(course_id)


@router.patch(
    "/{course_id}",
    dependencies=[Depends(require_admin), Depends(write_route_limit)],
)
async def update_course(course_id: str, body: JsonBody, service: CourseServiceDep) -> Course:
    """Partially update a course (admin only)."""
    data = parse_model(CourseUpdate, body)
    return await service.update_course(course_id, data)


@router.post("/{course_id}/quiz/submissions")
async def grade_quiz(course_id: str, body: JsonBody, service: CourseServiceDep) -> QuizResult:
    """Grade a quiz submission without recording it."""
    submission = parse_model(QuizSubmission, body)
    return await service.grade_quiz(course_id, submission)
