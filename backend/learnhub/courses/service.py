"""Business logic for the course catalog."""

import logging
from typing import Any
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from learnhub.exceptions import ResourceNotFoundError, ValidationError
from learnhub.shared.body import describe_validation_error
from learnhub.storage import JsonStore

from .schemas import Course, CourseCreate, CourseUpdate, QuizResult, QuizSubmission


logger = logging.getLogger(__name__)


def percentage(part: int, whole: int) -> int:
    """Return ``100 * part / whole`` rounded half up, or 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


class CourseService:
    """Service for reading and maintaining course definitions."""

    def __init__(self, store: JsonStore) -> None:
        """Initialize course service."""
        self.store = store

    async def list_courses(self) -> list[Course]:
        """Return all courses in creation order."""
        return [course.model_copy() for course in self.store.state.courses]

    async def get_course(self, course_id: str) -> Course:
        """Return a single course."""
        course = self.store.state.find_course(course_id)
        if course is None:
            raise ResourceNotFoundError("Course", course_id)
        return course.model_copy()

    async def create_course(self, data: CourseCreate) -> Course:
        """Create a course with a fresh identifier and persist it."""
        course = Course(**data.model_dump(), id=str(uuid4()), progress=0, completed=False)

        async with self.store.transaction() as state:
            state.courses.append(course)

        logger.info(f"Created course {course.id} ({course.title!r}) with {len(course.lessons)} lessons")
        return course.model_copy()

    async def update_course(self, course_id: str, data: CourseUpdate) -> Course:
        """Shallow-merge the given fields into an existing course and persist it."""
        updates: dict[str, Any] = data.model_dump(exclude_unset=True)

        async with self.store.transaction() as state:
            for index, course in enumerate(state.courses):
                if course.id == course_id:
                    break
            else:
                raise ResourceNotFoundError("Course", course_id)

            merged = {**course.model_dump(), **updates}
            try:
                updated = Course.model_validate(merged)
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_error(e)) from e
            state.courses[index] = updated

        logger.info(f"Updated course {course_id}: {sorted(updates)}")
        return updated.model_copy()

    async def grade_quiz(self, course_id: str, submission: QuizSubmission) -> QuizResult:
        """Grade a quiz submission against the course answer key."""
        course = await self.get_course(course_id)
        if course.quiz is None:
            raise ResourceNotFoundError("Quiz", course_id)

        questions = course.quiz.questions
        if len(submission.answers) != len(questions):
            msg = f"Expected {len(questions)} answers, got {len(submission.answers)}"
            raise ValidationError(msg)

        correct = sum(
            1 for answer, question in zip(submission.answers, questions, strict=True) if answer == question.correct_answer
        )
        score = percentage(correct, len(questions))
        result = QuizResult(
            score=score,
            passed=score >= course.quiz.passing_score,
            correct=correct,
            total=len(questions),
        )
        logger.info(f"Graded quiz for course {course_id}, user {submission.user_id}: {score}%")
        return result

