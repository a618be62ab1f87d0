"""Business logic for progress tracking."""

import logging

from learnhub.courses.service import percentage
from learnhub.exceptions import ResourceNotFoundError
from learnhub.storage import JsonStore

from .schemas import ProgressRecord, ProgressSnapshot


logger = logging.getLogger(__name__)


class ProgressService:
    """Service for per-user lesson completion across courses."""

    def __init__(self, store: JsonStore) -> None:
        """Initialize progress service."""
        self.store = store

    async def record_lesson_completion(self, course_id: str, lesson_id: str, user_id: str) -> ProgressSnapshot:
        """Mark a lesson completed for a user and recompute course progress.

        The progress record is created on the first completion for the
        (user, course) pair. Completing the same lesson again changes nothing.
        Only lessons that belong to the course count towards the percentage;
        a course without lessons stays at 0%.
        """
        async with self.store.transaction() as state:
            course = state.find_course(course_id)
            if course is None:
                raise ResourceNotFoundError("Course", course_id)

            record = state.find_progress(user_id, course_id)
            if record is None:
                record = ProgressRecord(user_id=user_id, course_id=course_id)
                state.progress.append(record)

            if lesson_id not in record.completed_lessons:
                record.completed_lessons.append(lesson_id)

            lesson_ids = course.lesson_ids()
            done = len(set(lesson_ids) & set(record.completed_lessons))
            record.progress = percentage(done, len(lesson_ids))
            record.completed = record.progress == 100

            snapshot = ProgressSnapshot(progress=record.progress, completed=record.completed)

        logger.info(
            f"User {user_id} completed lesson {lesson_id} of course {course_id}: {snapshot.progress}%"
        )
        return snapshot

    async def get_progress_for_user(self, user_id: str) -> list[ProgressRecord]:
        """Return every progress record of a user."""
        return [record.model_copy(deep=True) for record in self.store.state.progress if record.user_id == user_id]
