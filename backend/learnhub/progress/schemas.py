"""Schemas for progress API."""

import math

from pydantic import Field, field_validator

from learnhub.shared.schemas import CamelModel


class ProgressRecord(CamelModel):
    """Per-(user, course) completion ledger."""

    user_id: str
    course_id: str
    completed_lessons: list[str] = Field(default_factory=list, description="Completed lesson ids, first-completion order")
    progress: int = Field(0, ge=0, le=100, description="Completion percentage")
    completed: bool = False
    certificate_id: str | None = None

    @field_validator("progress", mode="before")
    @classmethod
    def clamp_progress(cls, v: object) -> object:
        """Coerce out-of-range or missing percentages from older data files into 0..100."""
        if v is None or (isinstance(v, float) and math.isnan(v)):
            return 0
        if isinstance(v, int | float):
            return min(max(round(v), 0), 100)
        return v


class LessonProgressUpdate(CamelModel):
    """Schema for marking a lesson as completed."""

    user_id: str = Field(..., min_length=1)


class ProgressSnapshot(CamelModel):
    """Schema for lesson completion response."""

    progress: int
    completed: bool
