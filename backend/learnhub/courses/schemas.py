"""Pydantic schemas for the course catalog."""

from enum import StrEnum
from uuid import uuid4

from pydantic import Field, field_validator, model_validator

from learnhub.shared.schemas import CamelModel


def _new_id() -> str:
    return str(uuid4())


class LessonType(StrEnum):
    """Media type of a lesson."""

    DOCUMENT = "document"
    VIDEO = "video"
    SLIDESHOW = "slideshow"


# Values written by older frontends
LEGACY_LESSON_TYPES = {
    "pdf": LessonType.DOCUMENT,
    "powerpoint": LessonType.SLIDESHOW,
}


class Lesson(CamelModel):
    """Atomic unit of course content."""

    id: str = Field(default_factory=_new_id, min_length=1, description="Lesson ID, unique within its course")
    title: str = Field(..., min_length=1, description="Lesson title")
    content: str = Field("", description="Content reference (URL or path)")
    type: LessonType = Field(LessonType.DOCUMENT, description="Lesson media type")
    duration: float = Field(0, ge=0, description="Lesson duration in minutes")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_legacy_type(cls, v: object) -> object:
        """Map legacy lesson types onto the current ones."""
        if isinstance(v, str):
            return LEGACY_LESSON_TYPES.get(v.lower(), v.lower())
        return v


class QuizQuestion(CamelModel):
    """Single multiple-choice question."""

    id: str = Field(default_factory=_new_id, description="Question ID")
    question: str = Field(..., min_length=1, description="Question text")
    options: list[str] = Field(..., min_length=2, description="Ordered answer options")
    correct_answer: int = Field(..., ge=0, description="Index of the correct option")

    @model_validator(mode="after")
    def check_correct_answer(self) -> "QuizQuestion":
        if self.correct_answer >= len(self.options):
            msg = f"correctAnswer {self.correct_answer} is outside the {len(self.options)} options"
            raise ValueError(msg)
        return self


class Quiz(CamelModel):
    """Quiz attached to a course."""

    id: str = Field(default_factory=_new_id, description="Quiz ID")
    questions: list[QuizQuestion] = Field(default_factory=list, description="Ordered questions")
    passing_score: int = Field(70, ge=0, le=100, description="Minimum percentage needed to pass")


class CourseBase(CamelModel):
    """Fields shared by course payloads."""

    title: str = Field(..., min_length=1, description="Course title")
    description: str = Field(..., min_length=1, description="Course description")
    category: str = Field(..., min_length=1, description="Course category")
    duration: float = Field(0, ge=0, description="Course duration in minutes")
    lessons: list[Lesson] = Field(..., description="Ordered lessons")
    quiz: Quiz | None = Field(None, description="Optional course quiz")

    @field_validator("lessons")
    @classmethod
    def check_unique_lesson_ids(cls, v: list[Lesson]) -> list[Lesson]:
        seen: set[str] = set()
        for lesson in v:
            if lesson.id in seen:
                msg = f"Duplicate lesson id: {lesson.id}"
                raise ValueError(msg)
            seen.add(lesson.id)
        return v


class CourseCreate(CourseBase):
    """Schema for creating a new course."""


class CourseUpdate(CamelModel):
    """Schema for partially updating a course."""

    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    category: str | None = Field(None, min_length=1)
    duration: float | None = Field(None, ge=0)
    lessons: list[Lesson] | None = None
    quiz: Quiz | None = None


class Course(CourseBase):
    """Stored course."""

    id: str = Field(..., description="Course ID")
    progress: int = Field(0, description="Always 0 in the catalog; per-user progress lives in progress records")
    completed: bool = False

    def lesson_ids(self) -> list[str]:
        """Return lesson ids in course order."""
        return [lesson.id for lesson in self.lessons]


class QuizSubmission(CamelModel):
    """Answers submitted for a course quiz."""

    user_id: str = Field(..., min_length=1)
    answers: list[int] = Field(..., description="Chosen option index per question, in order")


class QuizResult(CamelModel):
    """Outcome of grading a quiz submission."""

    score: int
    passed: bool
    correct: int
    total: int
