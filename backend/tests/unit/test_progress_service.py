"""Tests for lesson completion tracking."""

import asyncio

import pytest

from learnhub.courses.service import CourseService
from learnhub.exceptions import ResourceNotFoundError
from learnhub.progress.service import ProgressService
from learnhub.storage import JsonStore
from tests.factories import make_course


@pytest.mark.asyncio
async def test_two_lesson_course_reaches_completion(store: JsonStore) -> None:
    course = await CourseService(store).create_course(make_course(["l1", "l2"]))
    service = ProgressService(store)

    first = await service.record_lesson_completion(course.id, "l1", "u1")
    second = await service.record_lesson_completion(course.id, "l2", "u1")

    assert (first.progress, first.completed) == (50, False)
    assert (second.progress, second.completed) == (100, True)


@pytest.mark.asyncio
async def test_repeating_a_lesson_is_idempotent(store: JsonStore) -> None:
    course = await CourseService(store).create_course(make_course(["l1", "l2", "l3"]))
    service = ProgressService(store)

    once = await service.record_lesson_completion(course.id, "l1", "u1")
    twice = await service.record_lesson_completion(course.id, "l1", "u1")

    assert once == twice
    records = await service.get_progress_for_user("u1")
    assert len(records) == 1
    assert records[0].completed_lessons == ["l1"]


@pytest.mark.asyncio
async def test_progress_never_decreases(store: JsonStore) -> None:
    lesson_ids = ["a", "b", "c", "d", "e", "f", "g"]
    course = await CourseService(store).create_course(make_course(lesson_ids))
    service = ProgressService(store)

    seen = [(await service.record_lesson_completion(course.id, lesson_id, "u1")).progress for lesson_id in lesson_ids]

    assert seen == sorted(seen)
    assert seen[-1] == 100


@pytest.mark.asyncio
async def test_completion_requires_every_course_lesson(store: JsonStore) -> None:
    course = await CourseService(store).create_course(make_course(["l1", "l2"]))
    service = ProgressService(store)

    await service.record_lesson_completion(course.id, "l1", "u1")
    stray = await service.record_lesson_completion(course.id, "not-a-lesson", "u1")

    assert (stray.progress, stray.completed) == (50, False)

    done = await service.record_lesson_completion(course.id, "l2", "u1")
    assert (done.progress, done.completed) == (100, True)


@pytest.mark.asyncio
async def test_course_without_lessons_stays_at_zero(store: JsonStore) -> None:
    course = await CourseService(store).create_course(make_course([]))

    snapshot = await ProgressService(store).record_lesson_completion(course.id, "anything", "u1")

    assert (snapshot.progress, snapshot.completed) == (0, False)


@pytest.mark.asyncio
async def test_unknown_course_creates_no_record(store: JsonStore) -> None:
    service = ProgressService(store)

    with pytest.raises(ResourceNotFoundError):
        await service.record_lesson_completion("missing", "l1", "u1")

    assert await service.get_progress_for_user("u1") == []


@pytest.mark.asyncio
async def test_progress_is_tracked_per_user_and_course(store: JsonStore) -> None:
    courses = CourseService(store)
    first = await courses.create_course(make_course(["l1", "l2"]))
    second = await courses.create_course(make_course(["m1"]))
    service = ProgressService(store)

    await service.record_lesson_completion(first.id, "l1", "u1")
    await service.record_lesson_completion(second.id, "m1", "u1")
    await service.record_lesson_completion(first.id, "l2", "u2")

    u1 = {record.course_id: record.progress for record in await service.get_progress_for_user("u1")}
    u2 = {record.course_id: record.progress for record in await service.get_progress_for_user("u2")}

    assert u1 == {first.id: 50, second.id: 100}
    assert u2 == {first.id: 50}


@pytest.mark.asyncio
async def test_concurrent_completions_share_one_record(store: JsonStore) -> None:
    lesson_ids = [f"l{i}" for i in range(10)]
    course = await CourseService(store).create_course(make_course(lesson_ids))
    service = ProgressService(store)

    await asyncio.gather(*(service.record_lesson_completion(course.id, lesson_id, "u1") for lesson_id in lesson_ids))

    [record] = await service.get_progress_for_user("u1")
    assert sorted(record.completed_lessons) == sorted(lesson_ids)
    assert (record.progress, record.completed) == (100, True)

    [reloaded] = JsonStore(store.path).state.progress
    assert sorted(reloaded.completed_lessons) == sorted(lesson_ids)
