"""Tests for the JSON document store."""

import asyncio
import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

import learnhub.storage.json_store as json_store_module
from learnhub.certificates.schemas import Certificate
from learnhub.courses.schemas import Course, Lesson, LessonType
from learnhub.progress.schemas import ProgressRecord
from learnhub.storage import JsonStore, StoreLoadError, StoreWriteError


def _course(course_id: str = "c1") -> Course:
    return Course(
        id=course_id,
        title="Course",
        description="Description",
        category="General",
        lessons=[Lesson(id="l1", title="One"), Lesson(id="l2", title="Two", type="video")],
    )


def test_missing_file_loads_empty_state(data_file: Path) -> None:
    store = JsonStore(data_file)

    assert store.state.courses == []
    assert store.state.progress == []
    assert store.state.certificates == []
    assert not data_file.exists()


def test_empty_file_loads_empty_state(data_file: Path) -> None:
    data_file.write_text("")

    assert JsonStore(data_file).state.courses == []


def test_corrupt_file_raises(data_file: Path) -> None:
    data_file.write_text("{not json")

    with pytest.raises(StoreLoadError):
        JsonStore(data_file)


def test_legacy_document_is_readable(data_file: Path) -> None:
    legacy = {
        "courses": [
            {
                "id": "c1",
                "title": "Old",
                "description": "From the old server",
                "category": "Legacy",
                "duration": 10,
                "lessons": [
                    {"id": "a", "title": "Slides", "content": "x.pptx", "type": "powerpoint", "duration": 5},
                    {"id": "b", "title": "Handout", "content": "x.pdf", "type": "pdf", "duration": 5},
                ],
                "progress": 0,
                "completed": False,
            }
        ],
        "progress": [{"userId": "1", "courseId": "c1", "completedLessons": ["a"], "progress": 50, "completed": False}],
        "certificates": [
            {"id": "x", "userId": "1", "courseId": "c1", "courseName": "Old", "completedAt": "2024-05-01T10:00:00.000Z"}
        ],
    }
    data_file.write_text(json.dumps(legacy))

    state = JsonStore(data_file).state

    assert [lesson.type for lesson in state.courses[0].lessons] == [LessonType.SLIDESHOW, LessonType.DOCUMENT]
    assert state.progress[0].completed_lessons == ["a"]
    assert state.certificates[0].score is None



def test_out_of_range_progress_from_older_files_is_clamped(data_file: Path) -> None:
    document = {
        "courses": [],
        "progress": [
            {"userId": "1", "courseId": "c1", "completedLessons": ["a", "x", "y", "z"], "progress": 200, "completed": False},
            {"userId": "1", "courseId": "c2", "completedLessons": ["a"], "progress": None, "completed": False},
        ],
        "certificates": [],
    }
    data_file.write_text(json.dumps(document))

    state = JsonStore(data_file).state

    assert [record.progress for record in state.progress] == [100, 0]

@pytest.mark.asyncio
async def test_transaction_round_trips_through_disk(store: JsonStore, data_file: Path) -> None:
    async with store.transaction() as state:
        state.courses.append(_course("c1"))
        state.courses.append(_course("c2"))
        state.progress.append(ProgressRecord(user_id="u1", course_id="c1", completed_lessons=["l1"], progress=50))
        state.certificates.append(
            Certificate(
                id="cert-1",
                user_id="u1",
                course_id="c1",
                course_name="Course",
                completed_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC),
                score=90,
            )
        )

    reloaded = JsonStore(data_file)

    assert reloaded.state.model_dump() == store.state.model_dump()
    assert [c.id for c in reloaded.state.courses] == ["c1", "c2"]


@pytest.mark.asyncio
async def test_save_writes_camel_case_document(store: JsonStore, data_file: Path) -> None:
    async with store.transaction() as state:
        state.progress.append(ProgressRecord(user_id="u1", course_id="c1"))

    document = json.loads(data_file.read_text())

    assert set(document) == {"courses", "progress", "certificates"}
    assert document["progress"][0]["userId"] == "u1"
    assert "completedLessons" in document["progress"][0]
    assert not data_file.with_name(f"{data_file.name}.tmp").exists()


@pytest.mark.asyncio
async def test_transaction_rolls_back_when_block_raises(store: JsonStore, data_file: Path) -> None:
    with pytest.raises(RuntimeError):
        async with store.transaction() as state:
            state.courses.append(_course())
            raise RuntimeError("boom")

    assert store.state.courses == []
    assert not data_file.exists()


@pytest.mark.asyncio
async def test_transaction_rolls_back_when_write_fails(
    store: JsonStore, data_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    async with store.transaction() as state:
        state.courses.append(_course("c1"))

    def failing_replace(*_args, **_kwargs) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(json_store_module.os, "replace", failing_replace)

    with pytest.raises(StoreWriteError):
        async with store.transaction() as state:
            state.courses.append(_course("c2"))

    assert [c.id for c in store.state.courses] == ["c1"]
    assert [c["id"] for c in json.loads(data_file.read_text())["courses"]] == ["c1"]


@pytest.mark.asyncio
async def test_transaction_rolls_back_when_cancelled_during_write(
    store: JsonStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def cancelled_save(_state) -> None:
        raise asyncio.CancelledError

    monkeypatch.setattr(store, "save", cancelled_save)

    with pytest.raises(asyncio.CancelledError):
        async with store.transaction() as state:
            state.courses.append(_course())

    assert store.state.courses == []
