"""Single-document JSON store.

The whole state lives in memory and is rewritten to disk after every
mutation. Writes go to a sibling temp file that is renamed over the target,
so a crash mid-write leaves the previous document intact.
"""

import asyncio
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from learnhub.certificates.schemas import Certificate
from learnhub.courses.schemas import Course
from learnhub.progress.schemas import ProgressRecord

from .exceptions import StoreLoadError, StoreWriteError


logger = logging.getLogger(__name__)


class StoreState(BaseModel):
    """Top-level layout of the data file."""

    courses: list[Course] = Field(default_factory=list)
    progress: list[ProgressRecord] = Field(default_factory=list)
    certificates: list[Certificate] = Field(default_factory=list)

    def find_course(self, course_id: str) -> Course | None:
        return next((c for c in self.courses if c.id == course_id), None)

    def find_progress(self, user_id: str, course_id: str) -> ProgressRecord | None:
        return next((p for p in self.progress if p.user_id == user_id and p.course_id == course_id), None)


class JsonStore:
    """In-memory mirror of the JSON data file."""

    def __init__(self, path: str | Path) -> None:
        """Initialize the store and load the data file.

        Args:
            path: Location of the JSON document
        """
        self.path = Path(path)
        self._lock = asyncio.Lock()
        self._state = self.load()

    @property
    def state(self) -> StoreState:
        """Current in-memory state (read-only use)."""
        return self._state

    def load(self) -> StoreState:
        """Read the data file, or return an empty state if it does not exist.

        Raises
        ------
            StoreLoadError: If the file exists but cannot be read or parsed.
        """
        if not self.path.exists():
            logger.info(f"No data file at {self.path}, starting with an empty store")
            return StoreState()

        try:
            raw = self.path.read_text(encoding="utf-8")
            state = StoreState.model_validate_json(raw) if raw.strip() else StoreState()
        except (OSError, PydanticValidationError) as e:
            msg = f"Failed to load data file: {self.path}"
            raise StoreLoadError(msg) from e

        logger.info(
            f"Loaded {len(state.courses)} courses, {len(state.progress)} progress records "
            f"and {len(state.certificates)} certificates from {self.path}"
        )
        return state

    async def save(self, state: StoreState) -> None:
        """Overwrite the data file with the full state.

        Raises
        ------
            StoreWriteError: If the file cannot be written.
        """
        payload = state.model_dump_json(by_alias=True, indent=2)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            msg = f"Failed to write data file: {self.path}"
            raise StoreWriteError(msg) from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreState]:
        """Mutate the state under the store lock and persist it on exit.

        If the block or the write raises, the in-memory state is restored to
        what it was before the block so memory and disk stay in step.
        """
        async with self._lock:
            snapshot = self._state.model_copy(deep=True)
            try:
                yield self._state
                await self.save(self._state)
            except BaseException:
                self._state = snapshot
                raise
