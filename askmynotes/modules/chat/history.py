"""Fire-and-forget persistence of answered questions."""

import asyncio
from functools import lru_cache
from typing import Any, Dict, Set

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...infrastructure.database.session import local_session
from ...infrastructure.logging import get_logger
from ..store.sql import SQLNoteStore

logger = get_logger(__name__)


class HistoryRecorder:
    """Records chat history in background tasks.

    A write never delays or fails the answer it belongs to: each one runs in
    its own task with its own session, and failures are only logged.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory
        self._pending: Set[asyncio.Task] = set()

    def record(self, owner_id: str, subject_id: str, question: str, response: Dict[str, Any]) -> asyncio.Task:
        """Schedule a history write and return immediately."""
        task = asyncio.create_task(self._write(owner_id, subject_id, question, response))
        # The loop keeps only weak references to tasks
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _write(self, owner_id: str, subject_id: str, question: str, response: Dict[str, Any]) -> None:
        try:
            async with self.session_factory() as db:
                await SQLNoteStore(db).add_chat_history(owner_id, subject_id, question, response)
        except Exception as e:
            logger.error(
                f"Failed to record chat history: {e}",
                extra={"owner_id": owner_id, "subject_id": subject_id},
                exc_info=True,
            )

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every scheduled write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


@lru_cache()
def get_history_recorder() -> HistoryRecorder:
    """Get the process-wide history recorder."""
    return HistoryRecorder(local_session)
