# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""In-memory session store with sliding idle expiry and a background sweep."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pysession.kernel.exceptions import ValidationException

logger = logging.getLogger(__name__)

_DEFAULT_MAX_AGE = 1800  # 30 minutes
_DEFAULT_SWEEP_INTERVAL = 10.0


@dataclass
class _SessionRecord:
    data: dict[str, Any]
    last_touched: float


def _require_id(session_id: str) -> None:
    if not session_id:
        raise ValidationException("A session id is required", code="SESSION_ID_MISSING")


class InMemorySessionStore:
    """In-memory session store with TTL support and asyncio.Lock for safety.

    A record expires once it has been idle for longer than ``max_age``
    seconds. Expired records are dropped lazily by :meth:`get` and
    eagerly by a sweep task that runs every ``sweep_interval`` seconds
    between :meth:`start` and :meth:`stop`.

    Suitable for development, testing, and single-process applications.
    """

    def __init__(
        self,
        max_age: float = _DEFAULT_MAX_AGE,
        sweep_interval: float = _DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._records: dict[str, _SessionRecord] = {}
        self._lock = asyncio.Lock()
        self._max_age = max_age
        self._sweep_interval = sweep_interval
        self._clock = clock
        self._sweep_task: asyncio.Task[None] | None = None

    @property
    def max_age(self) -> float:
        return self._max_age

    @property
    def sweep_interval(self) -> float:
        return self._sweep_interval

    @property
    def running(self) -> bool:
        """``True`` while the background sweep task is alive."""
        return self._sweep_task is not None and not self._sweep_task.done()

    def __len__(self) -> int:
        return len(self._records)

    async def id(self) -> str:
        """Return a random UUID4 string."""
        return str(uuid.uuid4())

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Retrieve session data and refresh its idle clock.

        Returns ``None`` if the record is missing or expired.
        """
        _require_id(session_id)
        async with self._lock:
            record = self._records.get(session_id)
            if record is None:
                return None

            now = self._clock()
            if self._is_expired(record, now):
                del self._records[session_id]
                return None

            record.last_touched = now
            return dict(record.data)

    async def set(self, session_id: str, data: dict[str, Any]) -> None:
        """Create or replace the record wholesale."""
        _require_id(session_id)
        async with self._lock:
            self._records[session_id] = _SessionRecord(dict(data), self._clock())

    async def merge(self, session_id: str, data: dict[str, Any]) -> None:
        """Shallow-merge ``data`` into the record, creating it if needed."""
        _require_id(session_id)
        async with self._lock:
            now = self._clock()
            record = self._records.get(session_id)
            current = {} if record is None or self._is_expired(record, now) else record.data
            self._records[session_id] = _SessionRecord({**current, **data}, now)

    async def destroy(self, session_id: str) -> None:
        """Remove a session. Missing sessions are ignored."""
        _require_id(session_id)
        async with self._lock:
            self._records.pop(session_id, None)

    async def purge_expired(self) -> int:
        """Drop every record idle for longer than ``max_age``. Returns the count."""
        async with self._lock:
            now = self._clock()
            expired = [sid for sid, record in self._records.items() if self._is_expired(record, now)]
            for sid in expired:
                del self._records[sid]
        if expired:
            logger.debug("Swept %d expired session(s)", len(expired))
        return len(expired)

    async def start(self) -> None:
        """Launch the background sweep task. No-op if already running."""
        if self.running:
            return
        self._sweep_task = asyncio.create_task(self._run_sweep_loop())
        self._sweep_task.add_done_callback(self._sweep_done_callback)
        logger.info("Session sweep started (interval=%ss, max_age=%ss)", self._sweep_interval, self._max_age)

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        logger.info("Session sweep stopped")

    def _is_expired(self, record: _SessionRecord, now: float) -> bool:
        return now - record.last_touched > self._max_age

    async def _run_sweep_loop(self) -> None:
        """Loop: sleep for the interval, sweep, repeat until cancelled."""
        while True:
            await asyncio.sleep(self._sweep_interval)
            try:
                await self.purge_expired()
            except Exception:
                logger.exception("Session sweep failed")

    @staticmethod
    def _sweep_done_callback(task: asyncio.Task[None]) -> None:
        if not task.cancelled():
            exc = task.exception()
            if exc is not None:
                logger.error("Session sweep task failed: %s", exc, exc_info=exc)
