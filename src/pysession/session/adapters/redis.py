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
"""Redis-backed session store."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, cast

from pysession.kernel.exceptions import ValidationException

_logger = logging.getLogger(__name__)

_DEFAULT_KEY_PREFIX = "sess_"
_DEFAULT_MAX_AGE = 1800


class RedisSessionStore:
    """Session store backed by ``redis.asyncio``.

    Values are JSON-serialized before storage and written with an expiry of
    ``max_age`` seconds. A read hit pushes the expiry forward, so Redis
    itself takes care of idle sessions and no sweep task is needed.
    Keys are prefixed with ``sess_`` by default for namespace isolation.
    """

    def __init__(
        self,
        client: Any,
        max_age: int = _DEFAULT_MAX_AGE,
        key_prefix: str = _DEFAULT_KEY_PREFIX,
    ) -> None:
        self._client = client
        self._max_age = int(max_age)
        self._key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> RedisSessionStore:
        """Build a store from a ``redis://host:port/db`` URL."""
        import redis.asyncio as aioredis

        client = aioredis.from_url(url)  # type: ignore[no-untyped-call,unused-ignore]
        return cls(client=client, **kwargs)

    def _key(self, session_id: str) -> str:
        if not session_id:
            raise ValidationException("A session id is required", code="SESSION_ID_MISSING")
        return f"{self._key_prefix}{session_id}"

    async def id(self) -> str:
        """Return a random UUID4 string."""
        return str(uuid.uuid4())

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Retrieve and deserialize session data, refreshing its expiry."""
        key = self._key(session_id)
        data = await self._load(key)
        if data is not None:
            await self._client.expire(key, self._max_age)
        return data

    async def set(self, session_id: str, data: dict[str, Any]) -> None:
        """Serialize and store session data, replacing any previous value."""
        await self._save(self._key(session_id), data)

    async def merge(self, session_id: str, data: dict[str, Any]) -> None:
        """Shallow-merge ``data`` into the stored value (read, then write)."""
        key = self._key(session_id)
        current = await self._load(key) or {}
        await self._save(key, {**current, **data})

    async def destroy(self, session_id: str) -> None:
        """Remove a session."""
        await self._client.delete(self._key(session_id))

    async def start(self) -> None:
        """No-op -- the client connects lazily on first command."""

    async def stop(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def _load(self, key: str) -> dict[str, Any] | None:
        raw = await self._client.get(key)
        if raw is None:
            return None
        try:
            return cast(dict[str, Any], json.loads(raw))
        except (json.JSONDecodeError, TypeError):
            _logger.warning("Failed to deserialize stored session payload; treating it as absent")
            return None

    async def _save(self, key: str, data: dict[str, Any]) -> None:
        raw = json.dumps(data)
        await self._client.set(key, raw.encode(), ex=self._max_age)
