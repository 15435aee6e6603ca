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
"""SessionManager — session data operations for a single configured store."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pysession.kernel.exceptions import ValidationException
from pysession.kernel.lifecycle import Lifecycle
from pysession.session.exchange import SessionExchange
from pysession.session.ports.outbound import CookieHandler, SessionStore
from pysession.session.resolver import SessionResolver

logger = logging.getLogger(__name__)


def _require_data(data: Mapping[str, Any] | None) -> dict[str, Any]:
    if data is None:
        raise ValidationException("No session data given", code="SESSION_DATA_MISSING")
    if not isinstance(data, Mapping):
        raise ValidationException(
            "Session data must be a mapping",
            code="SESSION_DATA_INVALID",
            context={"type": type(data).__name__},
        )
    return dict(data)


class SessionManager:
    """Bundles a session store and a cookie handler.

    Create one per process and pass it to request handlers. Read-only
    operations never create a session on the client; only writes do.

    Usage::

        manager = SessionManager(InMemorySessionStore(), StarletteCookieHandler())
        async with manager:
            exchange = SessionExchange(request, response)
            await manager.set_session_data(exchange, {"user": "alice"})
    """

    def __init__(self, store: SessionStore, cookie_handler: CookieHandler) -> None:
        self._store = store
        self._cookie_handler = cookie_handler
        self._resolver = SessionResolver(store, cookie_handler)

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def cookie_handler(self) -> CookieHandler:
        return self._cookie_handler

    async def start(self) -> None:
        """Start the store's background work, if it has any."""
        if isinstance(self._store, Lifecycle):
            await self._store.start()

    async def stop(self) -> None:
        """Stop the store's background work and release its resources."""
        if isinstance(self._store, Lifecycle):
            await self._store.stop()

    async def __aenter__(self) -> SessionManager:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()

    async def get_session_id(self, exchange: SessionExchange, persist: bool = False) -> str:
        """Resolve the session id for ``exchange`` (see :class:`SessionResolver`)."""
        return await self._resolver.resolve(exchange, persist=persist)

    async def get_session_data(self, exchange: SessionExchange) -> dict[str, Any]:
        """Return the session data, or ``{}`` when there is no live session."""
        session_id = await self._resolver.resolve(exchange)
        return await self._store.get(session_id) or {}

    async def replace_session_data(self, exchange: SessionExchange, data: Mapping[str, Any]) -> None:
        """Overwrite the whole session with ``data``, establishing the session if needed."""
        payload = _require_data(data)
        session_id = await self._resolver.resolve(exchange, persist=True)
        await self._store.set(session_id, payload)

    async def set_session_data(self, exchange: SessionExchange, data: Mapping[str, Any]) -> None:
        """Merge ``data`` into the session, establishing the session if needed."""
        payload = _require_data(data)
        session_id = await self._resolver.resolve(exchange, persist=True)
        await self._store.merge(session_id, payload)

    async def pluck_session_property(self, exchange: SessionExchange, name: str) -> Any | None:
        """Remove ``name`` from the session and return its value.

        Returns ``None`` without writing anything when the property is absent.
        """
        if not name:
            raise ValidationException("No property name given", code="SESSION_PROPERTY_MISSING")
        data = await self.get_session_data(exchange)
        if name not in data:
            return None
        value = data.pop(name)
        await self.replace_session_data(exchange, data)
        return value

    async def destroy_session(self, exchange: SessionExchange) -> None:
        """Delete the server-side record and clear the client's cookie."""
        session_id = await self._resolver.resolve(exchange)
        await self._store.destroy(session_id)
        await self._cookie_handler.destroy(exchange.response)
        logger.debug("Session destroyed")
