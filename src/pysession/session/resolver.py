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
"""SessionResolver — decides which session id a request runs under."""

from __future__ import annotations

import logging

from pysession.session.exchange import SessionExchange
from pysession.session.ports.outbound import CookieHandler, SessionStore

logger = logging.getLogger(__name__)


class SessionResolver:
    """Resolves the session id for a request.

    * A cookie naming a live record is reused as-is. The store lookup has
      already refreshed the record's idle clock, so nothing is written.
    * Otherwise a fresh id is minted. With ``persist=True`` an empty record
      is stored and the cookie is written, so the session materializes on
      the client. With ``persist=False`` the id stays ephemeral: nothing is
      stored, and a stale cookie (one naming no live record) is cleared.
    """

    def __init__(self, store: SessionStore, cookie_handler: CookieHandler) -> None:
        self._store = store
        self._cookie_handler = cookie_handler

    async def resolve(self, exchange: SessionExchange, persist: bool = False) -> str:
        """Return the session id for ``exchange``."""
        candidate = await self._cookie_handler.read(exchange.request)
        if candidate and await self._store.get(candidate) is not None:
            return candidate

        session_id = await self._store.id()
        if persist:
            await self._store.set(session_id, {})
            await self._cookie_handler.write(exchange.response, session_id)
            logger.debug("Established new session (replaced_stale_cookie=%s)", bool(candidate))
        elif candidate:
            await self._cookie_handler.destroy(exchange.response)
            logger.debug("Cleared cookie naming an unknown or expired session")
        return session_id
