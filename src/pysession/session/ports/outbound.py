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
"""Session store and cookie handler protocols."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionStore(Protocol):
    """Abstract session persistence interface.

    All session backends (in-memory, Redis, etc.) must implement this protocol.
    A missing or expired record is reported as ``None`` from :meth:`get`,
    never as an exception. Every successful ``get``, ``set`` and ``merge``
    restarts the record's idle-expiry clock.
    """

    async def id(self) -> str:
        """Return a fresh random session identifier without touching stored keys."""
        ...

    async def get(self, session_id: str) -> dict[str, Any] | None: ...

    async def set(self, session_id: str, data: dict[str, Any]) -> None: ...

    async def merge(self, session_id: str, data: dict[str, Any]) -> None: ...

    async def destroy(self, session_id: str) -> None: ...


@runtime_checkable
class CookieHandler(Protocol):
    """Reads, writes and clears the cookie carrying the session id.

    Implementations never consult a :class:`SessionStore`.
    """

    async def read(self, request: Any) -> str | None: ...

    async def write(self, response: Any, session_id: str) -> None: ...

    async def destroy(self, response: Any) -> None: ...
