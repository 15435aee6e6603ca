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
"""Starlette cookie handler — carries the session id in a response cookie."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from starlette.requests import cookie_parser

_DEFAULT_COOKIE_NAME = "nextSession"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

SameSite = Literal["lax", "strict", "none"]


def normalize_same_site(value: bool | str | None) -> SameSite | None:
    """Map the configured SameSite option to a cookie attribute value.

    ``True`` means ``strict`` and ``False`` / ``None`` omits the attribute.
    """
    if value is None or value is False:
        return None
    if value is True:
        return "strict"
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes"):
        return "strict"
    if lowered in ("false", "0", "no", ""):
        return None
    if lowered not in ("lax", "strict", "none"):
        raise ValueError(f"Unsupported SameSite value: {value!r}")
    return lowered  # type: ignore[return-value]


class StarletteCookieHandler:
    """Reads the session id from the ``Cookie`` header and writes it back
    through ``response.set_cookie``.

    The request only needs a ``headers`` mapping and the response only needs
    Starlette's ``set_cookie`` signature, so plain Starlette ``Request`` /
    ``Response`` objects work as carriers. Written cookies carry no expiry
    and live for the browser session.
    """

    def __init__(
        self,
        cookie_name: str = _DEFAULT_COOKIE_NAME,
        *,
        http_only: bool = True,
        same_site: bool | str | None = True,
        path: str = "/",
        secure: bool = False,
    ) -> None:
        self._cookie_name = cookie_name
        self._http_only = http_only
        self._same_site = normalize_same_site(same_site)
        self._path = path
        self._secure = secure

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    async def read(self, request: Any) -> str | None:
        """Return the session id from the request's cookie header, if any."""
        headers = getattr(request, "headers", None)
        if not headers:
            return None
        header = headers.get("cookie")
        if not header:
            return None
        return cookie_parser(header).get(self._cookie_name) or None

    async def write(self, response: Any, session_id: str) -> None:
        """Attach a session-lifetime cookie holding ``session_id``."""
        self._set_cookie(response, session_id)

    async def destroy(self, response: Any) -> None:
        """Attach an empty cookie that expired at the Unix epoch."""
        self._set_cookie(response, "", expires=_EPOCH)

    def _set_cookie(self, response: Any, value: str, expires: datetime | None = None) -> None:
        response.set_cookie(
            key=self._cookie_name,
            value=value,
            expires=expires,
            path=self._path,
            secure=self._secure,
            httponly=self._http_only,
            samesite=self._same_site,
        )
