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
"""CSRF tokens — single-use synchronizer tokens kept in the session.

A token is issued into the session under ``csrfToken`` and removed again
by the first validation attempt, whether or not that attempt matches.
"""

from __future__ import annotations

import logging
import secrets

from pysession.session.exchange import SessionExchange
from pysession.session.manager import SessionManager

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
CSRF_SESSION_KEY: str = "csrfToken"
"""Session data key holding the live CSRF token."""


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------
def generate_csrf_token() -> str:
    """Generate a cryptographically-secure CSRF token.

    Returns:
        A URL-safe base64-encoded random string (43 characters).
    """
    return secrets.token_urlsafe(32)


def validate_csrf_token(expected: object, supplied: object) -> bool:
    """Compare two tokens using a timing-safe comparison.

    Args:
        expected: The token stored in the session.
        supplied: The token presented by the client.

    Returns:
        ``True`` if both are non-empty strings and match; ``False`` otherwise.
    """
    if not isinstance(expected, str) or not isinstance(supplied, str):
        return False
    if not expected or not supplied:
        return False
    return secrets.compare_digest(expected.encode(), supplied.encode())


# ---------------------------------------------------------------------------
# Session-backed protocol
# ---------------------------------------------------------------------------
class CsrfTokenService:
    """Issues and checks single-use CSRF tokens stored in session data."""

    def __init__(self, sessions: SessionManager) -> None:
        self._sessions = sessions

    async def issue_token(self, exchange: SessionExchange) -> str:
        """Store a fresh token in the session, replacing any previous one."""
        token = generate_csrf_token()
        await self._sessions.set_session_data(exchange, {CSRF_SESSION_KEY: token})
        return token

    async def validate_token(self, exchange: SessionExchange, token: str | None) -> bool:
        """Check ``token`` against the session and consume the stored token."""
        data = await self._sessions.get_session_data(exchange)
        expected = data.pop(CSRF_SESSION_KEY, None)
        valid = validate_csrf_token(expected, token)
        await self._sessions.replace_session_data(exchange, data)
        if not valid:
            logger.debug("CSRF token rejected (token_present=%s)", expected is not None)
        return valid
