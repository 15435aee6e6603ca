"""pysession security — CSRF tokens bound to the session."""

from pysession.security.csrf import (
    CSRF_SESSION_KEY,
    CsrfTokenService,
    generate_csrf_token,
    validate_csrf_token,
)

__all__ = [
    "CSRF_SESSION_KEY",
    "CsrfTokenService",
    "generate_csrf_token",
    "validate_csrf_token",
]
