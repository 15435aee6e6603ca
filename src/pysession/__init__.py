"""pysession — server-side sessions and CSRF tokens for request/response apps."""

from pysession.security.csrf import CsrfTokenService
from pysession.session import (
    SessionExchange,
    SessionManager,
    create_session_manager,
)

__version__ = "0.1.0"

__all__ = [
    "CsrfTokenService",
    "SessionExchange",
    "SessionManager",
    "create_session_manager",
]
