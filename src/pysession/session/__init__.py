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
"""pysession session — server-side session identity and session data.

Import concrete store types from the adapter package::

    from pysession.session.adapters.memory import InMemorySessionStore
    from pysession.session.adapters.redis import RedisSessionStore
"""

from pysession.session.adapters.starlette import StarletteCookieHandler
from pysession.session.configuration import (
    create_cookie_handler,
    create_session_manager,
    create_session_store,
)
from pysession.session.exchange import SessionExchange
from pysession.session.manager import SessionManager
from pysession.session.ports.outbound import CookieHandler, SessionStore
from pysession.session.resolver import SessionResolver

__all__ = [
    "CookieHandler",
    "SessionExchange",
    "SessionManager",
    "SessionResolver",
    "SessionStore",
    "StarletteCookieHandler",
    "create_cookie_handler",
    "create_session_manager",
    "create_session_store",
]
