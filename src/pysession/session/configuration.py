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
"""Build session components from configuration."""

from __future__ import annotations

import structlog

from pysession.config.auto import AutoConfiguration
from pysession.config.properties.session import SessionProperties
from pysession.core.config import Config
from pysession.kernel.exceptions import SessionStoreException
from pysession.session.adapters.memory import InMemorySessionStore
from pysession.session.adapters.starlette import StarletteCookieHandler
from pysession.session.manager import SessionManager
from pysession.session.ports.outbound import CookieHandler, SessionStore

logger = structlog.get_logger("pysession.session.configuration")


def _properties(config: Config | SessionProperties | None) -> SessionProperties:
    if isinstance(config, SessionProperties):
        return config
    return (config or Config.from_sources(".")).bind(SessionProperties)


def create_session_store(config: Config | SessionProperties | None = None) -> SessionStore:
    """Create the session store selected by ``pysession.session.store``."""
    props = _properties(config)
    store_type = props.store
    if store_type == "auto":
        store_type = AutoConfiguration.detect_session_store()

    if store_type == "redis":
        if not AutoConfiguration.is_available("redis.asyncio"):
            raise SessionStoreException(
                "Session store 'redis' requires the 'redis' package",
                code="SESSION_STORE_UNAVAILABLE",
                context={"store": "redis"},
            )
        from pysession.session.adapters.redis import RedisSessionStore

        logger.info("session_store_selected", store="redis", max_age=props.max_age)
        return RedisSessionStore.from_url(
            props.redis_url,
            max_age=props.max_age,
            key_prefix=props.key_prefix,
        )

    logger.info("session_store_selected", store="memory", max_age=props.max_age)
    return InMemorySessionStore(max_age=props.max_age, sweep_interval=props.sweep_interval)


def create_cookie_handler(config: Config | SessionProperties | None = None) -> CookieHandler:
    """Create the cookie handler from the ``pysession.session.*`` cookie options."""
    props = _properties(config)
    return StarletteCookieHandler(
        props.cookie_name,
        http_only=props.http_only,
        same_site=props.same_site,
        path=props.path,
        secure=props.secure,
    )


def create_session_manager(config: Config | SessionProperties | None = None) -> SessionManager:
    """Create a :class:`SessionManager` with the configured store and cookie handler.

    Without an explicit config, ``pysession.yaml`` / ``pysession.toml`` in the
    working directory (and the library defaults) are used.
    """
    props = _properties(config)
    return SessionManager(create_session_store(props), create_cookie_handler(props))
