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
"""Tests for SessionManager — session data operations over a real store and cookies."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from starlette.responses import Response

from pysession.kernel.exceptions import ValidationException
from pysession.session.adapters.memory import InMemorySessionStore
from pysession.session.adapters.starlette import StarletteCookieHandler
from pysession.session.exchange import SessionExchange
from pysession.session.manager import SessionManager


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Browser:
    """Keeps the session cookie between exchanges like a client would."""

    def __init__(self, cookie_name: str = "nextSession") -> None:
        self.cookie_name = cookie_name
        self.session_id: str | None = None

    def exchange(self) -> SessionExchange:
        headers = {}
        if self.session_id is not None:
            headers["cookie"] = f"{self.cookie_name}={self.session_id}"
        return SessionExchange(SimpleNamespace(headers=headers), Response())

    def receive(self, exchange: SessionExchange) -> list[str]:
        headers = exchange.response.headers.getlist("set-cookie")
        for header in headers:
            name, _, rest = header.partition("=")
            value = rest.split(";", 1)[0].strip('"')
            if name != self.cookie_name:
                continue
            self.session_id = None if "1970" in header else value
        return headers


def _manager() -> tuple[SessionManager, InMemorySessionStore]:
    store = InMemorySessionStore()
    return SessionManager(store, StarletteCookieHandler()), store


class CountingStore(InMemorySessionStore):
    """Memory store that records which write operations ran."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    async def set(self, session_id, data):
        self.calls.append("set")
        await super().set(session_id, data)

    async def merge(self, session_id, data):
        self.calls.append("merge")
        await super().merge(session_id, data)


class CountingCookieHandler(StarletteCookieHandler):
    """Cookie handler that records which cookie operations ran."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    async def write(self, response, session_id):
        self.calls.append("write")
        await super().write(response, session_id)

    async def destroy(self, response):
        self.calls.append("destroy")
        await super().destroy(response)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


class TestGetSessionData:
    @pytest.mark.asyncio
    async def test_new_visitor_gets_empty_data_and_no_cookie(self):
        manager, store = _manager()
        browser = Browser()
        exchange = browser.exchange()
        assert await manager.get_session_data(exchange) == {}
        assert browser.receive(exchange) == []
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_returns_written_data(self):
        manager, _ = _manager()
        browser = Browser()
        exchange = browser.exchange()
        await manager.set_session_data(exchange, {"user": "alice"})
        browser.receive(exchange)

        assert await manager.get_session_data(browser.exchange()) == {"user": "alice"}

    @pytest.mark.asyncio
    async def test_stale_cookie_is_cleared_and_data_empty(self):
        manager, _ = _manager()
        browser = Browser()
        browser.session_id = "expired-or-forged"
        exchange = browser.exchange()
        assert await manager.get_session_data(exchange) == {}
        [header] = browser.receive(exchange)
        assert "1970" in header
        assert browser.session_id is None


class TestGetSessionId:
    @pytest.mark.asyncio
    async def test_stale_cookie_yields_different_id(self):
        manager, _ = _manager()
        browser = Browser()
        browser.session_id = "stale"
        exchange = browser.exchange()
        assert await manager.get_session_id(exchange) != "stale"

    @pytest.mark.asyncio
    async def test_persist_establishes_session(self):
        manager, store = _manager()
        browser = Browser()
        exchange = browser.exchange()
        session_id = await manager.get_session_id(exchange, persist=True)
        browser.receive(exchange)
        assert browser.session_id == session_id
        assert await store.get(session_id) == {}

    @pytest.mark.asyncio
    async def test_live_cookie_is_reused(self):
        manager, _ = _manager()
        browser = Browser()
        first = browser.exchange()
        session_id = await manager.get_session_id(first, persist=True)
        browser.receive(first)

        second = browser.exchange()
        assert await manager.get_session_id(second) == session_id
        assert browser.receive(second) == []


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


class TestSetSessionData:
    @pytest.mark.asyncio
    async def test_new_visitor_gets_one_cookie_and_one_merge(self):
        store, cookies = CountingStore(), CountingCookieHandler()
        manager = SessionManager(store, cookies)
        browser = Browser()
        exchange = browser.exchange()

        await manager.set_session_data(exchange, {"test": "hello"})

        assert len(browser.receive(exchange)) == 1
        assert cookies.calls == ["write"]
        assert store.calls == ["set", "merge"]
        assert await manager.get_session_data(browser.exchange()) == {"test": "hello"}

    @pytest.mark.asyncio
    async def test_merges_into_existing_data(self):
        manager, _ = _manager()
        browser = Browser()
        for payload in ({"a": 1}, {"b": 2}):
            exchange = browser.exchange()
            await manager.set_session_data(exchange, payload)
            browser.receive(exchange)
        assert await manager.get_session_data(browser.exchange()) == {"a": 1, "b": 2}

    @pytest.mark.asyncio
    async def test_existing_session_writes_no_cookie(self):
        manager, _ = _manager()
        browser = Browser()
        first = browser.exchange()
        await manager.set_session_data(first, {"a": 1})
        browser.receive(first)

        second = browser.exchange()
        await manager.set_session_data(second, {"b": 2})
        assert browser.receive(second) == []

    @pytest.mark.asyncio
    async def test_missing_data_is_rejected(self):
        manager, store = _manager()
        exchange = Browser().exchange()
        with pytest.raises(ValidationException):
            await manager.set_session_data(exchange, None)  # type: ignore[arg-type]
        assert len(store) == 0
        assert exchange.response.headers.getlist("set-cookie") == []

    @pytest.mark.asyncio
    async def test_non_mapping_data_is_rejected(self):
        manager, _ = _manager()
        with pytest.raises(ValidationException):
            await manager.set_session_data(Browser().exchange(), ["a", "b"])  # type: ignore[arg-type]


class TestReplaceSessionData:
    @pytest.mark.asyncio
    async def test_replaces_whole_record(self):
        manager, _ = _manager()
        browser = Browser()
        for payload in ({"a": 1}, {"b": 2}):
            exchange = browser.exchange()
            await manager.replace_session_data(exchange, payload)
            browser.receive(exchange)
        assert await manager.get_session_data(browser.exchange()) == {"b": 2}

    @pytest.mark.asyncio
    async def test_empty_mapping_is_accepted(self):
        manager, _ = _manager()
        browser = Browser()
        exchange = browser.exchange()
        await manager.replace_session_data(exchange, {})
        browser.receive(exchange)
        assert browser.session_id is not None

    @pytest.mark.asyncio
    async def test_missing_data_is_rejected(self):
        manager, _ = _manager()
        with pytest.raises(ValidationException):
            await manager.replace_session_data(Browser().exchange(), None)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Pluck and destroy
# ---------------------------------------------------------------------------


class TestPluckSessionProperty:
    @pytest.mark.asyncio
    async def test_pluck_returns_value_once(self):
        manager, _ = _manager()
        browser = Browser()
        exchange = browser.exchange()
        await manager.set_session_data(exchange, {"test": "hello", "other": 1})
        browser.receive(exchange)

        assert await manager.pluck_session_property(browser.exchange(), "test") == "hello"
        assert await manager.pluck_session_property(browser.exchange(), "test") is None
        assert await manager.get_session_data(browser.exchange()) == {"other": 1}

    @pytest.mark.asyncio
    async def test_pluck_on_new_visitor_creates_nothing(self):
        manager, store = _manager()
        browser = Browser()
        exchange = browser.exchange()
        assert await manager.pluck_session_property(exchange, "test") is None
        assert browser.receive(exchange) == []
        assert len(store) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", [None, ""])
    async def test_missing_name_is_rejected(self, name):
        manager, _ = _manager()
        with pytest.raises(ValidationException):
            await manager.pluck_session_property(Browser().exchange(), name)  # type: ignore[arg-type]


class TestDestroySession:
    @pytest.mark.asyncio
    async def test_destroy_removes_record_and_clears_cookie(self):
        manager, store = _manager()
        browser = Browser()
        exchange = browser.exchange()
        await manager.set_session_data(exchange, {"user": "alice"})
        browser.receive(exchange)
        session_id = browser.session_id

        exchange = browser.exchange()
        await manager.destroy_session(exchange)
        headers = browser.receive(exchange)

        assert any("1970" in header for header in headers)
        assert await store.get(session_id) is None
        assert await manager.get_session_data(browser.exchange()) == {}

    @pytest.mark.asyncio
    async def test_destroy_without_session_still_clears_cookie(self):
        manager, _ = _manager()
        exchange = Browser().exchange()
        await manager.destroy_session(exchange)
        [header] = exchange.response.headers.getlist("set-cookie")
        assert "1970" in header


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_context_manager_runs_store_sweep(self):
        store = InMemorySessionStore(sweep_interval=0.01)
        async with SessionManager(store, StarletteCookieHandler()) as manager:
            assert manager.store is store
            assert store.running is True
        assert store.running is False

    @pytest.mark.asyncio
    async def test_store_without_lifecycle_is_left_alone(self):
        store = SimpleNamespace(
            id=AsyncMock(), get=AsyncMock(), set=AsyncMock(), merge=AsyncMock(), destroy=AsyncMock()
        )
        manager = SessionManager(store, StarletteCookieHandler())
        await manager.start()
        await manager.stop()
