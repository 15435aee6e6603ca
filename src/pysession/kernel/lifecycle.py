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
"""Lifecycle protocol for components that own background work or connections."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Lifecycle(Protocol):
    """Standard lifecycle for session infrastructure.

    Stores that own a sweep task or a connection pool implement this
    protocol. ``SessionManager`` calls ``start()`` when entered and
    ``stop()`` when exited.
    """

    async def start(self) -> None:
        """Acquire resources and launch background work."""
        ...

    async def stop(self) -> None:
        """Cancel background work and release resources.

        Must be safe to call more than once and before ``start()``.
        """
        ...
