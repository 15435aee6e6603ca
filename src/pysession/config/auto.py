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
"""Provider detection for optional session backends."""

from __future__ import annotations

import importlib

import structlog

logger = structlog.get_logger("pysession.config.auto")


class AutoConfiguration:
    """Detect available infrastructure providers by checking importable packages."""

    @staticmethod
    def is_available(module_name: str) -> bool:
        """Check if a Python package is importable."""
        try:
            importlib.import_module(module_name)
            return True
        except ImportError:
            return False

    @staticmethod
    def detect_session_store() -> str:
        """Detect the best available session store provider."""
        if AutoConfiguration.is_available("redis.asyncio"):
            logger.debug("session_store_detected", provider="redis")
            return "redis"
        return "memory"
