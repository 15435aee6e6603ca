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
"""Session subsystem configuration properties."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from pysession.core.config import config_properties


@config_properties(prefix="pysession.session")
class SessionProperties(BaseModel):
    """Configuration for session storage and the session cookie (pysession.session.*)."""

    store: Literal["memory", "redis", "auto"] = "memory"
    cookie_name: str = Field(default="nextSession", min_length=1)
    http_only: bool = True
    same_site: bool | str = True
    path: str = "/"
    secure: bool = False
    max_age: int = Field(default=1800, ge=1)
    sweep_interval: float = Field(default=10.0, gt=0)
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "sess_"
