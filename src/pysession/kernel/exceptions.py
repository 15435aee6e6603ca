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
"""Exception hierarchy for pysession.

All library exceptions inherit from PySessionException, so callers can
catch one type for every error raised by the session layer.

Categories:
- BusinessException: caller-input errors (missing data, missing names)
- InfrastructureException: store wiring and backend configuration failures

Absence (no cookie, no record, no property) is never an exception.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class PySessionException(Exception):
    """Base exception for all pysession errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "SESSION_DATA_MISSING").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(PySessionException):
    """Errors caused by the calling code rather than the environment."""


class ValidationException(BusinessException):
    """Input validation failures."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(PySessionException):
    """Infrastructure failures: store backends, connections, wiring."""


class SessionStoreException(InfrastructureException):
    """A session store could not be selected or constructed."""
