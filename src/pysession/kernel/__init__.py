"""pysession kernel — exceptions and lifecycle, no external dependencies."""

from pysession.kernel.exceptions import (
    BusinessException,
    InfrastructureException,
    PySessionException,
    SessionStoreException,
    ValidationException,
)
from pysession.kernel.lifecycle import Lifecycle

__all__ = [
    # Lifecycle
    "Lifecycle",
    # Base
    "PySessionException",
    # Business
    "BusinessException",
    "ValidationException",
    # Infrastructure
    "InfrastructureException",
    "SessionStoreException",
]
