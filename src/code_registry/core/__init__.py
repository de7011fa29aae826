"""
Code Registry Core Module.

Provides the message code model and the exception hierarchy.
"""

__all__ = [
    "MessageCode",
    "parse_address",
    # Exceptions
    "CodeRegistryError",
    "ConfigurationError",
    "RegistryError",
    "CodeNotFoundError",
    "InvalidCodeError",
    "SnapshotWriteError",
    "FatalRegistryError",
    "SnapshotDecodeError",
    "SnapshotEncodeError",
]

from code_registry.core.exceptions import (
    CodeNotFoundError,
    CodeRegistryError,
    ConfigurationError,
    FatalRegistryError,
    InvalidCodeError,
    RegistryError,
    SnapshotDecodeError,
    SnapshotEncodeError,
    SnapshotWriteError,
)
from code_registry.core.models import MessageCode, parse_address
