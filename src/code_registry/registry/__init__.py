"""
Code Registry Storage Module.

Provides the locked in-memory code table and its snapshot persistence.
"""

__all__ = [
    "CodeRegistry",
    "ReadWriteLock",
    "decode_snapshot",
    "encode_snapshot",
    "read_snapshot",
    "write_snapshot",
]

from code_registry.registry.codec import (
    decode_snapshot,
    encode_snapshot,
    read_snapshot,
    write_snapshot,
)
from code_registry.registry.locks import ReadWriteLock
from code_registry.registry.storage import CodeRegistry
