"""
Snapshot codec - whole-table serialization for the registry file.

The snapshot is one JSON object mapping decimal id to record:

    {"0": {"code": 0, "deleted": false, "title": "...", "description": "...",
           "created": 1700000000123456789, "created_ip": "10.0.0.1",
           "modified": 1700000000123456789, "modified_ip": "10.0.0.1"}}

There is no version field; changing the record shape breaks old snapshots.
"""

import json
import os
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from code_registry.core.exceptions import SnapshotDecodeError, SnapshotEncodeError
from code_registry.core.models import MessageCode

_TABLE_ADAPTER = TypeAdapter(dict[int, MessageCode])


def encode_snapshot(table: dict[int, MessageCode]) -> bytes:
    """
    Serialize the whole table.

    Raises:
        SnapshotEncodeError: If any record cannot be serialized
    """
    try:
        return _TABLE_ADAPTER.dump_json(table, indent=2)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise SnapshotEncodeError(f"Failed to encode registry snapshot: {e}") from e


def decode_snapshot(payload: bytes, *, source: str | None = None) -> dict[int, MessageCode]:
    """
    Deserialize a snapshot produced by encode_snapshot.

    Ids must be exactly 0..N-1 and every record's code must match its key.

    Raises:
        SnapshotDecodeError: If the payload is malformed or breaks the id invariant
    """
    try:
        raw = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SnapshotDecodeError(f"Snapshot is not valid JSON: {e}", path=source) from e

    if not isinstance(raw, dict):
        raise SnapshotDecodeError("Snapshot root must be an object", path=source)

    try:
        table = _TABLE_ADAPTER.validate_python(raw)
    except PydanticValidationError as e:
        raise SnapshotDecodeError(
            f"Snapshot failed validation: {e.error_count()} error(s)",
            path=source,
            details={"errors": e.errors(include_url=False)[:5]},
        ) from e

    if sorted(table) != list(range(len(table))):
        raise SnapshotDecodeError("Snapshot ids are not dense from 0", path=source)
    for key, record in table.items():
        if record.code != key:
            raise SnapshotDecodeError(
                f"Snapshot key {key} holds record with code {record.code}",
                path=source,
            )

    return dict(sorted(table.items()))


def read_snapshot(path: Path) -> dict[int, MessageCode] | None:
    """
    Load a snapshot file.

    Returns:
        The decoded table, or None when the file does not exist

    Raises:
        SnapshotDecodeError: If the file exists but cannot be read or decoded
    """
    try:
        payload = path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise SnapshotDecodeError(f"Cannot read snapshot: {e}", path=str(path)) from e
    return decode_snapshot(payload, source=str(path))


def write_snapshot(path: Path, payload: bytes) -> None:
    """Persist payload to path atomically using write-replace pattern."""
    temp_path = path.with_name(f"{path.name}.tmp")

    try:
        # Write to temporary file in same directory
        with open(temp_path, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())

        # Atomic replace operation
        os.replace(temp_path, path)
    except Exception:
        # Clean up temp file on any exception
        temp_path.unlink(missing_ok=True)
        raise
