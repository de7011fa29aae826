"""
Registry Storage - the message code table and its snapshot file.

Every mutation is applied and written to disk under one exclusive lock,
so the file always reflects a whole number of completed mutations.
"""

import logging
import time
from pathlib import Path
from typing import Callable

from code_registry.core.exceptions import (
    CodeNotFoundError,
    InvalidCodeError,
    SnapshotWriteError,
)
from code_registry.core.models import IPAddress, MessageCode
from code_registry.registry.codec import encode_snapshot, read_snapshot, write_snapshot
from code_registry.registry.locks import ReadWriteLock

logger = logging.getLogger(__name__)


def _check_title(title: str, code_id: int | None, operation: str) -> None:
    # An empty title would be written out but rejected on the next load
    if not title:
        raise InvalidCodeError(
            "Message code title must not be empty", code_id=code_id, operation=operation
        )


class CodeRegistry:
    """
    Registry of message codes backed by a single snapshot file.

    Ids are dense: a new code gets the current table size as its id, and
    codes are never removed, only flagged as deleted. The table is never
    compacted, so an id stays valid for the life of the snapshot.

    Reads share the lock; add/modify/set_deleted hold it exclusively across
    both the table change and the snapshot write. Records handed out are
    copies, so callers never observe later mutations.
    """

    DEFAULT_SNAPSHOT = "codes.json"

    def __init__(
        self,
        snapshot_path: Path | None = None,
        *,
        clock: Callable[[], int] = time.time_ns,
    ):
        """
        Initialize an empty registry.

        Args:
            snapshot_path: File the table is persisted to
            clock: Source of the current time in nanoseconds since the epoch
        """
        self._snapshot_path = snapshot_path or Path(self.DEFAULT_SNAPSHOT)
        self._clock = clock
        self._codes: dict[int, MessageCode] = {}
        self._lock = ReadWriteLock()
        self._loaded = False

    @property
    def snapshot_path(self) -> Path:
        return self._snapshot_path

    @property
    def loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._codes)

    def load(self) -> None:
        """
        Replace the table with the contents of the snapshot file.

        A missing file leaves the table empty.

        Raises:
            SnapshotDecodeError: If the file exists but cannot be decoded
        """
        with self._lock.write_locked():
            table = read_snapshot(self._snapshot_path)
            if table is None:
                logger.info(f"No existing snapshot at {self._snapshot_path}, starting from scratch")
                self._codes = {}
            else:
                self._codes = table
                logger.info(f"Loaded {len(table)} message codes from {self._snapshot_path}")
            self._loaded = True

    def add(
        self, title: str, description: str, source_addr: IPAddress | None
    ) -> MessageCode:
        """
        Create a new message code with the next free id.

        Raises:
            InvalidCodeError: If the title is empty
            SnapshotWriteError: If the snapshot file could not be written
            SnapshotEncodeError: If the table could not be serialized (fatal)
        """
        _check_title(title, None, "add")
        with self._lock.write_locked():
            now = self._clock()
            code = MessageCode(
                code=len(self._codes),
                deleted=False,
                title=title,
                description=description,
                created=now,
                created_ip=source_addr,
                modified=now,
                modified_ip=source_addr,
            )
            self._codes[code.code] = code
            self._persist(code.code, "add")
            logger.info(f"Added message code {code.code} from {source_addr}")
            return code.model_copy()

    def modify(
        self,
        code_id: int,
        title: str,
        description: str,
        source_addr: IPAddress | None,
    ) -> MessageCode:
        """
        Overwrite the title and description of an existing code.

        The deleted flag and creation metadata are left untouched.

        Raises:
            CodeNotFoundError: If code_id is not in the table
            InvalidCodeError: If the title is empty
            SnapshotWriteError: If the snapshot file could not be written
            SnapshotEncodeError: If the table could not be serialized (fatal)
        """
        with self._lock.write_locked():
            code = self._require(code_id, "modify")
            _check_title(title, code_id, "modify")
            code.title = title
            code.description = description
            code.touch(self._clock(), source_addr)
            self._persist(code_id, "modify")
            logger.info(f"Modified message code {code_id} from {source_addr}")
            return code.model_copy()

    def set_deleted(
        self, code_id: int, deleted: bool, source_addr: IPAddress | None
    ) -> MessageCode:
        """
        Set or clear the soft-delete flag of a code.

        The modification stamp is updated like any other change.

        Raises:
            CodeNotFoundError: If code_id is not in the table
            SnapshotWriteError: If the snapshot file could not be written
            SnapshotEncodeError: If the table could not be serialized (fatal)
        """
        with self._lock.write_locked():
            code = self._require(code_id, "set_deleted")
            code.deleted = deleted
            code.touch(self._clock(), source_addr)
            self._persist(code_id, "set_deleted")
            logger.info(
                f"{'Deleted' if deleted else 'Undeleted'} message code {code_id} from {source_addr}"
            )
            return code.model_copy()

    def get(self, code_id: int) -> MessageCode:
        """
        Return a copy of one code.

        Raises:
            CodeNotFoundError: If code_id is not in the table
        """
        with self._lock.read_locked():
            return self._require(code_id, "read").model_copy()

    def list_codes(self) -> list[MessageCode]:
        """Return copies of all codes in ascending id order, deleted ones included."""
        with self._lock.read_locked():
            return [self._codes[i].model_copy() for i in range(len(self._codes))]

    def _require(self, code_id: int, operation: str) -> MessageCode:
        code = self._codes.get(code_id)
        if code is None:
            raise CodeNotFoundError(
                f"Message code {code_id} not found",
                code_id=code_id,
                operation=operation,
            )
        return code

    def _persist(self, code_id: int, operation: str) -> None:
        """Write the whole table to the snapshot file. Caller holds the write lock."""
        # Encode failures propagate as SnapshotEncodeError before the file is touched
        payload = encode_snapshot(self._codes)
        try:
            write_snapshot(self._snapshot_path, payload)
        except OSError as e:
            logger.error(
                f"Failed to write snapshot {self._snapshot_path} during {operation} "
                f"of code {code_id}: {e}"
            )
            raise SnapshotWriteError(
                f"Could not write registry snapshot: {e}",
                path=str(self._snapshot_path),
                code_id=code_id,
                operation=operation,
            ) from e
        logger.debug(f"Wrote {len(self._codes)} codes to {self._snapshot_path}")
