"""Object records and commit snapshots.

A commit freezes a copy of the staging area at creation time. Its identity
is derived from the creation timestamp and the message only, so two commits
with different content share an identity if both of those coincide.
"""

import copy
import hashlib
from datetime import datetime
from typing import Any, Iterable, Optional, Tuple

from memvcs.constants import HASH_ALGORITHM, LOG_DATE_FORMAT


class ObjectRecord:
    """A named value tracked by a branch.

    Attributes:
        name: Object name (unique within one staging set or snapshot)
        value: Arbitrary Python value
    """

    __slots__ = ("name", "value")

    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectRecord):
            return NotImplemented
        return self.name == other.name and self.value == other.value

    def __repr__(self) -> str:
        return f"ObjectRecord(name={self.name!r}, value={self.value!r})"


def copy_records(records: Iterable[ObjectRecord]) -> list:
    """Deep-copy a sequence of object records into a new list."""
    return [copy.deepcopy(record) for record in records]


class Commit:
    """Immutable snapshot of a staging area.

    Use :meth:`Commit.create` to build a commit; it takes a deep copy of the
    given objects so later staging mutations never reach the snapshot.

    Attributes:
        message: Commit message
        timestamp: Aware datetime of creation
        objects: Tuple of snapshotted ObjectRecords
        hash: Hex digest identifying the commit
    """

    __slots__ = ("_message", "_timestamp", "_objects", "_hash")

    def __init__(
        self,
        message: str,
        timestamp: datetime,
        objects: Tuple[ObjectRecord, ...],
    ) -> None:
        """Initialize Commit.

        Args:
            message: Commit message
            timestamp: Creation time (should be timezone-aware)
            objects: Snapshot records, already copied by the caller
        """
        self._message = message
        self._timestamp = timestamp
        self._objects = tuple(objects)
        self._hash = self._compute_hash(timestamp, message)

    @classmethod
    def create(
        cls,
        message: str,
        objects: Iterable[ObjectRecord],
        timestamp: Optional[datetime] = None,
    ) -> "Commit":
        """Create a commit from the given staging records.

        Args:
            message: Commit message
            objects: Records to snapshot (deep-copied)
            timestamp: Creation time, defaults to the current local time

        Returns:
            New Commit instance
        """
        if timestamp is None:
            timestamp = datetime.now().astimezone()
        return cls(message, timestamp, tuple(copy_records(objects)))

    @property
    def message(self) -> str:
        return self._message

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def objects(self) -> Tuple[ObjectRecord, ...]:
        return self._objects

    @property
    def hash(self) -> str:
        return self._hash

    def find(self, name: str) -> Optional[ObjectRecord]:
        """Return the snapshotted record called ``name``, or None."""
        for record in self._objects:
            if record.name == name:
                return record
        return None

    def format_date(self) -> str:
        """Render the timestamp the way ``log`` shows it."""
        return self._timestamp.strftime(LOG_DATE_FORMAT)

    def summary(self) -> dict:
        """Return a log entry dictionary for this commit."""
        return {
            "hash": self._hash,
            "date": self.format_date(),
            "message": self._message,
        }

    @staticmethod
    def _compute_hash(timestamp: datetime, message: str) -> str:
        """Compute the commit identity from timestamp and message.

        Args:
            timestamp: Creation time
            message: Commit message

        Returns:
            Hex digest string
        """
        hasher = hashlib.new(HASH_ALGORITHM)
        hasher.update(f"{timestamp.isoformat()}{message}".encode("utf-8"))
        return hasher.hexdigest()

    def __repr__(self) -> str:
        return f"Commit(hash={self._hash[:7]!r}, message={self._message!r})"
