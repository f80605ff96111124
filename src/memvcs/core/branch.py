"""Branch state machine.

A branch owns an append-only commit history, a mutable staging set and a
head pointer. The head is ``None`` only while the history is empty; after a
commit checkout it may point at any earlier commit (a detached view).

Every command returns an :class:`OperationResult`; domain failures are
reported through ``success=False`` and never raised.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple

from memvcs.constants import LOG_ENTRY_FORMAT, LOG_ENTRY_SEPARATOR
from memvcs.core.history import History
from memvcs.core.models import Commit, ObjectRecord, copy_records
from memvcs.core.result import OperationResult, Receiver

if TYPE_CHECKING:
    from memvcs.core.repository import Repository

logger = logging.getLogger(__name__)


class Branch:
    """Named line of development.

    Attributes:
        name: Branch name
        history: Commits in chronological order
        staging: Records pending inclusion in the next commit
        current: Commit the branch regards as current (head), or None
        pending_changes: Staged add/remove operations since the last commit
    """

    def __init__(
        self,
        name: str,
        history: Optional[History] = None,
        repository: Optional["Repository"] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Initialize Branch.

        The head starts at the latest commit of ``history`` and the staging
        set is seeded with a copy of its objects.

        Args:
            name: Branch name
            history: History to start from (empty if omitted)
            repository: Owning repository, used as the chaining target
            clock: Callable returning the current aware datetime
        """
        self._name = name
        self._history = history if history is not None else History()
        self._repository = repository
        self._clock = clock
        self._head: Optional[Commit] = self._history.latest()
        self._staging: list = self._seed_staging(self._head)
        self._pending_changes = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def history(self) -> Tuple[Commit, ...]:
        return self._history.commits

    @property
    def staging(self) -> Tuple[ObjectRecord, ...]:
        return tuple(self._staging)

    @property
    def current(self) -> Optional[Commit]:
        return self._head

    @property
    def pending_changes(self) -> int:
        return self._pending_changes

    @property
    def is_detached(self) -> bool:
        """True if head points at an earlier commit than the latest one."""
        return self._head is not None and self._head is not self._history.latest()

    def fork(self, name: str) -> "Branch":
        """Create a new branch sharing this branch's history so far."""
        return Branch(
            name,
            history=self._history.fork(),
            repository=self._repository,
            clock=self._clock,
        )

    # ---- staging ----

    def add(self, name: str, value: Any) -> OperationResult:
        """Stage ``value`` under ``name``, replacing any staged record.

        Args:
            name: Object name
            value: Object value

        Returns:
            Successful result with the stored value as payload
        """
        index = self._index_of(name)
        record = ObjectRecord(name, value)
        if index is None:
            self._staging.append(record)
        else:
            self._staging[index] = record
        self._pending_changes += 1
        logger.debug("Staged %s on branch %s", name, self._name)
        return self._result(True, f"Added {name} to stage.", Receiver.REPOSITORY, value)

    def remove_object(self, name: str) -> OperationResult:
        """Unstage the record called ``name``.

        A name that is not staged is a no-op: staging and the pending
        counter are left untouched and a failed result is returned.

        Args:
            name: Object name

        Returns:
            Result with the removed value as payload on success
        """
        index = self._index_of(name)
        if index is None:
            logger.debug("Nothing to remove for %s on branch %s", name, self._name)
            return self._result(False, f"Object {name} is not committed.", Receiver.REPOSITORY)

        removed = self._staging.pop(index)
        self._pending_changes += 1
        logger.debug("Staged removal of %s on branch %s", name, self._name)
        return self._result(
            True, f"Added {name} for removal.", Receiver.REPOSITORY, removed.value
        )

    # ---- lookups ----

    def get(self, name: str) -> OperationResult:
        """Look up ``name`` in the head commit (never in staging)."""
        record = self._head.find(name) if self._head is not None else None
        if record is None:
            return self._result(False, f"Object {name} is not committed.", Receiver.BRANCH)
        return self._result(True, f"Found object {name}.", Receiver.BRANCH, record.value)

    def head(self) -> OperationResult:
        """Report the head commit's message."""
        if self._head is None:
            return self._result(False, self._no_commits_message(), Receiver.BRANCH)
        return self._result(True, self._head.message, Receiver.BRANCH, self._head.message)

    def log(self) -> OperationResult:
        """Render the history, most recent commit first.

        Returns:
            Result whose message holds the rendered log and whose payload is
            a list of ``{"hash", "date", "message"}`` dictionaries
        """
        if self._history.is_empty():
            return self._result(False, self._no_commits_message(), Receiver.BRANCH)

        entries = [commit.summary() for commit in reversed(self._history)]
        message = LOG_ENTRY_SEPARATOR.join(LOG_ENTRY_FORMAT.format(**entry) for entry in entries)
        return self._result(True, message, Receiver.BRANCH, entries)

    # ---- commits ----

    def commit(self, message: str) -> OperationResult:
        """Freeze the staging set into a new commit.

        Args:
            message: Commit message

        Returns:
            Failed result if nothing is pending, otherwise a successful
            result whose payload is None
        """
        if self._pending_changes == 0:
            return self._result(
                False, "Nothing to commit, working directory clean.", Receiver.REPOSITORY
            )

        timestamp = self._clock() if self._clock is not None else None
        new_commit = Commit.create(message, self._staging, timestamp=timestamp)
        self._history.append(new_commit)
        changed = self._pending_changes

        self._head = new_commit
        self._staging = self._seed_staging(new_commit)
        self._pending_changes = 0
        logger.debug(
            "Committed %s on branch %s (%d changes)", new_commit.hash[:7], self._name, changed
        )
        return self._result(
            True, f"{message}\n\t{changed} objects changed", Receiver.REPOSITORY
        )

    def checkout_commit(self, commit_hash: str) -> OperationResult:
        """Move head to the commit identified by ``commit_hash``.

        Staging is reset to a copy of that commit's objects and the pending
        counter is cleared.

        Args:
            commit_hash: Commit identity

        Returns:
            Result with the target Commit as payload on success
        """
        target = self._history.find(commit_hash)
        if target is None:
            return self._result(
                False, f"Commit {commit_hash} does not exist.", Receiver.REPOSITORY
            )

        self._head = target
        self._staging = self._seed_staging(target)
        self._pending_changes = 0
        logger.debug("Branch %s HEAD is now at %s", self._name, commit_hash[:7])
        return self._result(
            True, f"HEAD is now at {commit_hash}.", Receiver.REPOSITORY, target
        )

    # ---- helpers ----

    def _index_of(self, name: str) -> Optional[int]:
        for index, record in enumerate(self._staging):
            if record.name == name:
                return index
        return None

    @staticmethod
    def _seed_staging(commit: Optional[Commit]) -> list:
        if commit is None:
            return []
        return copy_records(commit.objects)

    def _no_commits_message(self) -> str:
        return f"Branch {self._name} does not have any commits yet."

    def _result(
        self,
        success: bool,
        message: str,
        receiver: Receiver,
        payload: Any = None,
    ) -> OperationResult:
        return OperationResult(
            success,
            message,
            receiver,
            branch=self,
            repository=self._repository,
            payload=payload,
        )

    def __repr__(self) -> str:
        return f"Branch(name={self._name!r}, commits={len(self._history)})"
