"""Repository: branch lifecycle and command routing.

The repository owns a set of uniquely named branches and tracks which one
is active. Branch-management commands are handled here; content commands
are delegated to the active branch.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple

from memvcs.constants import ACTIVE_BRANCH_MARKER, DEFAULT_BRANCH, INACTIVE_BRANCH_MARKER
from memvcs.core.branch import Branch
from memvcs.core.result import OperationResult, Receiver

logger = logging.getLogger(__name__)


class Repository:
    """In-memory repository of branches.

    A new repository has a single empty branch named ``default_branch``.

    Attributes:
        current_branch: The active Branch
        branches: All branches, in creation order

    Example:
        >>> repo = Repository()
        >>> repo.add("x", 1).commit("first").success
        True
        >>> repo.get("x").payload
        1
    """

    def __init__(
        self,
        default_branch: str = DEFAULT_BRANCH,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Initialize Repository.

        Args:
            default_branch: Name of the initial branch
            clock: Callable returning the current aware datetime, shared
                with every branch (defaults to the local wall clock)
        """
        self._clock = clock
        initial = Branch(default_branch, repository=self, clock=clock)
        self._branches: Dict[str, Branch] = {initial.name: initial}
        self._active = initial

    @classmethod
    def init(cls, setup: Optional[Callable[["Repository"], Any]] = None, **kwargs: Any) -> Any:
        """Create a repository and optionally run ``setup`` against it.

        Args:
            setup: Callable receiving the new repository
            **kwargs: Passed to the constructor

        Returns:
            The value ``setup`` returns, or the repository when no setup
            callable is given
        """
        repository = cls(**kwargs)
        if setup is None:
            return repository
        return setup(repository)

    @property
    def current_branch(self) -> Branch:
        return self._active

    @property
    def name(self) -> str:
        """Name of the active branch."""
        return self._active.name

    @property
    def branches(self) -> Tuple[Branch, ...]:
        return tuple(self._branches.values())

    def branch(self) -> "BranchManager":
        """Return the branch-management view of this repository."""
        return BranchManager(self)

    # ---- branch management ----

    def create(self, branch_name: str) -> OperationResult:
        """Fork the active branch into a new branch called ``branch_name``.

        The new branch shares the active branch's commits so far; later
        commits on either branch diverge independently.
        """
        if branch_name in self._branches:
            return self._result(False, f"Branch {branch_name} already exists.")

        self._branches[branch_name] = self._active.fork(branch_name)
        logger.debug("Created branch %s from %s", branch_name, self._active.name)
        return self._result(True, f"Created branch {branch_name}.")

    def checkout_branch(self, branch_name: str) -> OperationResult:
        """Make ``branch_name`` the active branch."""
        target = self._branches.get(branch_name)
        if target is None:
            return self._result(False, f"Branch {branch_name} does not exist.")

        self._active = target
        logger.debug("Switched to branch %s", branch_name)
        return self._result(True, f"Switched to branch {branch_name}.")

    def remove_branch(self, branch_name: str) -> OperationResult:
        """Delete ``branch_name`` unless it is the active branch."""
        target = self._branches.get(branch_name)
        if target is None:
            return self._result(False, f"Branch {branch_name} does not exist.")
        if target is self._active:
            return self._result(False, "Cannot remove current branch.")

        del self._branches[branch_name]
        logger.debug("Removed branch %s", branch_name)
        return self._result(True, f"Removed branch {branch_name}.")

    def list(self) -> OperationResult:
        """List branch names in lexicographic order, marking the active one.

        Returns:
            Result whose message has one line per branch and whose payload
            is the sorted list of names
        """
        names = sorted(self._branches)
        lines = []
        for branch_name in names:
            marker = ACTIVE_BRANCH_MARKER if branch_name == self._active.name else INACTIVE_BRANCH_MARKER
            lines.append(f"{marker}{branch_name}\n")
        return self._result(True, "".join(lines), payload=names)

    # ---- content commands, delegated to the active branch ----

    def get(self, name: str) -> OperationResult:
        return self._active.get(name)

    def add(self, name: str, value: Any) -> OperationResult:
        return self._active.add(name, value)

    def remove_object(self, name: str) -> OperationResult:
        return self._active.remove_object(name)

    def commit(self, message: str) -> OperationResult:
        return self._active.commit(message)

    def checkout_commit(self, commit_hash: str) -> OperationResult:
        return self._active.checkout_commit(commit_hash)

    def head(self) -> OperationResult:
        return self._active.head()

    def log(self) -> OperationResult:
        return self._active.log()

    def checkout(self, commit_hash: str) -> OperationResult:
        """Move the active branch's head to a commit."""
        return self._active.checkout_commit(commit_hash)

    def remove(self, name: str) -> OperationResult:
        """Unstage an object on the active branch."""
        return self._active.remove_object(name)

    def _result(self, success: bool, message: str, payload: Any = None) -> OperationResult:
        return OperationResult(
            success,
            message,
            Receiver.REPOSITORY,
            branch=self._active,
            repository=self,
            payload=payload,
        )

    def __repr__(self) -> str:
        return f"Repository(active={self._active.name!r}, branches={len(self._branches)})"


class BranchManager:
    """Branch-management view of a repository.

    In this context ``checkout`` switches the active branch and ``remove``
    deletes a branch, instead of moving head to a commit and unstaging an
    object.
    """

    def __init__(self, repository: Repository) -> None:
        self._repository = repository

    def create(self, branch_name: str) -> OperationResult:
        return self._repository.create(branch_name)

    def checkout(self, branch_name: str) -> OperationResult:
        return self._repository.checkout_branch(branch_name)

    def remove(self, branch_name: str) -> OperationResult:
        return self._repository.remove_branch(branch_name)

    def list(self) -> OperationResult:
        return self._repository.list()
