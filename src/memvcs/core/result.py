"""Uniform result type returned by every engine command.

A result reports success, a human-readable message and an optional payload.
It also carries a tagged reference to the collaborator that receives any
further chained command, so calls can be chained fluently::

    repo.add("x", 1).add("y", 2).commit("first").log()

Chaining is unconditional forwarding: a command chained on a failed result
still runs. Check each result if correctness depends on an earlier step.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from memvcs.core.branch import Branch
    from memvcs.core.repository import BranchManager, Repository


class Receiver(Enum):
    """Which collaborator receives commands chained on a result."""

    REPOSITORY = "repository"
    BRANCH = "branch"


class OperationResult:
    """Outcome of a single engine command.

    Attributes:
        success: Whether the command succeeded
        message: Human-readable description of the outcome
        payload: Optional value produced by the command
        receiver: Collaborator that receives chained content commands
    """

    __slots__ = ("success", "message", "payload", "receiver", "_branch", "_repository")

    def __init__(
        self,
        success: bool,
        message: str,
        receiver: Receiver,
        branch: "Branch",
        repository: Optional["Repository"] = None,
        payload: Any = None,
    ) -> None:
        """Initialize OperationResult.

        Args:
            success: Whether the command succeeded
            message: Outcome description
            receiver: Tag selecting the chaining target
            branch: Branch that handled (or was active for) the command
            repository: Owning repository, if any
            payload: Value produced by the command
        """
        self.success = bool(success)
        self.message = message
        self.payload = payload
        self.receiver = receiver
        self._branch = branch
        self._repository = repository

    def is_success(self) -> bool:
        return self.success

    def is_error(self) -> bool:
        return not self.success

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        status = "SUCCESS" if self.success else "ERROR"
        return f"OperationResult(status={status}, message={self.message!r})"

    # ---- chaining targets ----

    @property
    def target(self):
        """The Repository or Branch that receives chained content commands."""
        if self.receiver is Receiver.REPOSITORY and self._repository is not None:
            return self._repository
        return self._branch

    def _owner(self) -> "Repository":
        if self._repository is None:
            raise RuntimeError(
                f"Branch {self._branch.name} is not attached to a repository"
            )
        return self._repository

    # ---- content commands ----

    def get(self, name: str) -> "OperationResult":
        return self.target.get(name)

    def add(self, name: str, value: Any) -> "OperationResult":
        return self.target.add(name, value)

    def remove_object(self, name: str) -> "OperationResult":
        return self.target.remove_object(name)

    def commit(self, message: str) -> "OperationResult":
        return self.target.commit(message)

    def checkout_commit(self, commit_hash: str) -> "OperationResult":
        return self.target.checkout_commit(commit_hash)

    def head(self) -> "OperationResult":
        return self.target.head()

    def log(self) -> "OperationResult":
        return self.target.log()

    def checkout(self, commit_hash: str) -> "OperationResult":
        """Move head to a commit (default-context ``checkout``)."""
        return self.target.checkout_commit(commit_hash)

    def remove(self, name: str) -> "OperationResult":
        """Unstage an object (default-context ``remove``)."""
        return self.target.remove_object(name)

    # ---- branch-level commands ----

    def create(self, branch_name: str) -> "OperationResult":
        return self._owner().create(branch_name)

    def checkout_branch(self, branch_name: str) -> "OperationResult":
        return self._owner().checkout_branch(branch_name)

    def remove_branch(self, branch_name: str) -> "OperationResult":
        return self._owner().remove_branch(branch_name)

    def list(self) -> "OperationResult":
        return self._owner().list()

    def branch(self) -> "BranchManager":
        return self._owner().branch()
