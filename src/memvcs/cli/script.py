"""Line-oriented command language over a Repository.

Each line holds one command, split with shell-like quoting. Blank lines and
lines starting with ``#`` are skipped. Supported commands::

    add NAME VALUE          stage a value (VALUE parsed as JSON if possible)
    remove NAME             unstage an object
    get NAME                print an object's value from the head commit
    commit MESSAGE...       commit staged changes and print the short hash
    checkout HASH           move head to a commit
    head                    show the head commit message
    log                     show the history, newest first
    status                  show branch, head and staged objects
    branch list
    branch create NAME
    branch checkout NAME
    branch remove NAME
"""

import json
import shlex
from typing import Any, Callable, Dict, List, Optional

from memvcs.constants import COMMENT_PREFIX, SHORT_HASH_LENGTH
from memvcs.core import OperationResult, Receiver, Repository


class ScriptError(Exception):
    """Exception raised for malformed or unknown script commands."""


def parse_value(raw: str) -> Any:
    """Parse a command argument as a JSON literal, falling back to the raw string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def format_value(value: Any) -> str:
    """Render a value as JSON, falling back to repr for non-JSON values."""
    return json.dumps(value, default=repr)


def tokenize(line: str) -> List[str]:
    """Split a script line into tokens.

    Raises:
        ScriptError: If the quoting is unbalanced
    """
    stripped = line.strip()
    if not stripped or stripped.startswith(COMMENT_PREFIX):
        return []
    try:
        return shlex.split(stripped)
    except ValueError as e:
        raise ScriptError(f"Cannot parse line {line!r}: {e}") from e


class ScriptRunner:
    """Execute script commands against a single repository.

    Attributes:
        repository: Repository the commands act on
    """

    def __init__(self, repository: Optional[Repository] = None) -> None:
        self.repository = repository if repository is not None else Repository()
        self._commands: Dict[str, Callable[[List[str]], OperationResult]] = {
            "add": self._add,
            "remove": self._remove,
            "get": self._get,
            "commit": self._commit,
            "checkout": self._checkout,
            "head": self._head,
            "log": self._log,
            "status": self._status,
            "branch": self._branch,
        }

    @property
    def commands(self) -> List[str]:
        return sorted(self._commands)

    def execute(self, line: str) -> Optional[OperationResult]:
        """Execute one script line.

        Args:
            line: Raw script line

        Returns:
            The command's result, or None for blank and comment lines

        Raises:
            ScriptError: If the command is unknown or malformed
        """
        tokens = tokenize(line)
        if not tokens:
            return None

        command, args = tokens[0], tokens[1:]
        handler = self._commands.get(command)
        if handler is None:
            raise ScriptError(f"Unknown command: {command}")
        return handler(args)

    # ---- handlers ----

    def _add(self, args: List[str]) -> OperationResult:
        name, value = _expect(args, 2, "add NAME VALUE")
        return self.repository.add(name, parse_value(value))

    def _remove(self, args: List[str]) -> OperationResult:
        (name,) = _expect(args, 1, "remove NAME")
        return self.repository.remove_object(name)

    def _get(self, args: List[str]) -> OperationResult:
        (name,) = _expect(args, 1, "get NAME")
        result = self.repository.get(name)
        if result.success:
            result.message = f"{name} = {format_value(result.payload)}"
        return result

    def _commit(self, args: List[str]) -> OperationResult:
        if not args:
            raise ScriptError("Usage: commit MESSAGE...")
        result = self.repository.commit(" ".join(args))
        if result.success:
            head = self.repository.current_branch.current
            short_hash = head.hash[:SHORT_HASH_LENGTH]
            result.message = f"[{self.repository.name} {short_hash}] {result.message}"
        return result

    def _checkout(self, args: List[str]) -> OperationResult:
        (commit_hash,) = _expect(args, 1, "checkout HASH")
        return self.repository.checkout_commit(commit_hash)

    def _head(self, args: List[str]) -> OperationResult:
        _expect(args, 0, "head")
        return self.repository.head()

    def _log(self, args: List[str]) -> OperationResult:
        _expect(args, 0, "log")
        return self.repository.log()

    def _status(self, args: List[str]) -> OperationResult:
        _expect(args, 0, "status")
        branch = self.repository.current_branch
        head = branch.current
        staged = [record.name for record in branch.staging]

        lines = [f"On branch {branch.name}"]
        if head is None:
            lines.append("No commits yet")
        elif branch.is_detached:
            lines.append(f"HEAD detached at {head.hash[:SHORT_HASH_LENGTH]}")
        else:
            lines.append(f"HEAD at {head.hash[:SHORT_HASH_LENGTH]}")
        lines.append(f"{branch.pending_changes} pending change(s)")
        lines.append("Staged: " + (", ".join(staged) if staged else "(none)"))

        payload = {
            "branch": branch.name,
            "head": head.hash if head is not None else None,
            "detached": branch.is_detached,
            "pending_changes": branch.pending_changes,
            "staged": staged,
        }
        return OperationResult(
            True,
            "\n".join(lines),
            Receiver.BRANCH,
            branch=branch,
            repository=self.repository,
            payload=payload,
        )

    def _branch(self, args: List[str]) -> OperationResult:
        if not args:
            raise ScriptError("Usage: branch list|create|checkout|remove [NAME]")

        manager = self.repository.branch()
        action, rest = args[0], args[1:]
        if action == "list":
            _expect(rest, 0, "branch list")
            return manager.list()
        if action in ("create", "checkout", "remove"):
            (branch_name,) = _expect(rest, 1, f"branch {action} NAME")
            return getattr(manager, action)(branch_name)
        raise ScriptError(f"Unknown branch command: {action}")


def _expect(args: List[str], count: int, usage: str) -> List[str]:
    if len(args) != count:
        raise ScriptError(f"Usage: {usage}")
    return args
