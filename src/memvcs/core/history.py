"""Append-only commit history shared between forked branches.

A forked history keeps the commits it inherited as an immutable prefix and
owns every commit appended after the fork. Branches forked from the same
history therefore share the same Commit instances up to the fork point and
diverge independently afterwards.
"""

from typing import Iterator, Optional, Sequence, Tuple

from memvcs.core.models import Commit


class History:
    """Ordered, append-only log of commits.

    Attributes:
        inherited: Commits shared with the history this one was forked from
    """

    def __init__(self, inherited: Sequence[Commit] = ()) -> None:
        self._inherited: Tuple[Commit, ...] = tuple(inherited)
        self._own: list = []

    @property
    def inherited(self) -> Tuple[Commit, ...]:
        return self._inherited

    @property
    def commits(self) -> Tuple[Commit, ...]:
        """All commits, oldest first."""
        return self._inherited + tuple(self._own)

    def append(self, commit: Commit) -> None:
        """Append a commit owned by this history."""
        self._own.append(commit)

    def fork(self) -> "History":
        """Return a new history sharing every current commit as its prefix."""
        return History(self.commits)

    def latest(self) -> Optional[Commit]:
        """Return the most recent commit, or None if the history is empty."""
        if self._own:
            return self._own[-1]
        if self._inherited:
            return self._inherited[-1]
        return None

    def find(self, commit_hash: str) -> Optional[Commit]:
        """Return the first commit whose identity equals ``commit_hash``."""
        for commit in self:
            if commit.hash == commit_hash:
                return commit
        return None

    def is_empty(self) -> bool:
        return not self._inherited and not self._own

    def __iter__(self) -> Iterator[Commit]:
        yield from self._inherited
        yield from self._own

    def __reversed__(self) -> Iterator[Commit]:
        yield from reversed(self._own)
        yield from reversed(self._inherited)

    def __len__(self) -> int:
        return len(self._inherited) + len(self._own)

    def __contains__(self, commit: object) -> bool:
        return any(entry is commit for entry in self)
