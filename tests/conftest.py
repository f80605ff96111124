"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from memvcs.core import Repository


class FakeClock:
    """Deterministic clock that advances one minute per call."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting at Mon Jan 15 10:30 2024 UTC."""
    return FakeClock(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))


@pytest.fixture
def repo(clock: FakeClock) -> Repository:
    """Fresh repository with a deterministic clock."""
    return Repository(clock=clock)


@pytest.fixture
def repo_with_commits(repo: Repository) -> Repository:
    """Repository whose master branch has two commits.

    - "first":  x = 1
    - "second": x = 2, y = "two"
    """
    repo.add("x", 1)
    repo.commit("first")
    repo.add("x", 2)
    repo.add("y", "two")
    repo.commit("second")
    return repo
