"""End-to-end scenarios over the public Repository API."""

import random

from memvcs import Repository


class TestFirstCommitAndFork:
    """Commit on master, fork a feature branch and read inherited state."""

    def test_scenario(self, repo: Repository) -> None:
        added = repo.add("x", 1)
        assert added.is_success()
        assert added.payload == 1

        committed = repo.commit("first")
        assert committed.is_success()
        assert repo.current_branch.pending_changes == 0

        log = repo.log()
        assert log.is_success()
        assert [entry["message"] for entry in log.payload] == ["first"]

        assert repo.create("feature").is_success()
        assert repo.checkout_branch("feature").is_success()

        inherited = repo.get("x")
        assert inherited.is_success()
        assert inherited.payload == 1


class TestRemoveOnFreshBranch:
    """Removing an unstaged object from a fresh branch is a clean failure."""

    def test_scenario(self, repo: Repository) -> None:
        repo.create("fresh")
        repo.checkout_branch("fresh")

        result = repo.remove_object("missing")

        assert result.is_error()
        assert "not committed" in result.message
        assert repo.current_branch.staging == ()


class TestPendingChangeCounting:
    """The pending counter tracks every successful staging mutation."""

    def test_random_sequence(self, repo: Repository) -> None:
        rng = random.Random(1234)
        names = ["a", "b", "c", "d"]
        expected = 0

        for _ in range(200):
            name = rng.choice(names)
            if rng.random() < 0.6:
                repo.add(name, rng.randint(0, 10))
                expected += 1
            elif repo.remove_object(name).is_success():
                expected += 1
            assert repo.current_branch.pending_changes == expected

        assert repo.commit("batch").is_success() == (expected > 0)
        assert repo.current_branch.pending_changes == 0
        assert repo.commit("again").is_error()


class TestCheckoutRestoresSnapshots:
    """Checking out any commit restores exactly the values it recorded."""

    def test_every_commit(self, repo: Repository) -> None:
        snapshots = []
        for step in range(5):
            repo.add("counter", step)
            repo.add(f"item{step}", {"step": step})
            repo.commit(f"step {step}")
            snapshots.append(
                (repo.current_branch.current.hash, {r.name: r.value for r in repo.current_branch.staging})
            )

        for commit_hash, values in snapshots:
            assert repo.checkout_commit(commit_hash).is_success()
            for name, value in values.items():
                assert repo.get(name).payload == value
            assert repo.get(f"item{len(values) - 1}").is_error()


class TestActiveBranchProtection:
    """The active branch can never be removed."""

    def test_with_many_branches(self, repo: Repository) -> None:
        for name in ("a", "b", "c"):
            repo.create(name)

        for name in ("master", "a", "b", "c"):
            repo.checkout_branch(name)
            assert repo.remove_branch(name).is_error()
            assert name in repo.list().payload


class TestFluentSession:
    """A whole session expressed as a single chain."""

    def test_chain(self) -> None:
        result = (
            Repository.init()
            .add("config", {"debug": False})
            .commit("initial config")
            .create("experiment")
            .checkout_branch("experiment")
            .add("config", {"debug": True})
            .commit("enable debug")
            .get("config")
        )

        assert result.is_success()
        assert result.payload == {"debug": True}
