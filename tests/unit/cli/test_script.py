"""Unit tests for the script command language."""

import pytest

from memvcs.cli.script import ScriptError, ScriptRunner, parse_value, tokenize
from memvcs.core import Repository


@pytest.fixture
def runner(repo: Repository) -> ScriptRunner:
    return ScriptRunner(repo)


class TestParsing:
    """Test tokenizing and value parsing."""

    def test_blank_and_comment_lines(self) -> None:
        assert tokenize("") == []
        assert tokenize("   ") == []
        assert tokenize("# a comment") == []

    def test_quoted_arguments(self) -> None:
        assert tokenize('add greeting "hello world"') == ["add", "greeting", "hello world"]

    def test_unbalanced_quotes(self) -> None:
        with pytest.raises(ScriptError, match="Cannot parse line"):
            tokenize('commit "oops')

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1", 1),
            ("2.5", 2.5),
            ("true", True),
            ("null", None),
            ('{"a": [1, 2]}', {"a": [1, 2]}),
            ("plain", "plain"),
        ],
    )
    def test_parse_value(self, raw: str, expected: object) -> None:
        assert parse_value(raw) == expected


class TestExecute:
    """Test executing commands."""

    def test_skips_blank(self, runner: ScriptRunner) -> None:
        assert runner.execute("") is None

    def test_add_commit_get(self, runner: ScriptRunner) -> None:
        assert runner.execute("add x 1").payload == 1
        assert runner.execute("commit first commit").is_success()
        assert runner.execute("get x").payload == 1
        assert runner.execute("head").payload == "first commit"

    def test_get_renders_value(self, runner: ScriptRunner) -> None:
        """A successful get shows the committed value as JSON."""
        runner.execute("add config '{\"debug\": true}'")
        runner.execute("commit first")

        result = runner.execute("get config")

        assert result.message == 'config = {"debug": true}'
        assert result.payload == {"debug": True}

    def test_get_failure_keeps_engine_message(self, runner: ScriptRunner) -> None:
        result = runner.execute("get missing")

        assert result.is_error()
        assert result.message == "Object missing is not committed."

    def test_commit_shows_short_hash(self, runner: ScriptRunner, repo: Repository) -> None:
        runner.execute("add x 1")

        result = runner.execute("commit first")

        short_hash = repo.current_branch.current.hash[:7]
        assert result.message == f"[master {short_hash}] first\n\t1 objects changed"

    def test_commit_failure_has_no_hash(self, runner: ScriptRunner) -> None:
        result = runner.execute("commit nothing")

        assert result.message == "Nothing to commit, working directory clean."

    def test_remove(self, runner: ScriptRunner) -> None:
        runner.execute("add x 1")

        assert runner.execute("remove x").payload == 1
        assert runner.execute("remove x").is_error()

    def test_checkout(self, runner: ScriptRunner, repo: Repository) -> None:
        runner.execute("add x 1")
        runner.execute("commit first")
        runner.execute("add x 2")
        runner.execute("commit second")
        first_hash = repo.current_branch.history[0].hash

        assert runner.execute(f"checkout {first_hash}").is_success()
        assert runner.execute("get x").payload == 1

    def test_log(self, runner: ScriptRunner) -> None:
        assert runner.execute("log").is_error()
        runner.execute("add x 1")
        runner.execute("commit first")

        assert runner.execute("log").payload[0]["message"] == "first"

    def test_branch_commands(self, runner: ScriptRunner, repo: Repository) -> None:
        assert runner.execute("branch create feature").is_success()
        assert runner.execute("branch checkout feature").is_success()
        assert repo.name == "feature"
        assert runner.execute("branch remove master").is_success()
        assert runner.execute("branch list").payload == ["feature"]

    def test_status_empty(self, runner: ScriptRunner) -> None:
        result = runner.execute("status")

        assert result.is_success()
        assert "On branch master" in result.message
        assert "No commits yet" in result.message
        assert result.payload["head"] is None
        assert result.payload["staged"] == []

    def test_status_detached(self, runner: ScriptRunner, repo: Repository) -> None:
        runner.execute("add x 1")
        runner.execute("commit first")
        runner.execute("add y 2")
        runner.execute("commit second")
        first_hash = repo.current_branch.history[0].hash
        runner.execute(f"checkout {first_hash}")
        runner.execute("add z 3")

        result = runner.execute("status")

        assert f"HEAD detached at {first_hash[:7]}" in result.message
        assert result.payload["detached"] is True
        assert result.payload["pending_changes"] == 1
        assert result.payload["staged"] == ["x", "z"]


class TestScriptErrors:
    """Test malformed commands raise ScriptError."""

    @pytest.mark.parametrize(
        "line, match",
        [
            ("frobnicate", "Unknown command"),
            ("add x", "Usage: add NAME VALUE"),
            ("get", "Usage: get NAME"),
            ("commit", "Usage: commit"),
            ("head extra", "Usage: head"),
            ("branch", "Usage: branch"),
            ("branch rename a b", "Unknown branch command"),
            ("branch create", "Usage: branch create NAME"),
        ],
    )
    def test_errors(self, runner: ScriptRunner, line: str, match: str) -> None:
        with pytest.raises(ScriptError, match=match):
            runner.execute(line)

    def test_error_leaves_state(self, runner: ScriptRunner, repo: Repository) -> None:
        with pytest.raises(ScriptError):
            runner.execute("add x")

        assert repo.current_branch.pending_changes == 0

    def test_default_repository(self) -> None:
        assert ScriptRunner().repository.name == "master"

    def test_commands(self, runner: ScriptRunner) -> None:
        assert "branch" in runner.commands
        assert runner.commands == sorted(runner.commands)
