"""
Tests for GitHistoryResolver.

Most tests replace subprocess.run so no repository is needed; one test
builds a throwaway repository when git is installed.
"""

import os
import shutil
import subprocess
from datetime import datetime, timedelta, timezone
from pathlib import Path, PurePosixPath

import pytest

from results_builder.exceptions import HistoryLookupFailure
from results_builder.history.git_history import FixedHistoryResolver, GitHistoryResolver

NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class FakeGit:
    """Stand-in for subprocess.run keyed by the path passed to `git log`."""

    def __init__(self, outputs: dict[str, str | Exception]):
        self.outputs = outputs
        self.calls = list[list[str]]()

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        outcome = self.outputs.get(cmd[-1], "")
        if isinstance(outcome, Exception):
            raise outcome
        return subprocess.CompletedProcess(cmd, 0, stdout=outcome, stderr="")

    @property
    def paths(self) -> list[str]:
        return [cmd[-1] for cmd in self.calls]


@pytest.fixture
def fake_git(monkeypatch):
    def install(outputs: dict[str, str | Exception]) -> FakeGit:
        fake = FakeGit(outputs)
        monkeypatch.setattr("results_builder.history.git_history.subprocess.run", fake)
        return fake
    return install


def make_resolver(tmp_path: Path) -> GitHistoryResolver:
    return GitHistoryResolver(tmp_path, now=NOW)


class TestGitHistoryResolver:
    def test_date_after_cutover_is_used_directly(self, fake_git, tmp_path):
        fake = fake_git({
            "results/2021-04-01_regional_x_b.yaml":
                "2021-04-05 10:00:00 -0500\n2021-05-01 09:00:00 -0500\n",
        })

        added = make_resolver(tmp_path).resolve_added_date("2021-04-01_regional_x_b.yaml")

        assert added == datetime(2021, 4, 5, 10, 0, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert fake.paths == ["results/2021-04-01_regional_x_b.yaml"]

    def test_date_before_cutover_rechecks_legacy_path(self, fake_git, tmp_path):
        fake = fake_git({
            "results/2019-04-01_regional_x_b.yaml": "2020-07-01 12:00:00 +0000\n",
            "data/2019-04-01_regional_x_b.yaml": "2019-04-10 08:30:00 +0000\n",
        })

        added = make_resolver(tmp_path).resolve_added_date("2019-04-01_regional_x_b.yaml")

        assert added == datetime(2019, 4, 10, 8, 30, 0, tzinfo=timezone.utc)
        assert fake.paths == [
            "results/2019-04-01_regional_x_b.yaml",
            "data/2019-04-01_regional_x_b.yaml",
        ]

    def test_cutover_day_itself_does_not_recheck(self, fake_git, tmp_path):
        fake = fake_git({"results/2020-02-01_state_c.yaml": "2020-07-08 09:00:00 +0000\n"})

        added = make_resolver(tmp_path).resolve_added_date("2020-02-01_state_c.yaml")

        assert added.date().isoformat() == "2020-07-08"
        assert len(fake.calls) == 1

    def test_missing_legacy_history_keeps_primary_date(self, fake_git, tmp_path):
        fake_git({"results/2019-04-01_regional_x_b.yaml": "2020-06-30 12:00:00 +0000\n"})

        added = make_resolver(tmp_path).resolve_added_date("2019-04-01_regional_x_b.yaml")

        assert added == datetime(2020, 6, 30, 12, 0, 0, tzinfo=timezone.utc)

    def test_no_history_falls_back_to_now(self, fake_git, tmp_path, capsys):
        fake_git({})

        added = make_resolver(tmp_path).resolve_added_date("2024-01-10_new_b.yaml")

        assert added == NOW
        assert "not found in git tree" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "error",
        [
            FileNotFoundError("git"),
            subprocess.TimeoutExpired(cmd="git", timeout=30),
            subprocess.CalledProcessError(128, "git", stderr="fatal: not a git repository"),
        ],
    )
    def test_git_failures_fall_back_to_now(self, fake_git, tmp_path, error):
        fake_git({"results/2021-04-01_regional_x_b.yaml": error})

        added = make_resolver(tmp_path).resolve_added_date("2021-04-01_regional_x_b.yaml")

        assert added == NOW

    def test_warning_names_the_actual_failure(self, fake_git, tmp_path, capsys):
        fake_git({"results/2021-04-01_regional_x_b.yaml": subprocess.TimeoutExpired(cmd="git", timeout=30)})

        make_resolver(tmp_path).resolve_added_date("2021-04-01_regional_x_b.yaml")

        output = capsys.readouterr().out
        assert "timed out" in output
        assert "not found in git tree" not in output

    def test_date_from_git_raises_on_unparsable_output(self, fake_git, tmp_path):
        fake_git({"results/x.yaml": "yesterday\n"})

        with pytest.raises(HistoryLookupFailure) as exc_info:
            make_resolver(tmp_path).date_from_git(PurePosixPath("results/x.yaml"))

        assert str(exc_info.value.path) == "results/x.yaml"

    def test_git_command_shape(self, fake_git, tmp_path):
        fake = fake_git({})

        make_resolver(tmp_path).resolve_added_date("2021-04-01_regional_x_b.yaml")

        assert fake.calls[0] == [
            "git", "log", "--format=%ai", "--reverse", "--", "results/2021-04-01_regional_x_b.yaml",
        ]

    def test_now_is_captured_once(self, fake_git, tmp_path):
        fake_git({})
        resolver = GitHistoryResolver(tmp_path)

        first = resolver.resolve_added_date("2021-04-01_a_b.yaml")
        second = resolver.resolve_added_date("2021-04-02_a_b.yaml")

        assert first == second == resolver.now


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
class TestGitHistoryResolverWithRepository:
    def _git(self, repo: Path, *args: str, when: str | None = None) -> None:
        env = dict(os.environ)
        env.update({
            "GIT_AUTHOR_NAME": "Results",
            "GIT_AUTHOR_EMAIL": "results@example.com",
            "GIT_COMMITTER_NAME": "Results",
            "GIT_COMMITTER_EMAIL": "results@example.com",
        })
        if when is not None:
            env["GIT_AUTHOR_DATE"] = when
            env["GIT_COMMITTER_DATE"] = when
        subprocess.run(["git", *args], cwd=repo, env=env, check=True, capture_output=True)

    def test_reads_first_commit_date(self, tmp_path):
        # Arrange
        self._git(tmp_path, "init", "-q")
        results = tmp_path / "results"
        results.mkdir()
        result_file = results / "2021-04-01_regional_x_b.yaml"
        result_file.write_text("first\n")
        self._git(tmp_path, "add", ".")
        self._git(tmp_path, "commit", "-q", "-m", "add", when="2021-04-05T10:00:00+00:00")
        result_file.write_text("second\n")
        self._git(tmp_path, "commit", "-q", "-am", "edit", when="2021-06-01T10:00:00+00:00")

        # Act
        added = GitHistoryResolver(tmp_path, now=NOW).resolve_added_date(result_file.name)

        # Assert
        assert added == datetime(2021, 4, 5, 10, 0, 0, tzinfo=timezone.utc)

    def test_untracked_file_falls_back_to_now(self, tmp_path):
        self._git(tmp_path, "init", "-q")

        added = GitHistoryResolver(tmp_path, now=NOW).resolve_added_date("2021-04-01_regional_x_b.yaml")

        assert added == NOW


class TestFixedHistoryResolver:
    def test_returns_same_time_for_every_file(self):
        resolver = FixedHistoryResolver(now=NOW)

        assert resolver.resolve_added_date("a") == NOW
        assert resolver.resolve_added_date("b") == NOW
